"""Tests for HouseholdDataStore."""

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from household_finance.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
    ValidationError,
)
from household_finance.models import (
    Budget,
    CostCategory,
    CostItem,
    CostPlan,
    IncomeFrequency,
    IncomeSource,
    Loan,
    Repayment,
    Transaction,
    TransactionCategory,
    TransactionType,
)
from household_finance.store.household import HouseholdDataStore


@pytest.fixture
def store() -> HouseholdDataStore:
    """Create a fresh store for each test."""
    return HouseholdDataStore()


@pytest.fixture
def stored_loan(store: HouseholdDataStore, sample_loan: Loan) -> Loan:
    return store.add_loan(sample_loan)


@pytest.fixture
def category(store: HouseholdDataStore, owner_id: str) -> TransactionCategory:
    return store.add_category(TransactionCategory(category_id="cat-001", owner_id=owner_id, name="Lebensmittel"))


def _transaction(owner_id: str, tid: str, booked: date, **kwargs) -> Transaction:
    return Transaction(
        transaction_id=tid,
        owner_id=owner_id,
        amount=Decimal("10"),
        description="Einkauf",
        transaction_type=TransactionType.EXPENSE,
        transaction_date=booked,
        **kwargs,
    )


class TestLoans:
    """Tests for loan storage."""

    def test_add_and_get(self, store: HouseholdDataStore, stored_loan: Loan, owner_id: str) -> None:
        assert store.get_loan(stored_loan.loan_id, owner_id) is stored_loan
        assert stored_loan.created_at is not None

    def test_add_strips_title_and_truncates_term(self, store: HouseholdDataStore, sample_loan: Loan) -> None:
        loan = store.add_loan(replace(sample_loan, title="  Auto  ", term_months=24.8))

        assert loan.title == "Auto"
        assert loan.term_months == 24

    def test_add_invalid_loan(self, store: HouseholdDataStore, sample_loan: Loan) -> None:
        with pytest.raises(ValidationError) as exc_info:
            store.add_loan(replace(sample_loan, title="", principal=Decimal("0")))

        assert set(exc_info.value.errors) == {"title", "principal"}
        assert store.loans.rows == {}

    def test_duplicate_id(self, store: HouseholdDataStore, stored_loan: Loan) -> None:
        with pytest.raises(InvalidEntityStateError):
            store.add_loan(replace(stored_loan))

    def test_owner_scoping(self, store: HouseholdDataStore, stored_loan: Loan, other_owner_id: str) -> None:
        with pytest.raises(EntityNotFoundError):
            store.get_loan(stored_loan.loan_id, other_owner_id)
        with pytest.raises(EntityNotFoundError):
            store.delete_loan(stored_loan.loan_id, other_owner_id)
        assert store.get_loans(other_owner_id) == []

    def test_newest_first(self, store: HouseholdDataStore, sample_loan: Loan, owner_id: str) -> None:
        store.add_loan(replace(sample_loan, loan_id="old", created_at=datetime(2023, 1, 1)))
        store.add_loan(replace(sample_loan, loan_id="new", created_at=datetime(2024, 1, 1)))

        assert [loan.loan_id for loan in store.get_loans(owner_id)] == ["new", "old"]

    def test_update(self, store: HouseholdDataStore, stored_loan: Loan, owner_id: str) -> None:
        updated = store.update_loan(stored_loan.loan_id, owner_id, interest_rate=Decimal("4.2"), term_months=48)

        assert updated.interest_rate == Decimal("4.2")
        assert updated.term_months == 48
        assert updated.updated_at is not None
        assert store.get_loan(stored_loan.loan_id, owner_id) is updated

    def test_update_rejects_invalid(self, store: HouseholdDataStore, stored_loan: Loan, owner_id: str) -> None:
        with pytest.raises(ValidationError):
            store.update_loan(stored_loan.loan_id, owner_id, term_months=0)

        assert store.get_loan(stored_loan.loan_id, owner_id).term_months == 36

    def test_update_cannot_change_owner(
        self, store: HouseholdDataStore, stored_loan: Loan, owner_id: str, other_owner_id: str
    ) -> None:
        with pytest.raises(InvalidEntityStateError):
            store.update_loan(stored_loan.loan_id, owner_id, owner_id=other_owner_id)

        assert store.get_loan(stored_loan.loan_id, owner_id).owner_id == owner_id

    def test_update_cannot_change_id(self, store: HouseholdDataStore, stored_loan: Loan, owner_id: str) -> None:
        with pytest.raises(InvalidEntityStateError):
            store.update_loan(stored_loan.loan_id, owner_id, loan_id="loan-other")

        assert "loan-other" not in store.loans.rows

    def test_update_unknown_field(self, store: HouseholdDataStore, stored_loan: Loan, owner_id: str) -> None:
        with pytest.raises(InvalidEntityStateError, match="princpal"):
            store.update_loan(stored_loan.loan_id, owner_id, princpal=Decimal("1"))

    def test_rejected_loan_left_untouched(self, store: HouseholdDataStore, sample_loan: Loan) -> None:
        draft = replace(sample_loan, title="  Auto  ", principal=Decimal("0"))

        with pytest.raises(ValidationError):
            store.add_loan(draft)

        assert draft.title == "  Auto  "


class TestRepayments:
    """Tests for repayment storage."""

    def test_add_requires_loan(self, store: HouseholdDataStore, make_repayment) -> None:
        with pytest.raises(ReferentialIntegrityError):
            store.add_repayment(make_repayment("100", date(2024, 1, 1)))

    def test_add_requires_same_owner(
        self, store: HouseholdDataStore, stored_loan: Loan, other_owner_id: str
    ) -> None:
        repayment = Repayment(
            repayment_id="rep-x",
            loan_id=stored_loan.loan_id,
            owner_id=other_owner_id,
            amount=Decimal("100"),
            payment_date=date(2024, 1, 1),
        )
        with pytest.raises(ReferentialIntegrityError):
            store.add_repayment(repayment)

    def test_add_validates(self, store: HouseholdDataStore, stored_loan: Loan, make_repayment) -> None:
        with pytest.raises(ValidationError) as exc_info:
            store.add_repayment(make_repayment("0", date(2024, 1, 1)))

        assert "amount" in exc_info.value.errors

    def test_sorted_by_date_desc(
        self, store: HouseholdDataStore, stored_loan: Loan, owner_id: str, make_repayment
    ) -> None:
        for day in (date(2024, 2, 1), date(2024, 4, 1), date(2024, 3, 1)):
            store.add_repayment(make_repayment("100", day))

        dates = [r.payment_date for r in store.get_loan_repayments(stored_loan.loan_id, owner_id)]
        assert dates == [date(2024, 4, 1), date(2024, 3, 1), date(2024, 2, 1)]

    def test_delete_repayment(
        self, store: HouseholdDataStore, stored_loan: Loan, owner_id: str, make_repayment
    ) -> None:
        repayment = store.add_repayment(make_repayment("100", date(2024, 2, 1)))
        store.delete_repayment(repayment.repayment_id, owner_id)

        assert store.get_loan_repayments(stored_loan.loan_id, owner_id) == []

    def test_delete_loan_cascades(
        self, store: HouseholdDataStore, stored_loan: Loan, owner_id: str, make_repayment
    ) -> None:
        store.add_repayment(make_repayment("100", date(2024, 2, 1)))
        store.add_repayment(make_repayment("100", date(2024, 3, 1)))

        store.delete_loan(stored_loan.loan_id, owner_id)

        assert store.repayments.rows == {}
        with pytest.raises(EntityNotFoundError):
            store.get_loan_repayments(stored_loan.loan_id, owner_id)


class TestTransactions:
    """Tests for categories and transactions."""

    def test_categories_sorted_by_name(self, store: HouseholdDataStore, owner_id: str) -> None:
        for cid, name in (("c1", "Miete"), ("c2", "auto"), ("c3", "Freizeit")):
            store.add_category(TransactionCategory(category_id=cid, owner_id=owner_id, name=name))

        assert [c.name for c in store.get_categories(owner_id)] == ["auto", "Freizeit", "Miete"]

    def test_unknown_category(self, store: HouseholdDataStore, owner_id: str) -> None:
        with pytest.raises(ReferentialIntegrityError):
            store.add_transaction(_transaction(owner_id, "t1", date(2024, 1, 1), category_id="missing"))

    def test_latest_first(self, store: HouseholdDataStore, owner_id: str) -> None:
        store.add_transaction(_transaction(owner_id, "t1", date(2024, 1, 1)))
        store.add_transaction(_transaction(owner_id, "t2", date(2024, 3, 1)))

        assert [t.transaction_id for t in store.get_transactions(owner_id)] == ["t2", "t1"]

    def test_delete_category_detaches_transactions(
        self, store: HouseholdDataStore, owner_id: str, category: TransactionCategory
    ) -> None:
        store.add_transaction(_transaction(owner_id, "t1", date(2024, 1, 1), category_id=category.category_id))

        store.delete_category(category.category_id, owner_id)

        assert store.get_transaction("t1", owner_id).category_id is None

    def test_update_transaction(self, store: HouseholdDataStore, owner_id: str, category: TransactionCategory) -> None:
        store.add_transaction(_transaction(owner_id, "t1", date(2024, 1, 1)))

        updated = store.update_transaction("t1", owner_id, category_id=category.category_id, amount=Decimal("12"))

        assert updated.category_id == category.category_id
        assert store.get_transaction("t1", owner_id).amount == Decimal("12")

    def test_update_checks_references(self, store: HouseholdDataStore, owner_id: str) -> None:
        store.add_transaction(_transaction(owner_id, "t1", date(2024, 1, 1)))

        with pytest.raises(ReferentialIntegrityError):
            store.update_transaction("t1", owner_id, budget_id="missing")


class TestBudgets:
    """Tests for budget storage."""

    def test_reset_day_clamped(self, store: HouseholdDataStore, owner_id: str) -> None:
        budget = store.add_budget(Budget(budget_id="b1", owner_id=owner_id, name="Essen", amount=Decimal("300"), reset_day=45))

        assert budget.reset_day == 31
        assert store.update_budget("b1", owner_id, reset_day=-2).reset_day == 1
        assert store.update_budget("b1", owner_id, reset_day=0).reset_day is None

    def test_update_cannot_change_owner(self, store: HouseholdDataStore, owner_id: str, other_owner_id: str) -> None:
        store.add_budget(Budget(budget_id="b1", owner_id=owner_id, name="Essen", amount=Decimal("300")))

        with pytest.raises(InvalidEntityStateError):
            store.update_budget("b1", owner_id, owner_id=other_owner_id)
        with pytest.raises(InvalidEntityStateError):
            store.update_budget("b1", owner_id, budget_id="b2")

    def test_delete_budget_detaches_transactions(self, store: HouseholdDataStore, owner_id: str) -> None:
        store.add_budget(Budget(budget_id="b1", owner_id=owner_id, name="Essen", amount=Decimal("300")))
        store.add_transaction(_transaction(owner_id, "t1", date(2024, 1, 1), budget_id="b1"))

        store.delete_budget("b1", owner_id)

        assert store.get_budgets(owner_id) == []
        assert store.get_transaction("t1", owner_id).budget_id is None


class TestCostPlans:
    """Tests for cost plans, categories and items."""

    @pytest.fixture
    def plan(self, store: HouseholdDataStore, owner_id: str) -> CostPlan:
        store.add_cost_plan(CostPlan(plan_id="p1", owner_id=owner_id, name="Renovierung"))
        store.add_cost_category(CostCategory(category_id="cc1", plan_id="p1", owner_id=owner_id, name="Bad"))
        store.add_cost_item(
            CostItem(item_id="i1", category_id="cc1", owner_id=owner_id, name="Fliesen", estimated_cost=Decimal("40"), quantity=20)
        )
        return store.get_cost_plan("p1", owner_id)

    def test_plan_items(self, store: HouseholdDataStore, plan: CostPlan, owner_id: str) -> None:
        assert [i.item_id for i in store.get_plan_items(plan.plan_id, owner_id)] == ["i1"]

    def test_category_requires_plan(self, store: HouseholdDataStore, owner_id: str) -> None:
        with pytest.raises(ReferentialIntegrityError):
            store.add_cost_category(CostCategory(category_id="cc9", plan_id="nope", owner_id=owner_id, name="X"))

    def test_item_quantity(self, store: HouseholdDataStore, plan: CostPlan, owner_id: str) -> None:
        with pytest.raises(ValidationError):
            store.add_cost_item(
                CostItem(item_id="i2", category_id="cc1", owner_id=owner_id, name="X", estimated_cost=Decimal("1"), quantity=0)
            )

    def test_delete_plan_cascades(self, store: HouseholdDataStore, plan: CostPlan, owner_id: str) -> None:
        store.delete_cost_plan(plan.plan_id, owner_id)

        assert store.cost_categories.rows == {}
        assert store.cost_items.rows == {}

    def test_delete_category_removes_items(self, store: HouseholdDataStore, plan: CostPlan, owner_id: str) -> None:
        store.delete_cost_category("cc1", owner_id)

        assert store.get_plan_items(plan.plan_id, owner_id) == []


class TestIncomeSources:
    """Tests for income sources."""

    def test_delete_deactivates(self, store: HouseholdDataStore, owner_id: str) -> None:
        store.add_income_source(
            IncomeSource(
                source_id="s1",
                owner_id=owner_id,
                name="Gehalt",
                amount=Decimal("3000"),
                frequency=IncomeFrequency.MONTHLY,
                start_date=date(2024, 1, 1),
            )
        )

        store.delete_income_source("s1", owner_id)

        assert store.get_income_sources(owner_id) == []
        assert store.get_income_sources(owner_id, active_only=False)[0].is_active is False


def test_summary(store: HouseholdDataStore, stored_loan: Loan, owner_id: str, make_repayment) -> None:
    store.add_repayment(make_repayment("100", date(2024, 2, 1)))

    summary = store.summary(owner_id)

    assert summary["loans"] == 1
    assert summary["repayments"] == 1
    assert summary["transactions"] == 0
