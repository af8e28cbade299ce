"""Owner-scoped household data store with referential integrity."""

import logging
from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime
from typing import Any, Generic, TypeVar

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
    IncomeSource,
    Loan,
    Repayment,
    Transaction,
    TransactionCategory,
)
from household_finance.reports.budgets import clamp_reset_day
from household_finance.validation import normalize_term_months, repayment_errors, validate_loan

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Updates may never move a record to another owner
_IMMUTABLE_FIELDS = {"owner_id", "created_at"}


class _OwnedTable(Generic[T]):
    """Records of one entity type, each visible only to its owner."""

    def __init__(self, entity: str, id_field: str) -> None:
        self.entity = entity
        self.id_field = id_field
        self.rows: dict[str, T] = {}

    def insert(self, record: T) -> T:
        key = getattr(record, self.id_field)
        if key in self.rows:
            raise InvalidEntityStateError(f"{self.entity} {key} already exists")
        if hasattr(record, "created_at") and record.created_at is None:
            record.created_at = datetime.now()
        self.rows[key] = record
        return record

    def get(self, key: str, owner_id: str) -> T:
        record = self.rows.get(key)
        if record is None or record.owner_id != owner_id:
            raise EntityNotFoundError(f"{self.entity} {key} not found")
        return record

    def exists(self, key: str, owner_id: str) -> bool:
        record = self.rows.get(key)
        return record is not None and record.owner_id == owner_id

    def for_owner(self, owner_id: str) -> list[T]:
        return [r for r in self.rows.values() if r.owner_id == owner_id]

    def update(self, key: str, owner_id: str, changes: dict[str, Any]) -> T:
        record = self.get(key, owner_id)
        locked = _IMMUTABLE_FIELDS.intersection(changes) | ({self.id_field} & changes.keys())
        if locked:
            raise InvalidEntityStateError(f"Cannot change {', '.join(sorted(locked))} of {self.entity} {key}")
        unknown = set(changes) - {f.name for f in fields(record)}
        if unknown:
            raise InvalidEntityStateError(f"Unknown fields for {self.entity}: {', '.join(sorted(unknown))}")
        updated = replace(record, **changes)
        if hasattr(updated, "updated_at"):
            updated.updated_at = datetime.now()
        return updated

    def put(self, record: T) -> T:
        self.rows[getattr(record, self.id_field)] = record
        return record

    def delete(self, key: str, owner_id: str) -> T:
        record = self.get(key, owner_id)
        del self.rows[key]
        return record


def _created_desc(record: Any) -> datetime:
    return record.created_at or datetime.min


@dataclass
class HouseholdDataStore:
    """In-memory persistence for one household, keyed by owner.

    Every read, update and delete takes the owner id; records of other
    owners behave as if they did not exist.
    """

    loans: _OwnedTable[Loan] = field(default_factory=lambda: _OwnedTable("Loan", "loan_id"))
    repayments: _OwnedTable[Repayment] = field(
        default_factory=lambda: _OwnedTable("Repayment", "repayment_id")
    )
    categories: _OwnedTable[TransactionCategory] = field(
        default_factory=lambda: _OwnedTable("Category", "category_id")
    )
    transactions: _OwnedTable[Transaction] = field(
        default_factory=lambda: _OwnedTable("Transaction", "transaction_id")
    )
    budgets: _OwnedTable[Budget] = field(default_factory=lambda: _OwnedTable("Budget", "budget_id"))
    cost_plans: _OwnedTable[CostPlan] = field(default_factory=lambda: _OwnedTable("Cost plan", "plan_id"))
    cost_categories: _OwnedTable[CostCategory] = field(
        default_factory=lambda: _OwnedTable("Cost category", "category_id")
    )
    cost_items: _OwnedTable[CostItem] = field(default_factory=lambda: _OwnedTable("Cost item", "item_id"))
    income_sources: _OwnedTable[IncomeSource] = field(
        default_factory=lambda: _OwnedTable("Income source", "source_id")
    )

    # Loans

    def add_loan(self, loan: Loan) -> Loan:
        """Validate and store a loan. Term months are truncated to whole months."""
        title = (loan.title or "").strip()
        validate_loan(replace(loan, title=title))
        loan.title = title
        loan.term_months = normalize_term_months(loan.term_months)
        self.loans.insert(loan)
        logger.debug("Added loan %s for owner %s", loan.loan_id, loan.owner_id)
        return loan

    def get_loan(self, loan_id: str, owner_id: str) -> Loan:
        return self.loans.get(loan_id, owner_id)

    def get_loans(self, owner_id: str) -> list[Loan]:
        """All loans of an owner, newest first."""
        return sorted(self.loans.for_owner(owner_id), key=_created_desc, reverse=True)

    def update_loan(self, loan_id: str, owner_id: str, /, **changes: Any) -> Loan:
        updated = self.loans.update(loan_id, owner_id, changes)
        validate_loan(updated)
        updated.term_months = normalize_term_months(updated.term_months)
        return self.loans.put(updated)

    def delete_loan(self, loan_id: str, owner_id: str) -> None:
        """Delete a loan together with its repayments."""
        self.loans.delete(loan_id, owner_id)
        orphaned = [r.repayment_id for r in self.repayments.rows.values() if r.loan_id == loan_id]
        for repayment_id in orphaned:
            del self.repayments.rows[repayment_id]
        logger.debug("Deleted loan %s and %d repayments", loan_id, len(orphaned))

    def add_repayment(self, repayment: Repayment) -> Repayment:
        if not self.loans.exists(repayment.loan_id, repayment.owner_id):
            raise ReferentialIntegrityError(f"Loan {repayment.loan_id} not found")
        errors = repayment_errors(repayment.amount, repayment.payment_date)
        if errors:
            raise ValidationError(errors)
        repayment.note = (repayment.note or "").strip()
        return self.repayments.insert(repayment)

    def get_loan_repayments(self, loan_id: str, owner_id: str) -> list[Repayment]:
        """Repayments of a loan, latest payment date first."""
        self.loans.get(loan_id, owner_id)
        own = [r for r in self.repayments.for_owner(owner_id) if r.loan_id == loan_id]
        return sorted(own, key=lambda r: r.payment_date or date.min, reverse=True)

    def delete_repayment(self, repayment_id: str, owner_id: str) -> None:
        self.repayments.delete(repayment_id, owner_id)

    # Transaction categories

    def add_category(self, category: TransactionCategory) -> TransactionCategory:
        return self.categories.insert(category)

    def get_categories(self, owner_id: str) -> list[TransactionCategory]:
        """Categories of an owner sorted by name."""
        return sorted(self.categories.for_owner(owner_id), key=lambda c: c.name.lower())

    def update_category(self, category_id: str, owner_id: str, /, **changes: Any) -> TransactionCategory:
        return self.categories.put(self.categories.update(category_id, owner_id, changes))

    def delete_category(self, category_id: str, owner_id: str) -> None:
        """Delete a category and detach it from the owner's transactions."""
        self.categories.delete(category_id, owner_id)
        for transaction in self.transactions.for_owner(owner_id):
            if transaction.category_id == category_id:
                transaction.category_id = None

    # Transactions

    def add_transaction(self, transaction: Transaction) -> Transaction:
        self._check_transaction_refs(transaction)
        return self.transactions.insert(transaction)

    def get_transaction(self, transaction_id: str, owner_id: str) -> Transaction:
        return self.transactions.get(transaction_id, owner_id)

    def get_transactions(self, owner_id: str) -> list[Transaction]:
        """Transactions of an owner, latest booking first."""
        return sorted(
            self.transactions.for_owner(owner_id),
            key=lambda t: (t.transaction_date, t.created_at or datetime.min),
            reverse=True,
        )

    def update_transaction(self, transaction_id: str, owner_id: str, /, **changes: Any) -> Transaction:
        updated = self.transactions.update(transaction_id, owner_id, changes)
        self._check_transaction_refs(updated)
        return self.transactions.put(updated)

    def delete_transaction(self, transaction_id: str, owner_id: str) -> None:
        self.transactions.delete(transaction_id, owner_id)

    def _check_transaction_refs(self, transaction: Transaction) -> None:
        if transaction.category_id and not self.categories.exists(transaction.category_id, transaction.owner_id):
            raise ReferentialIntegrityError(f"Category {transaction.category_id} not found")
        if transaction.budget_id and not self.budgets.exists(transaction.budget_id, transaction.owner_id):
            raise ReferentialIntegrityError(f"Budget {transaction.budget_id} not found")

    # Budgets

    def add_budget(self, budget: Budget) -> Budget:
        if budget.category_id and not self.categories.exists(budget.category_id, budget.owner_id):
            raise ReferentialIntegrityError(f"Category {budget.category_id} not found")
        budget.reset_day = clamp_reset_day(budget.reset_day)
        return self.budgets.insert(budget)

    def get_budget(self, budget_id: str, owner_id: str) -> Budget:
        return self.budgets.get(budget_id, owner_id)

    def get_budgets(self, owner_id: str) -> list[Budget]:
        """Budgets of an owner, newest first."""
        return sorted(self.budgets.for_owner(owner_id), key=_created_desc, reverse=True)

    def update_budget(self, budget_id: str, owner_id: str, /, **changes: Any) -> Budget:
        if "reset_day" in changes:
            changes["reset_day"] = clamp_reset_day(changes["reset_day"])
        return self.budgets.put(self.budgets.update(budget_id, owner_id, changes))

    def delete_budget(self, budget_id: str, owner_id: str) -> None:
        self.budgets.delete(budget_id, owner_id)
        for transaction in self.transactions.for_owner(owner_id):
            if transaction.budget_id == budget_id:
                transaction.budget_id = None

    # Cost plans

    def add_cost_plan(self, plan: CostPlan) -> CostPlan:
        return self.cost_plans.insert(plan)

    def get_cost_plan(self, plan_id: str, owner_id: str) -> CostPlan:
        return self.cost_plans.get(plan_id, owner_id)

    def get_cost_plans(self, owner_id: str) -> list[CostPlan]:
        return sorted(self.cost_plans.for_owner(owner_id), key=_created_desc, reverse=True)

    def update_cost_plan(self, plan_id: str, owner_id: str, /, **changes: Any) -> CostPlan:
        return self.cost_plans.put(self.cost_plans.update(plan_id, owner_id, changes))

    def delete_cost_plan(self, plan_id: str, owner_id: str) -> None:
        """Delete a plan with its categories and their items."""
        self.cost_plans.delete(plan_id, owner_id)
        category_ids = [c.category_id for c in self.cost_categories.for_owner(owner_id) if c.plan_id == plan_id]
        for item in self.cost_items.for_owner(owner_id):
            if item.category_id in category_ids:
                del self.cost_items.rows[item.item_id]
        for category_id in category_ids:
            del self.cost_categories.rows[category_id]
        logger.debug("Deleted cost plan %s with %d categories", plan_id, len(category_ids))

    def add_cost_category(self, category: CostCategory) -> CostCategory:
        if not self.cost_plans.exists(category.plan_id, category.owner_id):
            raise ReferentialIntegrityError(f"Cost plan {category.plan_id} not found")
        return self.cost_categories.insert(category)

    def get_cost_categories(self, plan_id: str, owner_id: str) -> list[CostCategory]:
        self.cost_plans.get(plan_id, owner_id)
        return [c for c in self.cost_categories.for_owner(owner_id) if c.plan_id == plan_id]

    def delete_cost_category(self, category_id: str, owner_id: str) -> None:
        self.cost_categories.delete(category_id, owner_id)
        for item in self.cost_items.for_owner(owner_id):
            if item.category_id == category_id:
                del self.cost_items.rows[item.item_id]

    def add_cost_item(self, item: CostItem) -> CostItem:
        if not self.cost_categories.exists(item.category_id, item.owner_id):
            raise ReferentialIntegrityError(f"Cost category {item.category_id} not found")
        if item.quantity < 1:
            raise ValidationError({"quantity": "Die Menge muss mindestens 1 sein."})
        return self.cost_items.insert(item)

    def get_cost_items(self, category_id: str, owner_id: str) -> list[CostItem]:
        self.cost_categories.get(category_id, owner_id)
        return [i for i in self.cost_items.for_owner(owner_id) if i.category_id == category_id]

    def get_plan_items(self, plan_id: str, owner_id: str) -> list[CostItem]:
        """All cost items across the categories of a plan."""
        category_ids = {c.category_id for c in self.get_cost_categories(plan_id, owner_id)}
        return [i for i in self.cost_items.for_owner(owner_id) if i.category_id in category_ids]

    def update_cost_item(self, item_id: str, owner_id: str, /, **changes: Any) -> CostItem:
        return self.cost_items.put(self.cost_items.update(item_id, owner_id, changes))

    def delete_cost_item(self, item_id: str, owner_id: str) -> None:
        self.cost_items.delete(item_id, owner_id)

    # Income sources

    def add_income_source(self, source: IncomeSource) -> IncomeSource:
        return self.income_sources.insert(source)

    def get_income_sources(self, owner_id: str, active_only: bool = True) -> list[IncomeSource]:
        sources = self.income_sources.for_owner(owner_id)
        return [s for s in sources if s.is_active] if active_only else sources

    def update_income_source(self, source_id: str, owner_id: str, /, **changes: Any) -> IncomeSource:
        return self.income_sources.put(self.income_sources.update(source_id, owner_id, changes))

    def delete_income_source(self, source_id: str, owner_id: str) -> IncomeSource:
        """Deactivate an income source; history is kept."""
        return self.update_income_source(source_id, owner_id, is_active=False)

    def summary(self, owner_id: str) -> dict[str, int]:
        """Return record counts for an owner."""
        return {
            "loans": len(self.loans.for_owner(owner_id)),
            "repayments": len(self.repayments.for_owner(owner_id)),
            "categories": len(self.categories.for_owner(owner_id)),
            "transactions": len(self.transactions.for_owner(owner_id)),
            "budgets": len(self.budgets.for_owner(owner_id)),
            "cost_plans": len(self.cost_plans.for_owner(owner_id)),
            "cost_items": len(self.cost_items.for_owner(owner_id)),
            "income_sources": len(self.get_income_sources(owner_id)),
        }
