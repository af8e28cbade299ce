"""Sample loans, repayments, transactions and budgets."""

import random
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterator

from dateutil.relativedelta import relativedelta

from household_finance.engine.amortization import generate_schedule
from household_finance.generators.base import BaseGenerator
from household_finance.models import (
    Budget,
    BudgetPeriod,
    Loan,
    LoanRole,
    PaymentFrequency,
    Repayment,
    Transaction,
    TransactionCategory,
    TransactionType,
)


class LoanGenerator(BaseGenerator):
    """Generate sample loans and repayment histories."""

    TITLES = ["Autokredit", "Ratenkredit", "Baufinanzierung", "Privatdarlehen", "Moebelkauf"]
    TERMS = [12, 24, 36, 48, 60, 84, 120]

    def generate(self, owner_id: str, today: date | None = None) -> Loan:
        """Generate a loan that started within the last three years."""
        today = today or date.today()
        start_date = today - relativedelta(months=random.randint(0, 36))
        role = LoanRole.LENDER if random.random() < 0.15 else LoanRole.BORROWER

        return Loan(
            loan_id=self.fake.uuid4(),
            owner_id=owner_id,
            title=random.choice(self.TITLES) if role == LoanRole.BORROWER else f"Darlehen an {self.fake.first_name()}",
            principal=Decimal(random.randint(10, 400) * 500),
            interest_rate=Decimal(str(round(random.uniform(0, 8), 2))),
            term_months=random.choice(self.TERMS),
            frequency=random.choices(list(PaymentFrequency), weights=[80, 5, 10, 5])[0],
            start_date=start_date,
            role=role,
            description=self.fake.sentence(nb_words=6),
            created_at=datetime.combine(start_date, datetime.min.time()),
        )

    def generate_repayments(
        self,
        loan: Loan,
        today: date | None = None,
        skip_rate: float = 0.05,
    ) -> list[Repayment]:
        """Pay the installments already due, occasionally skipping one.

        Parameters
        ----------
        loan : Loan
            Loan to pay against.
        today : date | None
            Installments due after this date are not paid.
        skip_rate : float
            Probability that a due installment was missed.
        """
        today = today or date.today()
        repayments = []
        for entry in generate_schedule(loan):
            if entry.due_date > today:
                break
            if random.random() < skip_rate:
                continue
            paid_on = min(entry.due_date + timedelta(days=random.randint(0, 5)), today)
            repayments.append(
                Repayment(
                    repayment_id=self.fake.uuid4(),
                    loan_id=loan.loan_id,
                    owner_id=loan.owner_id,
                    amount=Decimal(str(round(entry.payment, 2))),
                    payment_date=paid_on,
                    note=f"Rate {entry.period}",
                )
            )
        return repayments


class TransactionGenerator(BaseGenerator):
    """Generate sample categories and income/expense bookings."""

    CATEGORIES = [
        ("Lebensmittel", "green"),
        ("Miete", "blue"),
        ("Mobilitaet", "orange"),
        ("Freizeit", "violet"),
        ("Versicherungen", "gray"),
        ("Gehalt", "teal"),
    ]

    def generate_categories(self, owner_id: str) -> list[TransactionCategory]:
        return [
            TransactionCategory(
                category_id=self.fake.uuid4(),
                owner_id=owner_id,
                name=name,
                color=color,
                is_default=True,
            )
            for name, color in self.CATEGORIES
        ]

    def generate(
        self,
        owner_id: str,
        categories: list[TransactionCategory] | None = None,
        budgets: list[Budget] | None = None,
        today: date | None = None,
    ) -> Transaction:
        """Generate one booking within the last 90 days; about one in six is income."""
        today = today or date.today()
        is_income = random.random() < 1 / 6

        if is_income:
            amount = Decimal(random.randint(1500, 4500))
            description = f"Gehalt {self.fake.company()}"
        else:
            amount = Decimal(str(round(random.lognormvariate(3.5, 1.0), 2)))
            description = self.fake.company()

        category = random.choice(categories) if categories else None
        budget = random.choice(budgets) if budgets and not is_income and random.random() < 0.5 else None

        return Transaction(
            transaction_id=self.fake.uuid4(),
            owner_id=owner_id,
            amount=amount,
            description=description,
            transaction_type=TransactionType.INCOME if is_income else TransactionType.EXPENSE,
            transaction_date=today - timedelta(days=random.randint(0, 90)),
            category_id=category.category_id if category else None,
            budget_id=budget.budget_id if budget else None,
        )

    def generate_batch(self, owner_id: str, count: int, **kwargs) -> Iterator[Transaction]:
        for _ in range(count):
            yield self.generate(owner_id, **kwargs)


class BudgetGenerator(BaseGenerator):
    """Generate sample budgets with spending and carryover."""

    def generate(self, owner_id: str, name: str | None = None, category_id: str | None = None) -> Budget:
        amount = Decimal(random.randint(4, 60) * 25)
        spent = (amount * Decimal(str(round(random.uniform(0.1, 1.3), 2)))).quantize(Decimal("0.01"))
        carryover = Decimal(random.randint(0, 10) * 10) if random.random() < 0.4 else Decimal("0")
        auto_reset = random.random() < 0.5

        return Budget(
            budget_id=self.fake.uuid4(),
            owner_id=owner_id,
            name=name or self.fake.word().capitalize(),
            amount=amount,
            period=BudgetPeriod.MONTHLY,
            spent=spent,
            carryover=carryover,
            auto_reset=auto_reset,
            reset_day=random.randint(1, 28) if auto_reset else None,
            category_id=category_id,
        )
