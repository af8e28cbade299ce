"""Enumeration types for household-finance entities."""

from enum import Enum


class PaymentFrequency(str, Enum):
    """Loan installment frequency.

    Every member satisfies ``periods_per_year * months_per_period == 12``.
    """

    MONTHLY = "monthly"
    BI_MONTHLY = "bi-monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @property
    def periods_per_year(self) -> int:
        return _FREQUENCY_TABLE[self][0]

    @property
    def months_per_period(self) -> int:
        return _FREQUENCY_TABLE[self][1]

    @property
    def label(self) -> str:
        return _FREQUENCY_TABLE[self][2]


_FREQUENCY_TABLE = {
    PaymentFrequency.MONTHLY: (12, 1, "Monatlich"),
    PaymentFrequency.BI_MONTHLY: (6, 2, "Alle 2 Monate"),
    PaymentFrequency.QUARTERLY: (4, 3, "Quartalsweise"),
    PaymentFrequency.YEARLY: (1, 12, "Jaehrlich"),
}


class LoanRole(str, Enum):
    BORROWER = "borrower"
    LENDER = "lender"


class LoanStatus(str, Enum):
    ACTIVE = "active"
    DONE = "done"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class RecurringInterval(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class BudgetPeriod(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class IncomeFrequency(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    ONE_TIME = "one-time"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
