"""Transaction models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from household_finance.models.enums import RecurringInterval, TransactionType


@dataclass
class TransactionCategory:
    """User-defined category for transactions."""

    category_id: str
    owner_id: str
    name: str
    color: str = "gray"
    icon: str | None = None
    is_default: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Transaction:
    """Income or expense booking."""

    transaction_id: str
    owner_id: str
    amount: Decimal
    description: str
    transaction_type: TransactionType
    transaction_date: date
    category_id: str | None = None
    budget_id: str | None = None
    is_recurring: bool = False
    recurring_interval: RecurringInterval | None = None
    tags: list[str] = field(default_factory=list)
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
