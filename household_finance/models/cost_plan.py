"""Cost planning models."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from household_finance.models.enums import IncomeFrequency, Priority


@dataclass
class CostPlan:
    """Named plan grouping cost categories (e.g. a renovation)."""

    plan_id: str
    owner_id: str
    name: str
    description: str | None = None
    is_active: bool = True
    target_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class CostCategory:
    """Category inside a cost plan."""

    category_id: str
    plan_id: str
    owner_id: str
    name: str
    color: str = "blue"
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class CostItem:
    """Single planned cost position."""

    item_id: str
    category_id: str
    owner_id: str
    name: str
    estimated_cost: Decimal
    quantity: int = 1
    actual_cost: Decimal | None = None
    unit: str | None = None
    priority: Priority = Priority.MEDIUM
    is_completed: bool = False
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class IncomeSource:
    """Recurring or one-time income."""

    source_id: str
    owner_id: str
    name: str
    amount: Decimal
    frequency: IncomeFrequency
    start_date: date
    is_active: bool = True
    end_date: date | None = None
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
