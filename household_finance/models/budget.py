"""Budget model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from household_finance.models.enums import BudgetPeriod


@dataclass
class Budget:
    """Spending budget with optional carryover from the previous period."""

    budget_id: str
    owner_id: str
    name: str
    amount: Decimal
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    spent: Decimal = Decimal("0")
    carryover: Decimal = Decimal("0")  # Unused amount rolled over
    is_active: bool = True
    auto_reset: bool = False
    reset_day: int | None = None  # Day of month, 1-31
    category_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
