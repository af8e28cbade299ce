"""Budget utilization including carryover from previous periods."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from dateutil.relativedelta import relativedelta

from household_finance.models.budget import Budget

# Utilization above this is shown as "999 %"
MAX_UTILIZATION_PERCENT = Decimal("999")
WARNING_PERCENT = Decimal("80")


@dataclass(frozen=True)
class BudgetUtilization:
    budget_id: str
    name: str
    budget_amount: Decimal
    spent: Decimal
    carryover: Decimal
    available: Decimal  # amount + carryover
    remaining: Decimal
    utilization_percent: Decimal
    spent_from_carryover: Decimal
    spent_from_budget: Decimal

    @property
    def overspent(self) -> bool:
        return self.spent > self.available


@dataclass(frozen=True)
class BudgetSummary:
    total_allocated: Decimal
    total_spent: Decimal
    total_carryover: Decimal
    overspent: int
    average_utilization: Decimal


def budget_utilization(budget: Budget) -> BudgetUtilization:
    """Compute how much of a budget, carryover included, has been used.

    Spending is charged against the carryover first and then against
    the budget amount.
    """
    amount = budget.amount or Decimal("0")
    spent = budget.spent or Decimal("0")
    carryover = budget.carryover or Decimal("0")
    available = amount + carryover

    percent = spent / available * 100 if available > 0 else Decimal("0")
    from_carryover = min(spent, max(carryover, Decimal("0")))

    return BudgetUtilization(
        budget_id=budget.budget_id,
        name=budget.name,
        budget_amount=amount,
        spent=spent,
        carryover=carryover,
        available=available,
        remaining=available - spent,
        utilization_percent=percent,
        spent_from_carryover=from_carryover,
        spent_from_budget=spent - from_carryover,
    )


def budget_summary(budgets: Iterable[Budget]) -> BudgetSummary:
    """Aggregate totals over all budgets of an owner."""
    budgets = list(budgets)
    total_allocated = sum((b.amount or Decimal("0") for b in budgets), Decimal("0"))
    total_spent = sum((b.spent or Decimal("0") for b in budgets), Decimal("0"))
    total_carryover = sum((b.carryover or Decimal("0") for b in budgets), Decimal("0"))
    overspent = sum(1 for b in budgets if budget_utilization(b).overspent)

    if total_allocated > 0:
        average = min(total_spent / total_allocated * 100, MAX_UTILIZATION_PERCENT)
    else:
        average = Decimal("0")

    return BudgetSummary(
        total_allocated=total_allocated,
        total_spent=total_spent,
        total_carryover=total_carryover,
        overspent=overspent,
        average_utilization=average,
    )


def progress_color(spent: Decimal, amount: Decimal) -> str:
    """Traffic-light color for a budget progress bar."""
    if amount <= 0:
        return "red" if spent > 0 else "green"
    percent = spent / amount * 100
    if percent > 100:
        return "red"
    if percent > WARNING_PERCENT:
        return "yellow"
    return "green"


def clamp_reset_day(reset_day: int | None) -> int | None:
    """Keep a reset day within 1..31; falsy values mean no reset day."""
    if not reset_day:
        return None
    return min(max(reset_day, 1), 31)


def next_reset_date(reset_day: int, today: date) -> date:
    """Next date strictly after ``today`` on which the budget resets.

    Days past the end of a month fall on its last day.
    """
    day = clamp_reset_day(reset_day) or 1
    this_month = today.replace(day=1) + relativedelta(day=day)
    if this_month > today:
        return this_month
    return today.replace(day=1) + relativedelta(months=1, day=day)


def days_until_reset(reset_day: int, today: date) -> int:
    return (next_reset_date(reset_day, today) - today).days
