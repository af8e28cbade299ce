"""Cost plan progress and monthly income/cost balance."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from household_finance.models.cost_plan import CostCategory, CostItem, CostPlan, IncomeSource
from household_finance.models.enums import IncomeFrequency

MONTHLY_MULTIPLIERS = {
    IncomeFrequency.WEEKLY: Decimal("4.33"),  # average weeks per month
    IncomeFrequency.MONTHLY: Decimal("1"),
    IncomeFrequency.YEARLY: Decimal("1") / Decimal("12"),
    IncomeFrequency.ONE_TIME: Decimal("0"),
}


@dataclass(frozen=True)
class CostPlanProgress:
    plan_id: str
    name: str
    total_estimated_cost: Decimal
    total_actual_cost: Decimal
    completion_percent: Decimal
    total_items: int
    completed_items: int


@dataclass(frozen=True)
class CategoryTotals:
    category_id: str
    name: str
    estimated_total: Decimal
    actual_total: Decimal


@dataclass(frozen=True)
class MonthlyBalance:
    income: Decimal
    costs: Decimal

    @property
    def surplus(self) -> Decimal:
        return self.income - self.costs


def item_estimated_total(item: CostItem) -> Decimal:
    return item.estimated_cost * item.quantity


def plan_progress(plan: CostPlan, items: Iterable[CostItem]) -> CostPlanProgress:
    """Summarize the items of a plan.

    Completion is the share of completed items.
    """
    items = list(items)
    completed = sum(1 for item in items if item.is_completed)
    return CostPlanProgress(
        plan_id=plan.plan_id,
        name=plan.name,
        total_estimated_cost=sum((item_estimated_total(i) for i in items), Decimal("0")),
        total_actual_cost=sum((i.actual_cost or Decimal("0") for i in items), Decimal("0")),
        completion_percent=Decimal(completed * 100) / len(items) if items else Decimal("0"),
        total_items=len(items),
        completed_items=completed,
    )


def category_totals(category: CostCategory, items: Iterable[CostItem]) -> CategoryTotals:
    own = [i for i in items if i.category_id == category.category_id]
    return CategoryTotals(
        category_id=category.category_id,
        name=category.name,
        estimated_total=sum((item_estimated_total(i) for i in own), Decimal("0")),
        actual_total=sum((i.actual_cost or Decimal("0") for i in own), Decimal("0")),
    )


def monthly_amount(amount: Decimal, frequency: IncomeFrequency | str) -> Decimal:
    """Normalize an amount to a monthly figure; unknown frequencies count as monthly."""
    try:
        multiplier = MONTHLY_MULTIPLIERS[IncomeFrequency(frequency)]
    except ValueError:
        multiplier = Decimal("1")
    return amount * multiplier


def monthly_balance(
    income_sources: Iterable[IncomeSource],
    monthly_costs: Iterable[Decimal],
) -> MonthlyBalance:
    """Balance active income against monthly costs."""
    income = sum(
        (monthly_amount(s.amount, s.frequency) for s in income_sources if s.is_active),
        Decimal("0"),
    )
    costs = sum(monthly_costs, Decimal("0"))
    return MonthlyBalance(income=income, costs=costs)
