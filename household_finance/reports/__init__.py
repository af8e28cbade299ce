"""Aggregations over fetched household data."""

from household_finance.reports.budgets import (
    BudgetSummary,
    BudgetUtilization,
    budget_summary,
    budget_utilization,
    days_until_reset,
    progress_color,
)
from household_finance.reports.cost_plans import (
    CostPlanProgress,
    MonthlyBalance,
    monthly_amount,
    monthly_balance,
    plan_progress,
)
from household_finance.reports.transactions import (
    Timeframe,
    TransactionFilter,
    TransactionTotals,
    expense_category_stats,
    filter_timeframe,
    filter_transactions,
    summarize_transactions,
    top_expense_category,
)

__all__ = [
    "BudgetSummary",
    "BudgetUtilization",
    "CostPlanProgress",
    "MonthlyBalance",
    "Timeframe",
    "TransactionFilter",
    "TransactionTotals",
    "budget_summary",
    "budget_utilization",
    "days_until_reset",
    "expense_category_stats",
    "filter_timeframe",
    "filter_transactions",
    "monthly_amount",
    "monthly_balance",
    "plan_progress",
    "progress_color",
    "summarize_transactions",
    "top_expense_category",
]
