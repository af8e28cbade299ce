"""Household finance domain models."""

from household_finance.models.budget import Budget
from household_finance.models.cost_plan import CostCategory, CostItem, CostPlan, IncomeSource
from household_finance.models.enums import (
    BudgetPeriod,
    IncomeFrequency,
    LoanRole,
    LoanStatus,
    PaymentFrequency,
    Priority,
    RecurringInterval,
    TransactionType,
)
from household_finance.models.loan import Loan, ProgressSummary, Repayment, ScheduleEntry
from household_finance.models.transaction import Transaction, TransactionCategory

__all__ = [
    "Budget",
    "BudgetPeriod",
    "CostCategory",
    "CostItem",
    "CostPlan",
    "IncomeFrequency",
    "IncomeSource",
    "Loan",
    "LoanRole",
    "LoanStatus",
    "PaymentFrequency",
    "Priority",
    "ProgressSummary",
    "RecurringInterval",
    "Repayment",
    "ScheduleEntry",
    "Transaction",
    "TransactionCategory",
    "TransactionType",
]
