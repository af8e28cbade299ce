"""Loan computation engine."""

from household_finance.engine.amortization import (
    derive_progress,
    generate_schedule,
    iter_schedule,
    level_payment,
    loan_overview,
    rate_per_period,
    suggested_repayment,
    total_periods,
)

__all__ = [
    "derive_progress",
    "generate_schedule",
    "iter_schedule",
    "level_payment",
    "loan_overview",
    "rate_per_period",
    "suggested_repayment",
    "total_periods",
]
