"""Sample data generators."""

from household_finance.generators.household import (
    BudgetGenerator,
    LoanGenerator,
    TransactionGenerator,
)

__all__ = ["BudgetGenerator", "LoanGenerator", "TransactionGenerator"]
