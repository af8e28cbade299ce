"""Household finance toolkit: loans, budgets, transactions and cost plans."""

__version__ = "0.1.0"
