"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from household_finance.models import Loan, LoanRole, PaymentFrequency, Repayment


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def owner_id() -> str:
    """Sample owner ID."""
    return "user-test-001"


@pytest.fixture
def other_owner_id() -> str:
    """A second owner whose records must stay invisible."""
    return "user-test-002"


@pytest.fixture
def today() -> date:
    """Fixed reference date."""
    return date(2024, 6, 15)


@pytest.fixture
def sample_loan(owner_id: str) -> Loan:
    """10,000 at 3.5 % over 36 monthly installments."""
    return Loan(
        loan_id="loan-test-001",
        owner_id=owner_id,
        title="Autokredit",
        principal=Decimal("10000"),
        interest_rate=Decimal("3.5"),
        term_months=36,
        frequency=PaymentFrequency.MONTHLY,
        start_date=date(2024, 1, 1),
        role=LoanRole.BORROWER,
    )


@pytest.fixture
def make_repayment(owner_id: str):
    """Factory for repayments against ``loan-test-001``."""
    counter = {"n": 0}

    def _make(amount: str, payment_date: date, loan_id: str = "loan-test-001") -> Repayment:
        counter["n"] += 1
        return Repayment(
            repayment_id=f"rep-{counter['n']:03d}",
            loan_id=loan_id,
            owner_id=owner_id,
            amount=Decimal(amount),
            payment_date=payment_date,
        )

    return _make
