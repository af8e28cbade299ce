"""Loan models."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from household_finance.models.enums import LoanRole, LoanStatus, PaymentFrequency


@dataclass
class Loan:
    """Borrowing or lending agreement."""

    loan_id: str
    owner_id: str
    title: str
    principal: Decimal  # Amount borrowed or lent
    interest_rate: Decimal  # Annual nominal rate in percent (3.5 for 3.5%)
    term_months: int
    frequency: PaymentFrequency
    start_date: date | None  # First installment is due on this date
    role: LoanRole = LoanRole.BORROWER
    description: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Repayment:
    """Actual payment recorded against a loan."""

    repayment_id: str
    loan_id: str
    owner_id: str
    amount: Decimal
    payment_date: date
    note: str = ""
    created_at: datetime | None = None


@dataclass(frozen=True)
class ScheduleEntry:
    """One row of a theoretical amortization table. Never persisted."""

    period: int  # 1-based
    due_date: date
    payment: float
    interest: float
    principal: float  # Portion reducing the balance
    remaining: float  # Balance after this entry


@dataclass(frozen=True)
class ProgressSummary:
    """Repayment progress of a loan measured against its schedule."""

    total_interest: float
    planned_total: float
    total_repayments: float
    principal_progress: float  # 0.0 - 1.0
    outstanding_principal: float
    outstanding_planned: float
    next_installment: ScheduleEntry | None
    suggested_amount: float
    status: LoanStatus
