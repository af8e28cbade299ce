"""Amortization schedules and repayment progress for loans."""

import logging
import math
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Iterator

from dateutil.relativedelta import relativedelta

from household_finance.exceptions import InvalidLoanError
from household_finance.models.enums import LoanStatus, PaymentFrequency
from household_finance.models.loan import Loan, ProgressSummary, Repayment, ScheduleEntry
from household_finance.validation import loan_errors

logger = logging.getLogger(__name__)

# Installments due yesterday still count as upcoming
NEXT_INSTALLMENT_GRACE = timedelta(days=1)


def rate_per_period(interest_rate: float, frequency: PaymentFrequency) -> float:
    """Convert an annual percentage rate to a per-period fraction."""
    if interest_rate <= 0:
        return 0.0
    return (interest_rate / 100) / frequency.periods_per_year


def total_periods(term_months: int, frequency: PaymentFrequency) -> int:
    """Number of installments for a term, at least one. Halves round up."""
    return max(1, math.floor(term_months / 12 * frequency.periods_per_year + 0.5))


def level_payment(principal: float, rate: float, periods: int) -> float:
    """Annuity payment that amortizes ``principal`` over ``periods``.

    Parameters
    ----------
    principal : float
        Amount to amortize.
    rate : float
        Interest rate per period as a fraction.
    periods : int
        Number of payments.

    Returns
    -------
    float
        Fixed payment per period. Straight-line when ``rate`` is zero.
    """
    if rate == 0:
        return principal / periods
    return principal * rate / (1 - (1 + rate) ** -periods)


def _checked_frequency(loan: Loan) -> PaymentFrequency:
    errors = loan_errors(loan, require_title=False)
    if errors:
        raise InvalidLoanError(errors, f"Loan {loan.loan_id} is invalid: " + "; ".join(errors))
    return PaymentFrequency(loan.frequency)


def iter_schedule(loan: Loan) -> Iterator[ScheduleEntry]:
    """Yield schedule entries for a loan one period at a time.

    Raises
    ------
    InvalidLoanError
        If principal or term is not positive, the rate is negative,
        the frequency is unknown or the start date is missing.
    """
    frequency = _checked_frequency(loan)
    principal = float(loan.principal)
    rate = rate_per_period(float(loan.interest_rate), frequency)
    periods = total_periods(loan.term_months, frequency)
    planned_payment = level_payment(principal, rate, periods)

    remaining = principal
    for period in range(1, periods + 1):
        # Offsets from the start date keep month-end days stable (Jan 31 -> Feb 29 -> Mar 31)
        due_date = loan.start_date + relativedelta(months=frequency.months_per_period * (period - 1))
        interest = 0.0 if rate == 0 else remaining * rate
        principal_portion = planned_payment - interest
        payment = planned_payment

        if period == periods:
            principal_portion = remaining
            payment = principal_portion + interest

        remaining = max(0.0, remaining - principal_portion)

        yield ScheduleEntry(
            period=period,
            due_date=due_date,
            payment=payment,
            interest=interest,
            principal=principal_portion,
            remaining=remaining,
        )


def generate_schedule(loan: Loan) -> list[ScheduleEntry]:
    """Build the full amortization table for a loan.

    The table is deterministic for identical input and its last entry
    always has ``remaining == 0``.
    """
    schedule = list(iter_schedule(loan))
    logger.debug(
        "Generated %d-period schedule for loan %s",
        len(schedule),
        loan.loan_id,
    )
    return schedule


def derive_progress(
    loan: Loan,
    schedule: list[ScheduleEntry],
    repayments: Iterable[Repayment],
    today: date,
) -> ProgressSummary:
    """Reconcile recorded repayments against a loan's schedule.

    Parameters
    ----------
    loan : Loan
        The loan the schedule was generated from.
    schedule : list[ScheduleEntry]
        Output of :func:`generate_schedule`.
    repayments : Iterable[Repayment]
        All repayments recorded for the loan, in any order.
    today : date
        Reference date for picking the next installment.

    Returns
    -------
    ProgressSummary
        Totals, outstanding amounts, next installment and status.
    """
    principal = float(loan.principal)
    total_interest = sum(entry.interest for entry in schedule)
    planned_total = sum(entry.payment for entry in schedule)
    total_repayments = sum(float(r.amount) for r in repayments)

    if principal > 0:
        principal_progress = min(max(total_repayments / principal, 0.0), 1.0)
    else:
        principal_progress = 0.0

    outstanding_principal = max(0.0, principal - total_repayments)
    outstanding_planned = max(0.0, principal + total_interest - total_repayments)

    cutoff = today - NEXT_INSTALLMENT_GRACE
    next_installment = next(
        (entry for entry in schedule if entry.due_date >= cutoff and entry.remaining > 0),
        None,
    )
    suggested_amount = next_installment.payment if next_installment else outstanding_principal
    status = LoanStatus.DONE if total_repayments >= principal else LoanStatus.ACTIVE

    return ProgressSummary(
        total_interest=total_interest,
        planned_total=planned_total,
        total_repayments=total_repayments,
        principal_progress=principal_progress,
        outstanding_principal=outstanding_principal,
        outstanding_planned=outstanding_planned,
        next_installment=next_installment,
        suggested_amount=suggested_amount,
        status=status,
    )


def suggested_repayment(progress: ProgressSummary) -> Decimal:
    """Default amount for a new repayment, rounded to cents."""
    if progress.suggested_amount <= 0:
        return Decimal("0.00")
    return Decimal(str(progress.suggested_amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def loan_overview(
    loan: Loan,
    repayments: Iterable[Repayment],
    today: date,
) -> tuple[list[ScheduleEntry], ProgressSummary]:
    """Generate the schedule and derive progress in one call."""
    schedule = generate_schedule(loan)
    return schedule, derive_progress(loan, schedule, repayments, today)
