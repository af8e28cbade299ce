"""Field validation for loan and repayment input."""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from household_finance.exceptions import ValidationError
from household_finance.models.enums import PaymentFrequency
from household_finance.models.loan import Loan

TITLE_REQUIRED = "Bitte einen Namen fuer den Kredit angeben."
PRINCIPAL_POSITIVE = "Der Kreditbetrag muss groesser als 0 sein."
RATE_NOT_NEGATIVE = "Der Zinssatz darf nicht negativ sein."
TERM_POSITIVE = "Die Laufzeit muss groesser als 0 sein."
START_DATE_REQUIRED = "Bitte ein Startdatum waehlen."
FREQUENCY_UNKNOWN = "Unbekannte Zahlungsfrequenz."
PAYMENT_DATE_REQUIRED = "Bitte ein Zahlungsdatum auswaehlen."
AMOUNT_POSITIVE = "Der Teilbetrag muss groesser als 0 sein."


def coerce_frequency(value: Any) -> PaymentFrequency | None:
    """Return the matching frequency, or None if the value is unknown."""
    if isinstance(value, PaymentFrequency):
        return value
    try:
        return PaymentFrequency(value)
    except ValueError:
        return None


def _as_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return None if result.is_nan() else result


def loan_errors(loan: Loan, require_title: bool = True) -> dict[str, str]:
    """Collect field errors for a loan.

    Parameters
    ----------
    loan : Loan
        Loan to check.
    require_title : bool
        Whether a non-blank title is mandatory. Schedule generation
        does not need one.

    Returns
    -------
    dict[str, str]
        Field name to message; empty when the loan is valid.
    """
    errors: dict[str, str] = {}

    if require_title and not (loan.title or "").strip():
        errors["title"] = TITLE_REQUIRED

    principal = _as_decimal(loan.principal)
    if principal is None or principal <= 0:
        errors["principal"] = PRINCIPAL_POSITIVE

    rate = _as_decimal(loan.interest_rate)
    if rate is None or rate < 0:
        errors["interest_rate"] = RATE_NOT_NEGATIVE

    term = loan.term_months
    if isinstance(term, bool) or not isinstance(term, (int, float)) or not term > 0:
        errors["term_months"] = TERM_POSITIVE

    if coerce_frequency(loan.frequency) is None:
        errors["frequency"] = FREQUENCY_UNKNOWN

    if not isinstance(loan.start_date, date):
        errors["start_date"] = START_DATE_REQUIRED

    return errors


def validate_loan(loan: Loan, require_title: bool = True) -> Loan:
    """Raise ValidationError if the loan has field errors."""
    errors = loan_errors(loan, require_title=require_title)
    if errors:
        raise ValidationError(errors)
    return loan


def repayment_errors(amount: Any, payment_date: date | None) -> dict[str, str]:
    """Collect field errors for a repayment draft."""
    errors: dict[str, str] = {}
    if not isinstance(payment_date, date):
        errors["payment_date"] = PAYMENT_DATE_REQUIRED
    value = _as_decimal(amount)
    if value is None or value <= 0:
        errors["amount"] = AMOUNT_POSITIVE
    return errors


def normalize_term_months(value: float | int) -> int:
    """Truncate a term to whole months, never below one."""
    return max(1, int(value))
