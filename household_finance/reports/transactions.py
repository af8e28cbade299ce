"""Filters and totals over income/expense transactions."""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable

from dateutil.relativedelta import relativedelta

from household_finance.models.enums import TransactionType
from household_finance.models.transaction import Transaction, TransactionCategory

UNCATEGORIZED = "Ohne Kategorie"


class Timeframe(str, Enum):
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    LAST_30_DAYS = "last_30_days"
    ALL = "all"


@dataclass
class TransactionFilter:
    """Criteria for narrowing a transaction list.

    Unset fields do not filter. Date bounds are inclusive.
    """

    transaction_type: TransactionType | None = None
    category_id: str | None = None
    budget_id: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    search: str | None = None

    def matches(self, transaction: Transaction) -> bool:
        if self.transaction_type and transaction.transaction_type != self.transaction_type:
            return False
        if self.category_id and transaction.category_id != self.category_id:
            return False
        if self.budget_id and transaction.budget_id != self.budget_id:
            return False
        if self.date_from and transaction.transaction_date < self.date_from:
            return False
        if self.date_to and transaction.transaction_date > self.date_to:
            return False
        if self.min_amount and transaction.amount < self.min_amount:
            return False
        if self.max_amount and transaction.amount > self.max_amount:
            return False
        if self.search and self.search.lower() not in (transaction.description or "").lower():
            return False
        return True

    @property
    def advanced_active(self) -> bool:
        """Whether amount or text criteria are set."""
        return bool(self.min_amount or self.max_amount or self.search)


@dataclass(frozen=True)
class TransactionTotals:
    income: Decimal
    expense: Decimal
    income_count: int
    expense_count: int
    average_amount: Decimal

    @property
    def net_balance(self) -> Decimal:
        return self.income - self.expense

    @property
    def count(self) -> int:
        return self.income_count + self.expense_count


@dataclass(frozen=True)
class CategoryTotal:
    category_id: str | None
    name: str
    color: str | None
    total: Decimal


def filter_transactions(
    transactions: Iterable[Transaction],
    criteria: TransactionFilter,
) -> list[Transaction]:
    """Return transactions matching every set criterion, order preserved."""
    return [t for t in transactions if criteria.matches(t)]


def in_timeframe(transaction: Transaction, timeframe: Timeframe, today: date) -> bool:
    """Check whether a transaction falls into a dashboard timeframe."""
    booked = transaction.transaction_date
    if timeframe == Timeframe.THIS_MONTH:
        return (booked.year, booked.month) == (today.year, today.month)
    if timeframe == Timeframe.LAST_MONTH:
        previous = today - relativedelta(months=1)
        return (booked.year, booked.month) == (previous.year, previous.month)
    if timeframe == Timeframe.LAST_30_DAYS:
        return booked > today - timedelta(days=30)
    return True


def filter_timeframe(
    transactions: Iterable[Transaction],
    timeframe: Timeframe,
    today: date,
) -> list[Transaction]:
    return [t for t in transactions if in_timeframe(t, timeframe, today)]


def summarize_transactions(transactions: Iterable[Transaction]) -> TransactionTotals:
    """Sum income and expense and count bookings of each type."""
    income = expense = absolute = Decimal("0")
    income_count = expense_count = 0

    for transaction in transactions:
        amount = transaction.amount or Decimal("0")
        if transaction.transaction_type == TransactionType.INCOME:
            income += amount
            income_count += 1
        else:
            expense += amount
            expense_count += 1
        absolute += abs(amount)

    count = income_count + expense_count
    return TransactionTotals(
        income=income,
        expense=expense,
        income_count=income_count,
        expense_count=expense_count,
        average_amount=absolute / count if count else Decimal("0"),
    )


def expense_totals_by_category(
    transactions: Iterable[Transaction],
    categories: Iterable[TransactionCategory] = (),
) -> list[CategoryTotal]:
    """Group expense amounts by category in order of first appearance."""
    lookup = {c.category_id: c for c in categories}
    totals: dict[str | None, CategoryTotal] = {}

    for transaction in transactions:
        if transaction.transaction_type != TransactionType.EXPENSE:
            continue
        key = transaction.category_id
        existing = totals.get(key)
        if existing is None:
            category = lookup.get(key) if key else None
            existing = CategoryTotal(
                category_id=key,
                name=category.name if category else UNCATEGORIZED,
                color=category.color if category else None,
                total=Decimal("0"),
            )
        totals[key] = CategoryTotal(
            category_id=existing.category_id,
            name=existing.name,
            color=existing.color,
            total=existing.total + (transaction.amount or Decimal("0")),
        )

    return list(totals.values())


def top_expense_category(
    transactions: Iterable[Transaction],
    categories: Iterable[TransactionCategory] = (),
) -> CategoryTotal | None:
    """Category with the highest expense total; first one wins ties."""
    best: CategoryTotal | None = None
    for entry in expense_totals_by_category(transactions, categories):
        if best is None or entry.total > best.total:
            best = entry
    return best


def expense_category_stats(
    transactions: Iterable[Transaction],
    categories: Iterable[TransactionCategory] = (),
    limit: int = 5,
) -> list[CategoryTotal]:
    """Largest expense categories, descending."""
    ranked = sorted(
        expense_totals_by_category(transactions, categories),
        key=lambda entry: entry.total,
        reverse=True,
    )
    return ranked[:limit]
