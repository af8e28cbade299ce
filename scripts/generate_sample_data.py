#!/usr/bin/env python3
"""Generate a sample household and export it as JSON.

Writes loans, repayments, schedules, transactions, categories and
budgets for one owner to the output directory, then logs the
derived loan, budget and transaction summaries.
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from household_finance.config import HouseholdFinanceConfig
from household_finance.engine.amortization import loan_overview
from household_finance.formatting import format_currency, format_percent
from household_finance.generators import BudgetGenerator, LoanGenerator, TransactionGenerator
from household_finance.logging import setup_logging
from household_finance.reports import budget_summary, summarize_transactions, top_expense_category
from household_finance.sinks import JsonFileSink
from household_finance.store import HouseholdDataStore, LoanSnapshotCache

logger = logging.getLogger("household_finance.scripts.generate_sample_data")


def build_household(
    store: HouseholdDataStore,
    owner_id: str,
    num_loans: int,
    num_transactions: int,
    seed: int | None,
    today: date,
) -> None:
    """Populate the store with one owner's sample data."""
    loan_gen = LoanGenerator(seed=seed)
    tx_gen = TransactionGenerator(seed=seed)
    budget_gen = BudgetGenerator(seed=seed)

    categories = tx_gen.generate_categories(owner_id)
    for category in categories:
        store.add_category(category)

    budgets = []
    for category in categories[:3]:
        budget = budget_gen.generate(owner_id, name=category.name, category_id=category.category_id)
        budgets.append(store.add_budget(budget))

    for transaction in tx_gen.generate_batch(
        owner_id, num_transactions, categories=categories, budgets=budgets, today=today
    ):
        store.add_transaction(transaction)

    for _ in range(num_loans):
        loan = store.add_loan(loan_gen.generate(owner_id, today=today))
        for repayment in loan_gen.generate_repayments(loan, today=today):
            store.add_repayment(repayment)


def main(argv: list[str] | None = None) -> int:
    config = HouseholdFinanceConfig.from_env()
    setup_logging(config.log_level, config.log_format)

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--owner", default="demo-user")
    parser.add_argument("--loans", type=int, default=3)
    parser.add_argument("--transactions", type=int, default=120)
    parser.add_argument("--seed", type=int, default=config.seed)
    parser.add_argument("--output", type=Path, default=config.output.json_output_dir)
    args = parser.parse_args(argv)

    today = date.today()
    store = HouseholdDataStore()
    build_household(store, args.owner, args.loans, args.transactions, args.seed, today)

    snapshot = LoanSnapshotCache.from_config(config.cache).write(store, args.owner)
    logger.info("Cached %d loans for %s", len(snapshot), args.owner)

    sink = JsonFileSink(args.output, pretty=True)
    loans = store.get_loans(args.owner)
    sink.write_batch("loans", loans)
    sink.write_batch(
        "repayments",
        [r for loan in loans for r in store.get_loan_repayments(loan.loan_id, args.owner)],
    )
    sink.write_batch("categories", store.get_categories(args.owner))
    sink.write_batch("budgets", store.get_budgets(args.owner))
    transactions = store.get_transactions(args.owner)
    sink.write_batch("transactions", transactions)

    for loan in loans:
        repayments = store.get_loan_repayments(loan.loan_id, args.owner)
        schedule, progress = loan_overview(loan, repayments, today)
        sink.write_schedule(loan, schedule, progress)
        logger.info(
            "%s: %s outstanding, status %s",
            loan.title,
            format_currency(progress.outstanding_principal, config.display),
            progress.status.value,
        )

    totals = summarize_transactions(transactions)
    logger.info(
        "Transactions: income %s, expense %s, balance %s",
        format_currency(totals.income, config.display),
        format_currency(totals.expense, config.display),
        format_currency(totals.net_balance, config.display),
    )
    top = top_expense_category(transactions, store.get_categories(args.owner))
    if top is not None:
        logger.info("Top expense category: %s (%s)", top.name, format_currency(top.total, config.display))

    budgets = budget_summary(store.get_budgets(args.owner))
    logger.info(
        "Budgets: %d overspent, average utilization %s",
        budgets.overspent,
        format_percent(budgets.average_utilization, display=config.display),
    )

    sink.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
