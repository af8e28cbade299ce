#!/usr/bin/env python3
"""Print or export the amortization schedule of a single loan.

Example:
    python scripts/loan_schedule.py 10000 3.5 36 --frequency monthly --start 2024-01-01
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from household_finance.config import HouseholdFinanceConfig
from household_finance.engine.amortization import derive_progress, generate_schedule
from household_finance.exceptions import InvalidLoanError
from household_finance.logging import setup_logging
from household_finance.models import Loan, LoanRole, PaymentFrequency, Repayment
from household_finance.sinks import ConsoleSink, JsonFileSink

logger = logging.getLogger("household_finance.scripts.loan_schedule")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("principal", type=Decimal, help="Borrowed amount")
    parser.add_argument("interest_rate", type=Decimal, help="Annual nominal rate in percent")
    parser.add_argument("term_months", type=int, help="Duration in months")
    parser.add_argument(
        "--frequency",
        choices=[f.value for f in PaymentFrequency],
        default=PaymentFrequency.MONTHLY.value,
    )
    parser.add_argument("--start", type=date.fromisoformat, default=date.today(), help="First due date (YYYY-MM-DD)")
    parser.add_argument("--title", default="Kredit")
    parser.add_argument("--role", choices=[r.value for r in LoanRole], default=LoanRole.BORROWER.value)
    parser.add_argument(
        "--paid",
        type=Decimal,
        action="append",
        default=[],
        help="Amount already repaid (repeatable)",
    )
    parser.add_argument("--today", type=date.fromisoformat, default=date.today())
    parser.add_argument("--json", action="store_true", help="Write JSON to the output directory instead")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    config = HouseholdFinanceConfig.from_env()
    setup_logging(config.log_level, config.log_format)
    args = parse_args(argv)

    loan = Loan(
        loan_id="cli",
        owner_id="cli",
        title=args.title,
        principal=args.principal,
        interest_rate=args.interest_rate,
        term_months=args.term_months,
        frequency=PaymentFrequency(args.frequency),
        start_date=args.start,
        role=LoanRole(args.role),
    )
    repayments = [
        Repayment(
            repayment_id=f"cli-{i}",
            loan_id=loan.loan_id,
            owner_id=loan.owner_id,
            amount=amount,
            payment_date=args.today,
        )
        for i, amount in enumerate(args.paid, start=1)
    ]

    try:
        schedule = generate_schedule(loan)
    except InvalidLoanError as exc:
        for field_name, message in exc.errors.items():
            logger.error("%s: %s", field_name, message)
        return 2

    progress = derive_progress(loan, schedule, repayments, args.today)

    if args.json:
        sink = JsonFileSink(config.output.json_output_dir, pretty=config.output.pretty_json)
        path = sink.write_schedule(loan, schedule, progress)
        logger.info("Schedule written to %s", path)
    else:
        ConsoleSink(display=config.display).write_schedule(loan, schedule, progress)
    return 0


if __name__ == "__main__":
    sys.exit(main())
