"""Console sink for inspecting records and schedules."""

import json
import sys
from typing import Any, TextIO

from household_finance.config import DisplayConfig
from household_finance.formatting import format_currency, format_date, format_ratio
from household_finance.models.enums import PaymentFrequency
from household_finance.models.loan import Loan, ProgressSummary, ScheduleEntry
from household_finance.sinks.serialization import to_dict


class ConsoleSink:
    """Output data to a text stream (stdout by default)."""

    def __init__(
        self,
        pretty: bool = True,
        max_records: int | None = None,
        display: DisplayConfig | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_records : int | None
            Maximum records to print per batch (None for all).
        display : DisplayConfig | None
            Amount and date formatting.
        stream : TextIO | None
            Target stream; defaults to ``sys.stdout``.
        """
        self.pretty = pretty
        self.max_records = max_records
        self.display = display or DisplayConfig()
        self.stream = stream or sys.stdout
        self._counts: dict[str, int] = {}

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def _money(self, value: Any) -> str:
        return format_currency(value, self.display)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records as JSON."""
        self._print(f"\n{'='*60}")
        self._print(f"Entity: {entity_type} ({len(records)} records)")
        self._print("=" * 60)

        display_records = records[: self.max_records] if self.max_records else records

        for record in display_records:
            data = to_dict(record)
            self._print(json.dumps(data, indent=2 if self.pretty else None, ensure_ascii=False))

        if self.max_records and len(records) > self.max_records:
            self._print(f"... and {len(records) - self.max_records} more records")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def write_schedule(
        self,
        loan: Loan,
        schedule: list[ScheduleEntry],
        progress: ProgressSummary | None = None,
    ) -> None:
        """Print an amortization table with optional progress figures."""
        self._print(f"\n{loan.title or loan.loan_id}")
        self._print(
            f"{self._money(loan.principal)} @ {loan.interest_rate} % | "
            f"{loan.term_months} Monate | {PaymentFrequency(loan.frequency).label}"
        )
        self._print("-" * 78)
        self._print(f"{'Nr':>4} {'Faellig':>10} {'Rate':>15} {'Zinsen':>15} {'Tilgung':>15} {'Rest':>15}")
        for entry in schedule:
            self._print(
                f"{entry.period:>4} {format_date(entry.due_date, self.display):>10} "
                f"{self._money(entry.payment):>15} {self._money(entry.interest):>15} "
                f"{self._money(entry.principal):>15} {self._money(entry.remaining):>15}"
            )
        self._print("-" * 78)

        if progress is not None:
            self._print(f"Geplante Summe: {self._money(progress.planned_total)} (Zinsen {self._money(progress.total_interest)})")
            self._print(
                f"Gezahlt: {self._money(progress.total_repayments)} "
                f"({format_ratio(progress.principal_progress, 0, self.display)})"
            )
            self._print(f"Restschuld: {self._money(progress.outstanding_principal)}")
            if progress.next_installment is not None:
                nxt = progress.next_installment
                self._print(f"Naechste Rate: {format_date(nxt.due_date, self.display)} {self._money(nxt.payment)}")
            self._print(f"Status: {progress.status.value}")

        self._counts["schedules"] = self._counts.get("schedules", 0) + 1

    def close(self) -> None:
        """Print summary."""
        self._print(f"\n{'='*60}")
        self._print("Console Sink Summary")
        self._print("=" * 60)
        for entity_type, count in self._counts.items():
            self._print(f"  {entity_type}: {count} records")
