"""JSON file sink for exporting records and schedules."""

import json
import logging
from pathlib import Path
from typing import Any

from household_finance.exceptions import SinkError
from household_finance.models.loan import Loan, ProgressSummary, ScheduleEntry
from household_finance.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Output data to JSON files."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def _dump(self, file_path: Path, data: Any) -> None:
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2 if self.pretty else None, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as exc:
            raise SinkError(f"Could not write {file_path}: {exc}") from exc

    def write_batch(self, entity_type: str, records: list[Any]) -> Path:
        """Write a batch of records to ``<entity_type>.json``."""
        file_path = self.output_dir / f"{entity_type}.json"
        self._dump(file_path, [to_dict(record) for record in records])
        self._counts[entity_type] = len(records)
        return file_path

    def write_schedule(
        self,
        loan: Loan,
        schedule: list[ScheduleEntry],
        progress: ProgressSummary | None = None,
    ) -> Path:
        """Write a loan with its schedule and optional progress to one file."""
        file_path = self.output_dir / f"schedule_{loan.loan_id}.json"
        document = {
            "loan": to_dict(loan),
            "schedule": [to_dict(entry) for entry in schedule],
        }
        if progress is not None:
            document["progress"] = to_dict(progress)
        self._dump(file_path, document)
        self._counts["schedules"] = self._counts.get("schedules", 0) + 1
        return file_path

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def close(self) -> None:
        """Log a summary of what was written."""
        logger.info("JSON files written to: %s", self.output_dir)
        for entity_type, count in self._counts.items():
            logger.info("  %s: %d records", entity_type, count)
