"""
Completion summary reported at the end of each workflow run.
"""

from typing import Dict, List

from pydantic import BaseModel, Field


class Outcome:
    """Per-record outcome names used in summaries and metrics."""

    GENERATED = "generated"
    WARNING = "warning"
    SENT = "sent"
    PDF_NOT_FOUND = "pdf_not_found"
    INVALID_DATE = "invalid_date"
    FAILED = "failed"
    STALE = "stale"
    REJECTED = "rejected"


class RunSummary(BaseModel):
    """Per-outcome row numbers for a single workflow run."""

    workflow_id: str
    period: str = ""
    dry_run: bool = False
    outcomes: Dict[str, List[int]] = Field(default_factory=dict)
    failures: Dict[int, str] = Field(
        default_factory=dict, description="Error message per failed row"
    )

    def add(self, outcome: str, row_number: int) -> None:
        self.outcomes.setdefault(outcome, []).append(row_number)

    def count(self, outcome: str) -> int:
        return len(self.outcomes.get(outcome, []))

    def rows(self, outcome: str) -> List[int]:
        return list(self.outcomes.get(outcome, []))

    @property
    def counts(self) -> Dict[str, int]:
        return {outcome: len(rows) for outcome, rows in self.outcomes.items()}

    def describe(self) -> str:
        if not self.outcomes:
            return "no records processed"
        return ", ".join(
            f"{outcome}={count}" for outcome, count in sorted(self.counts.items())
        )
