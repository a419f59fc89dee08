"""
Year-month processing period used for filtering and folder naming.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

FOLDER_SUFFIX = "_Payment_Notifications"


@dataclass(frozen=True)
class Period:
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month: {self.month}")

    @classmethod
    def from_date(cls, value: date) -> "Period":
        return cls(value.year, value.month)

    @classmethod
    def current(cls, timezone: str = "UTC", now: Optional[datetime] = None) -> "Period":
        """Period of the current run in the configured timezone."""
        now = now or datetime.now(ZoneInfo(timezone))
        return cls(now.year, now.month)

    @property
    def prefix(self) -> str:
        """Two-digit year and month, e.g. ``2610`` for October 2026."""
        return f"{self.year % 100:02d}{self.month:02d}"

    @property
    def folder_name(self) -> str:
        return f"{self.prefix}{FOLDER_SUFFIX}"

    @property
    def label(self) -> str:
        return f"{self.year}/{self.month:02d}"

    def contains(self, value: Optional[date]) -> bool:
        if value is None:
            return False
        return value.year == self.year and value.month == self.month

    def __str__(self) -> str:
        return self.label
