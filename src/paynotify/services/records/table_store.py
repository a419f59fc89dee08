"""
Table store interface over the shared payment sheet.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Sequence, Tuple

# (row_number, column_index, value); rows are 1-based, columns 0-based
CellUpdate = Tuple[int, int, Any]


class TableStore(ABC):
    """Row/column access to the shared table."""

    @abstractmethod
    def read_rows(self) -> List[List[Any]]:
        """Return every row starting at row 1, header rows included."""

    @abstractmethod
    def read_cell(self, row_number: int, column_index: int) -> Any:
        pass

    @abstractmethod
    def write_cell(self, row_number: int, column_index: int, value: Any) -> None:
        pass

    def write_cells(self, updates: Sequence[CellUpdate]) -> None:
        for row_number, column_index, value in updates:
            self.write_cell(row_number, column_index, value)

    def flush(self) -> None:
        """Make pending writes visible to other readers."""
        pass
