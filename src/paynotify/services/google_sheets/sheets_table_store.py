"""
Table store backed by a tab of a Google spreadsheet.
"""

from typing import Any, List, Sequence

from loguru import logger

from paynotify.exceptions import TemplateNotFoundError
from paynotify.services.google_sheets.a1 import cell_range, quote_sheet
from paynotify.services.google_sheets.sheets_operations import GoogleSheetsOperations
from paynotify.services.records.table_store import CellUpdate, TableStore


class GoogleSheetsTableStore(TableStore):
    """Reads and writes the payment data tab through the Sheets API."""

    def __init__(self, operations: GoogleSheetsOperations, sheet_name: str):
        self.operations = operations
        self.sheet_name = sheet_name

    def ensure_exists(self) -> None:
        """Raise if the data tab is missing from the spreadsheet."""
        if self.operations.get_sheet_properties(self.sheet_name) is None:
            raise TemplateNotFoundError(
                self.sheet_name, spreadsheet_id=self.operations.spreadsheet_id
            )

    def read_rows(self) -> List[List[Any]]:
        rows = self.operations.get_values(quote_sheet(self.sheet_name))
        logger.debug(f"Read {len(rows)} rows from {self.sheet_name}")
        return rows

    def read_cell(self, row_number: int, column_index: int) -> Any:
        values = self.operations.get_values(
            cell_range(self.sheet_name, row_number, column_index)
        )
        if not values or not values[0]:
            return ""
        return values[0][0]

    def write_cell(self, row_number: int, column_index: int, value: Any) -> None:
        self.operations.update_values(
            cell_range(self.sheet_name, row_number, column_index), [[value]]
        )

    def write_cells(self, updates: Sequence[CellUpdate]) -> None:
        data = [
            {
                "range": cell_range(self.sheet_name, row_number, column_index),
                "values": [[value]],
            }
            for row_number, column_index, value in updates
        ]
        self.operations.batch_update_values(data)
