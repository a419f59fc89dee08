"""
Renders notifications by filling a clone of the template sheet and
exporting it through the spreadsheet PDF export endpoint.
"""

from datetime import date, datetime
from typing import Any, Callable, Dict, Optional
from zoneinfo import ZoneInfo

import requests
from google.auth.transport.requests import AuthorizedSession
from loguru import logger

from paynotify.config import TemplateCells
from paynotify.exceptions import RenderError, TemplateNotFoundError
from paynotify.models import PaymentRecord, Period
from paynotify.services.google_sheets.a1 import address_range
from paynotify.services.google_sheets.sheets_operations import GoogleSheetsOperations
from paynotify.services.pdf.renderer import NotificationRenderer

EXPORT_URL = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/export"

EXPORT_PARAMS = {
    "format": "pdf",
    "size": "A4",
    "portrait": "true",
    "fitw": "true",
    "gridlines": "false",
    "printtitle": "false",
    "sheetnames": "false",
    "pagenum": "UNDEFINED",
    "fzr": "false",
}


def _sheet_date(value: date) -> str:
    return f"{value.year}/{value.month:02d}/{value.day:02d}"


class SheetExportRenderer(NotificationRenderer):
    """
    Clones the template tab once per record, writes the record into the
    fixed template cells, exports the clone as PDF and deletes it.
    """

    def __init__(
        self,
        operations: GoogleSheetsOperations,
        session: AuthorizedSession,
        template_sheet: str,
        cells: TemplateCells,
        run_id: str,
        timezone: str = "Asia/Tokyo",
        request_timeout: int = 60,
        today: Optional[Callable[[], date]] = None,
    ):
        self.operations = operations
        self.session = session
        self.template_sheet = template_sheet
        self.cells = cells
        self.run_id = run_id
        self.request_timeout = request_timeout
        self._today = today or (lambda: datetime.now(ZoneInfo(timezone)).date())
        self._template_sheet_id: Optional[int] = None

    def verify(self) -> None:
        self._get_template_sheet_id()

    def _get_template_sheet_id(self) -> int:
        if self._template_sheet_id is None:
            properties = self.operations.get_sheet_properties(self.template_sheet)
            if properties is None:
                raise TemplateNotFoundError(
                    self.template_sheet, spreadsheet_id=self.operations.spreadsheet_id
                )
            self._template_sheet_id = properties["sheetId"]
        return self._template_sheet_id

    def clone_title(self, record: PaymentRecord) -> str:
        """Clone names are unique per run and row."""
        return f"{self.template_sheet}_{self.run_id}_{record.row_number}"

    def _cell_values(self, record: PaymentRecord) -> Dict[str, Any]:
        payment_month = (
            _sheet_date(record.payment_month)
            if record.payment_month
            else record.raw_payment_month
        )
        return {
            self.cells.company_name: record.company_name,
            self.cells.agent_name: record.agent_name,
            self.cells.payment_month: payment_month,
            self.cells.amount: record.amount,
            self.cells.bank_account: record.bank_account,
            self.cells.issue_date: _sheet_date(self._today()),
        }

    def render(self, record: PaymentRecord, period: Period) -> bytes:
        template_id = self._get_template_sheet_id()
        title = self.clone_title(record)
        clone_id = self.operations.duplicate_sheet(template_id, title)

        try:
            data = [
                {"range": address_range(title, address), "values": [[value]]}
                for address, value in self._cell_values(record).items()
            ]
            self.operations.batch_update_values(data, value_input_option="USER_ENTERED")
            return self._export(clone_id)
        finally:
            self.operations.delete_sheet(clone_id)

    def _export(self, sheet_id: int) -> bytes:
        url = EXPORT_URL.format(spreadsheet_id=self.operations.spreadsheet_id)
        params = dict(EXPORT_PARAMS, gid=str(sheet_id))

        try:
            response = self.session.get(
                url, params=params, timeout=self.request_timeout
            )
        except requests.RequestException as e:
            logger.error(f"PDF export request failed: {e}")
            raise RenderError("PDF export request failed", original_exception=e)

        if response.status_code != 200:
            logger.error(f"PDF export returned HTTP {response.status_code}")
            raise RenderError(
                f"PDF export returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        return response.content

    def close(self) -> None:
        self.session.close()
