"""
Tests for the Google-backed services with the API clients mocked out.
"""

import socket
from datetime import date
from unittest.mock import Mock, patch

import pytest
import requests
from google.auth.exceptions import TransportError

from paynotify.config import TemplateCells
from paynotify.exceptions import (
    DocumentStorageError,
    RenderError,
    SheetsApiError,
    TemplateNotFoundError,
)
from paynotify.models import PaymentRecord, Period
from paynotify.services.google_drive import GoogleDriveDocumentStore, GoogleDriveOperations
from paynotify.services.google_drive.drive_operations import escape_query_value
from paynotify.services.google_sheets import GoogleSheetsOperations, GoogleSheetsTableStore
from paynotify.services.google_sheets.a1 import cell_range, column_letter
from paynotify.services.pdf import SheetExportRenderer


@pytest.fixture
def record():
    return PaymentRecord(
        row_number=5,
        company_name="Acme KK",
        agent_name="Tanaka",
        payment_month=date(2026, 10, 1),
        amount=108000,
        bank_account="Mizuho 1234567",
    )


class TestA1Notation:
    @pytest.mark.parametrize(
        "index, letter", [(0, "A"), (7, "H"), (25, "Z"), (26, "AA"), (701, "ZZ")]
    )
    def test_column_letter(self, index, letter):
        assert column_letter(index) == letter

    def test_cell_range_quotes_sheet(self):
        assert cell_range("Bob's Payments", 5, 7) == "'Bob''s Payments'!H5"

    def test_drive_query_escape(self):
        assert escape_query_value("Bob's") == "Bob\\'s"


class TestGoogleSheetsTableStore:
    def test_missing_tab_raises(self):
        operations = Mock(spec=GoogleSheetsOperations)
        operations.spreadsheet_id = "sheet-1"
        operations.get_sheet_properties.return_value = None

        with pytest.raises(TemplateNotFoundError):
            GoogleSheetsTableStore(operations, "Payments").ensure_exists()

    def test_read_cell_handles_empty_response(self):
        operations = Mock(spec=GoogleSheetsOperations)
        operations.get_values.return_value = []

        value = GoogleSheetsTableStore(operations, "Payments").read_cell(5, 7)

        assert value == ""
        operations.get_values.assert_called_once_with("'Payments'!H5")

    def test_write_cells_is_one_batch(self):
        operations = Mock(spec=GoogleSheetsOperations)
        store = GoogleSheetsTableStore(operations, "Payments")

        store.write_cells([(2, 7, "approval-warning"), (4, 7, "approval-warning")])

        operations.batch_update_values.assert_called_once_with(
            [
                {"range": "'Payments'!H2", "values": [["approval-warning"]]},
                {"range": "'Payments'!H4", "values": [["approval-warning"]]},
            ]
        )


class TestSheetExportRenderer:
    def _renderer(self, operations, session):
        return SheetExportRenderer(
            operations=operations,
            session=session,
            template_sheet="Notification Template",
            cells=TemplateCells(),
            run_id="ab12cd34",
            today=lambda: date(2026, 10, 16),
        )

    def _operations(self):
        operations = Mock(spec=GoogleSheetsOperations)
        operations.spreadsheet_id = "sheet-1"
        operations.get_sheet_properties.return_value = {"sheetId": 11}
        operations.duplicate_sheet.return_value = 99
        return operations

    def test_render_fills_clone_exports_and_deletes(self, record):
        operations = self._operations()
        session = Mock()
        session.get.return_value = Mock(status_code=200, content=b"%PDF-1.4 export")
        renderer = self._renderer(operations, session)

        content = renderer.render(record, Period(2026, 10))

        assert content == b"%PDF-1.4 export"
        operations.duplicate_sheet.assert_called_once_with(
            11, "Notification Template_ab12cd34_5"
        )
        data, = operations.batch_update_values.call_args.args
        clone = "'Notification Template_ab12cd34_5'"
        assert {"range": f"{clone}!B3", "values": [["Acme KK"]]} in data
        assert {"range": f"{clone}!F1", "values": [["2026/10/16"]]} in data
        assert session.get.call_args.kwargs["params"]["gid"] == "99"
        operations.delete_sheet.assert_called_once_with(99)

    def test_export_failure_still_deletes_clone(self, record):
        operations = self._operations()
        session = Mock()
        session.get.return_value = Mock(status_code=429, content=b"")
        renderer = self._renderer(operations, session)

        with pytest.raises(RenderError):
            renderer.render(record, Period(2026, 10))
        operations.delete_sheet.assert_called_once_with(99)

    def test_request_error_is_wrapped(self, record):
        operations = self._operations()
        session = Mock()
        session.get.side_effect = requests.ConnectionError("offline")
        renderer = self._renderer(operations, session)

        with pytest.raises(RenderError):
            renderer.render(record, Period(2026, 10))

    def test_missing_template(self):
        operations = self._operations()
        operations.get_sheet_properties.return_value = None

        with pytest.raises(TemplateNotFoundError):
            self._renderer(operations, Mock()).verify()


class TestGoogleDriveDocumentStore:
    def test_folder_lookup_is_cached(self):
        operations = Mock(spec=GoogleDriveOperations)
        operations.find_folder.return_value = "folder-1"
        store = GoogleDriveDocumentStore(operations, "root-1")

        assert store.find_folder("2610_Payment_Notifications") == "folder-1"
        assert store.find_folder("2610_Payment_Notifications") == "folder-1"
        operations.find_folder.assert_called_once_with(
            "2610_Payment_Notifications", "root-1"
        )

    def test_save_and_find(self):
        operations = Mock(spec=GoogleDriveOperations)
        operations.upload_file_content.return_value = "file-9"
        operations.find_file.return_value = {"id": "file-9", "name": "a.pdf"}
        store = GoogleDriveDocumentStore(operations, "root-1")

        saved = store.save_pdf("folder-1", "a.pdf", b"%PDF")
        found = store.find_file("folder-1", "a.pdf")

        assert saved == found
        operations.upload_file_content.assert_called_once_with(
            b"%PDF", "a.pdf", "application/pdf", "folder-1"
        )


class TestGoogleSheetsOperations:
    @patch("paynotify.services.google_sheets.sheets_operations.build")
    def test_dates_are_read_as_serial_numbers(self, build):
        request = build.return_value.spreadsheets.return_value.values.return_value.get
        request.return_value.execute.return_value = {"values": [[46296]]}
        operations = GoogleSheetsOperations(Mock(), "sheet-1")

        assert operations.get_values("'Payments'!C2") == [[46296]]
        kwargs = request.call_args.kwargs
        assert kwargs["dateTimeRenderOption"] == "SERIAL_NUMBER"
        assert kwargs["valueRenderOption"] == "UNFORMATTED_VALUE"

    @patch("paynotify.services.google_sheets.sheets_operations.build")
    def test_network_error_is_wrapped(self, build):
        request = build.return_value.spreadsheets.return_value.values.return_value.update
        request.return_value.execute.side_effect = socket.timeout("timed out")
        operations = GoogleSheetsOperations(Mock(), "sheet-1")

        with pytest.raises(SheetsApiError):
            operations.update_values("'Payments'!H2", [["sent"]])


class TestGoogleDriveOperations:
    @patch("paynotify.services.google_drive.drive_operations.build")
    def test_transport_error_on_upload_is_wrapped(self, build):
        files = build.return_value.files.return_value
        files.create.return_value.execute.side_effect = TransportError("reset")
        operations = GoogleDriveOperations(Mock())

        with pytest.raises(DocumentStorageError):
            operations.upload_file_content(b"%PDF", "a.pdf", "application/pdf", "f-1")

    @patch("paynotify.services.google_drive.drive_operations.build")
    def test_timeout_on_search_is_wrapped(self, build):
        files = build.return_value.files.return_value
        files.list.return_value.execute.side_effect = socket.timeout("timed out")
        operations = GoogleDriveOperations(Mock())

        with pytest.raises(DocumentStorageError):
            operations.find_folder("2610_Payment_Notifications", "root-1")

    @patch("paynotify.services.google_drive.drive_operations.build")
    def test_delete_file(self, build):
        files = build.return_value.files.return_value
        operations = GoogleDriveOperations(Mock())

        operations.delete_file("file-9")

        files.delete.assert_called_once_with(fileId="file-9", supportsAllDrives=True)
