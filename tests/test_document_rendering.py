"""
Tests for the local document store and the reportlab renderer.
"""

from datetime import date

import pytest

from paynotify.exceptions import DocumentStorageError
from paynotify.models import PaymentRecord, Period
from paynotify.services.pdf import ReportLabRenderer
from paynotify.services.storage import LocalDocumentStore


class TestLocalDocumentStore:
    def test_folder_lifecycle(self, tmp_path):
        store = LocalDocumentStore(str(tmp_path))

        assert store.find_folder("2610_Payment_Notifications") is None
        folder_id = store.ensure_folder("2610_Payment_Notifications")

        assert store.find_folder("2610_Payment_Notifications") == folder_id
        assert (tmp_path / "2610_Payment_Notifications").is_dir()
        assert store.list_file_names(folder_id) == set()

    def test_save_find_and_read(self, tmp_path):
        store = LocalDocumentStore(str(tmp_path))
        folder_id = store.ensure_folder("2610_Payment_Notifications")

        saved = store.save_pdf(folder_id, "a.pdf", b"%PDF-1.4 a")

        assert store.list_file_names(folder_id) == {"a.pdf"}
        found = store.find_file(folder_id, "a.pdf")
        assert found == saved
        assert store.read_file(found) == b"%PDF-1.4 a"
        assert store.find_file(folder_id, "b.pdf") is None

    def test_delete_file(self, tmp_path):
        store = LocalDocumentStore(str(tmp_path))
        folder_id = store.ensure_folder("2610_Payment_Notifications")
        saved = store.save_pdf(folder_id, "a.pdf", b"%PDF-1.4 a")

        store.delete_file(saved)

        assert store.list_file_names(folder_id) == set()
        with pytest.raises(DocumentStorageError):
            store.delete_file(saved)


class TestReportLabRenderer:
    @pytest.fixture
    def record(self):
        return PaymentRecord(
            row_number=2,
            company_name="株式会社アクメ",
            agent_name="田中 & Sons <Ltd>",
            payment_month=date(2026, 10, 1),
            amount=108000,
            bank_account="みずほ銀行 1234567",
        )

    def test_renders_pdf_bytes(self, record):
        renderer = ReportLabRenderer(today=lambda: date(2026, 10, 16))

        content = renderer.render(record, Period(2026, 10))

        assert content.startswith(b"%PDF")
        assert len(content) > 1000
