"""
Tests for reading rows and writing statuses through the repository.
"""

from datetime import date

import pytest
from conftest import payment_row

from paynotify.exceptions import InvalidStatusTransitionError, StaleRecordError
from paynotify.models import StatusTag


class TestLoadRecords:
    def test_maps_columns(self, make_sheet):
        _, repository = make_sheet(
            payment_row(
                company="Acme KK",
                agent="Tanaka",
                month="2026/10/01",
                amount=108000,
                bank="Mizuho 1234567",
                email="tanaka@example.com",
                check="¥0",
                status="pending-approval",
            )
        )

        loaded = repository.load_records()

        assert loaded.rejected == []
        record = loaded.records[0]
        assert record.row_number == 2
        assert record.company_name == "Acme KK"
        assert record.agent_name == "Tanaka"
        assert record.payment_month == date(2026, 10, 1)
        assert record.amount == 108000
        assert record.bank_account == "Mizuho 1234567"
        assert record.email == "tanaka@example.com"
        assert record.check_value == "¥0"
        assert record.status is StatusTag.PENDING_APPROVAL

    def test_row_numbers_skip_blank_rows(self, make_sheet):
        _, repository = make_sheet(
            payment_row(agent="A"), ["", "", ""], payment_row(agent="B")
        )

        records = repository.load_records().records

        assert [(r.row_number, r.agent_name) for r in records] == [(2, "A"), (4, "B")]

    def test_short_rows_are_padded(self, make_sheet):
        _, repository = make_sheet(["Acme KK", "Tanaka", "2026-10-01"])

        record = repository.load_records().records[0]

        assert record.status is StatusTag.BLANK
        assert record.email == ""

    def test_unknown_status_rejected(self, make_sheet):
        _, repository = make_sheet(payment_row(status="done!"), payment_row())

        loaded = repository.load_records()

        assert [r.row_number for r in loaded.records] == [3]
        assert [row for row, _ in loaded.rejected] == [2]

    def test_serial_date_cell(self, make_sheet):
        _, repository = make_sheet(payment_row(month=46296))

        record = repository.load_records().records[0]

        assert record.payment_month == date(2026, 10, 1)
        assert record.raw_payment_month == 46296

    def test_invalid_month_is_kept_as_raw(self, make_sheet):
        _, repository = make_sheet(payment_row(month="next month"))

        record = repository.load_records().records[0]

        assert record.payment_month is None
        assert record.raw_payment_month == "next month"


class TestUpdateStatus:
    def test_writes_status_cell(self, make_sheet):
        store, repository = make_sheet(payment_row())
        record = repository.load_records().records[0]

        updated = repository.update_status(record, StatusTag.PENDING_APPROVAL)

        assert updated.status is StatusTag.PENDING_APPROVAL
        assert store.writes == [(2, 7, "pending-approval")]
        assert store.flushes == 1

    def test_illegal_transition_is_refused(self, make_sheet):
        store, repository = make_sheet(payment_row(status="sent"))
        record = repository.load_records().records[0]

        with pytest.raises(InvalidStatusTransitionError):
            repository.update_status(record, StatusTag.PENDING_APPROVAL)
        assert store.writes == []

    def test_stale_status_is_not_overwritten(self, make_sheet):
        store, repository = make_sheet(payment_row(status="approved-for-sending"))
        record = repository.load_records().records[0]
        store.rows[1][7] = ""

        with pytest.raises(StaleRecordError) as exc_info:
            repository.update_status(record, StatusTag.SENT)

        assert exc_info.value.row_number == 2
        assert store.writes == []

    def test_check_can_be_disabled(self, make_sheet):
        store, repository = make_sheet(
            payment_row(status="approved-for-sending"), optimistic_check=False
        )
        record = repository.load_records().records[0]
        store.rows[1][7] = "pending-approval"

        repository.update_status(record, StatusTag.SENT)

        assert store.status(2) == "sent"


class TestUpdateStatuses:
    def test_batch_write_skips_stale_rows(self, make_sheet):
        store, repository = make_sheet(
            payment_row(agent="A", check=5),
            payment_row(agent="B", check=5),
        )
        records = repository.load_records().records
        store.rows[2][7] = "approved-for-sending"

        updated, stale = repository.update_statuses(records, StatusTag.APPROVAL_WARNING)

        assert [r.row_number for r in updated] == [2]
        assert [e.row_number for e in stale] == [3]
        assert store.status(2) == "approval-warning"
        assert store.status(3) == "approved-for-sending"
        assert store.flushes == 1
