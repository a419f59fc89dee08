"""
Tests for record selection and PDF naming.
"""

from datetime import date

import pytest

from paynotify.exceptions import NamingCollisionError
from paynotify.models import PaymentRecord, Period, StatusTag
from paynotify.services.eligibility import (
    is_check_cleared,
    select_for_distribution,
    select_for_generation,
)
from paynotify.services.naming import NotificationName, choose_file_name

PERIOD = Period(2026, 10)


def _record(row, status=StatusTag.BLANK, check=0, month=date(2026, 10, 1), **kwargs):
    return PaymentRecord(
        row_number=row, status=status, check_value=check, payment_month=month, **kwargs
    )


class TestCheckGuard:
    @pytest.mark.parametrize("value", [None, 0, 0.0, "", "0", "¥0"])
    def test_cleared(self, value):
        assert is_check_cleared(value)

    @pytest.mark.parametrize("value", [1, -5, 0.5, "¥100", "abc", " 0 ", True])
    def test_not_cleared(self, value):
        assert not is_check_cleared(value)


class TestSelectForGeneration:
    def test_buckets_are_disjoint(self):
        records = [
            _record(2, check=0),
            _record(3, check=120),
            _record(4, check=0, month=date(2026, 9, 30)),
            _record(5, status=StatusTag.PENDING_APPROVAL),
            _record(6, status=StatusTag.APPROVAL_WARNING, check=120),
            _record(7, month=None),
        ]

        selection = select_for_generation(records, PERIOD)

        assert [r.row_number for r in selection.to_process] == [2]
        assert [r.row_number for r in selection.warnings] == [3]


class TestSelectForDistribution:
    def test_only_exact_approved_tag(self):
        records = [
            _record(2, status=StatusTag.APPROVED),
            _record(3, status=StatusTag.SENT),
            _record(4, status=StatusTag.ERROR_PDF_NOT_FOUND),
            _record(5, status=StatusTag.APPROVED, month=None),
        ]

        assert [r.row_number for r in select_for_distribution(records)] == [2, 5]


class TestNotificationName:
    def test_names(self):
        name = NotificationName.build("2610", "Tanaka", "Acme KK", 7)

        assert name.base_name == "2610_Tanaka_Payment_Notification.pdf"
        assert name.unique_name == "2610_Tanaka_Payment_Notification_Acme KK_7.pdf"
        assert name.lookup_order() == [name.unique_name, name.base_name]

    def test_path_separators_are_replaced(self):
        name = NotificationName.build("2610", "Tanaka/Sato", "A\\B KK", 7)

        assert name.base_name == "2610_Tanaka_Sato_Payment_Notification.pdf"
        assert name.unique_name == "2610_Tanaka_Sato_Payment_Notification_A_B KK_7.pdf"

    def test_for_record(self):
        record = _record(3, agent_name="Sato", company_name="Beta")

        name = NotificationName.for_record(record, PERIOD)

        assert name.base_name == "2610_Sato_Payment_Notification.pdf"

    def test_base_name_when_free(self):
        name = NotificationName.build("2610", "Tanaka", "Acme KK", 7)

        assert choose_file_name(name, set()) == name.base_name

    def test_unique_name_when_base_taken(self):
        name = NotificationName.build("2610", "Tanaka", "Acme KK", 7)

        assert choose_file_name(name, {name.base_name}) == name.unique_name

    def test_both_taken_raises(self):
        name = NotificationName.build("2610", "Tanaka", "Acme KK", 7)

        with pytest.raises(NamingCollisionError):
            choose_file_name(name, {name.base_name, name.unique_name}, "2610_folder")
