"""
Tests for status tags, periods, run summaries and error types.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from paynotify.exceptions import (
    InvalidStatusTransitionError,
    RenderError,
    StaleRecordError,
    UnknownStatusError,
)
from paynotify.models import (
    AUTOMATED_TRANSITIONS,
    Outcome,
    PaymentRecord,
    Period,
    RunSummary,
    StatusTag,
    assert_transition,
    can_transition,
)


class TestStatusTag:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_values(self, value):
        assert StatusTag.parse(value) is StatusTag.BLANK

    def test_known_values(self):
        assert StatusTag.parse("approved-for-sending") is StatusTag.APPROVED
        assert StatusTag.parse("error-invalid-date") is StatusTag.ERROR_INVALID_DATE

    def test_unknown_value_is_rejected(self):
        with pytest.raises(UnknownStatusError) as exc_info:
            StatusTag.parse("Approved", row_number=12)

        assert exc_info.value.row_number == 12
        assert exc_info.value.value == "Approved"

    def test_error_tags(self):
        assert StatusTag.ERROR_PDF_NOT_FOUND.is_error
        assert not StatusTag.SENT.is_error


class TestTransitions:
    def test_generation_transitions(self):
        assert can_transition(StatusTag.BLANK, StatusTag.PENDING_APPROVAL)
        assert can_transition(StatusTag.BLANK, StatusTag.APPROVAL_WARNING)

    def test_distribution_transitions(self):
        for new in (
            StatusTag.SENT,
            StatusTag.ERROR_PDF_NOT_FOUND,
            StatusTag.ERROR_INVALID_DATE,
        ):
            assert can_transition(StatusTag.APPROVED, new)

    def test_workflows_never_approve(self):
        approving = [
            current
            for current, targets in AUTOMATED_TRANSITIONS.items()
            if StatusTag.APPROVED in targets
        ]
        assert approving == []

    def test_sent_is_terminal(self):
        with pytest.raises(InvalidStatusTransitionError):
            assert_transition(StatusTag.SENT, StatusTag.PENDING_APPROVAL, row_number=3)

    def test_warning_is_not_regenerated(self):
        assert not can_transition(StatusTag.APPROVAL_WARNING, StatusTag.PENDING_APPROVAL)


class TestPeriod:
    def test_prefix_and_folder(self):
        period = Period(2026, 10)

        assert period.prefix == "2610"
        assert period.folder_name == "2610_Payment_Notifications"
        assert period.label == "2026/10"

    def test_prefix_pads_year_and_month(self):
        assert Period(2005, 3).prefix == "0503"

    def test_contains(self):
        period = Period(2026, 10)

        assert period.contains(date(2026, 10, 31))
        assert not period.contains(date(2025, 10, 1))
        assert not period.contains(None)

    def test_current_uses_timezone(self):
        now = datetime(2026, 10, 31, 20, 0, tzinfo=ZoneInfo("UTC")).astimezone(
            ZoneInfo("Asia/Tokyo")
        )

        assert Period.current("Asia/Tokyo", now=now) == Period(2026, 11)

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            Period(2026, 13)


class TestPaymentRecord:
    def test_period_from_payment_month(self):
        record = PaymentRecord(row_number=2, payment_month=date(2026, 10, 1))

        assert record.has_valid_payment_month
        assert record.period == Period(2026, 10)

    def test_without_payment_month(self):
        record = PaymentRecord(row_number=2, raw_payment_month="TBD")

        assert not record.has_valid_payment_month
        assert record.period is None

    def test_with_status_returns_copy(self):
        record = PaymentRecord(row_number=2, company_name="Acme", agent_name="Tanaka")
        updated = record.with_status(StatusTag.SENT)

        assert updated.status is StatusTag.SENT
        assert record.status is StatusTag.BLANK
        assert str(updated) == "row 2 (Acme / Tanaka)"


class TestRunSummary:
    def test_counts_and_describe(self):
        summary = RunSummary(workflow_id="generation_workflow")
        summary.add(Outcome.GENERATED, 2)
        summary.add(Outcome.GENERATED, 4)
        summary.add(Outcome.WARNING, 3)

        assert summary.count(Outcome.GENERATED) == 2
        assert summary.rows(Outcome.WARNING) == [3]
        assert summary.count(Outcome.FAILED) == 0
        assert summary.describe() == "generated=2, warning=1"

    def test_empty_summary(self):
        assert RunSummary(workflow_id="x").describe() == "no records processed"


class TestExceptions:
    def test_row_number_and_to_dict(self):
        error = StaleRecordError(4, "approved-for-sending", "sent")

        assert error.row_number == 4
        assert str(error).startswith("[BIZ_2011] Row 4")
        assert error.to_dict()["details"]["actual"] == "sent"
        assert error.to_dict()["cause"] is None

    def test_cause_is_described(self):
        error = RenderError("export failed", original_exception=TimeoutError("slow"))

        assert error.to_dict()["cause"] == "TimeoutError: slow"
        assert error.row_number is None
