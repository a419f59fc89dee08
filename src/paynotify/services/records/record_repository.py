"""
Repository mapping sheet rows to payment records and back.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Sequence, Tuple

from loguru import logger

from paynotify.config import ColumnMap
from paynotify.exceptions import StaleRecordError, UnknownStatusError
from paynotify.models import PaymentRecord, StatusTag, assert_transition
from paynotify.services.records.table_store import TableStore
from paynotify.utils import parse_payment_month


@dataclass
class RecordLoadResult:
    records: List[PaymentRecord] = field(default_factory=list)
    rejected: List[Tuple[int, UnknownStatusError]] = field(default_factory=list)


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else ""


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class PaymentRecordRepository:
    """
    Reads payment rows and writes status changes.

    Status writes are checked against the automated transition table.
    With ``optimistic_check`` enabled the status cell is re-read before
    writing and the write is refused if another writer changed it.
    """

    def __init__(
        self,
        store: TableStore,
        columns: ColumnMap = None,
        header_rows: int = 1,
        optimistic_check: bool = True,
    ):
        self.store = store
        self.columns = columns or ColumnMap()
        self.header_rows = header_rows
        self.optimistic_check = optimistic_check

    def load_records(self) -> RecordLoadResult:
        rows = self.store.read_rows()
        result = RecordLoadResult()

        for offset, row in enumerate(rows[self.header_rows :]):
            row_number = self.header_rows + offset + 1
            if not any(_text(value) for value in row):
                continue

            try:
                result.records.append(self._to_record(row_number, row))
            except UnknownStatusError as e:
                logger.warning(f"Row {row_number} rejected: {e}")
                result.rejected.append((row_number, e))

        logger.info(
            f"Loaded {len(result.records)} records "
            f"({len(result.rejected)} rejected)"
        )
        return result

    def _to_record(self, row_number: int, row: Sequence[Any]) -> PaymentRecord:
        columns = self.columns
        raw_month = _cell(row, columns.payment_month)
        return PaymentRecord(
            row_number=row_number,
            company_name=_text(_cell(row, columns.company_name)),
            agent_name=_text(_cell(row, columns.agent_name)),
            payment_month=parse_payment_month(raw_month),
            raw_payment_month=raw_month,
            amount=_cell(row, columns.amount),
            bank_account=_text(_cell(row, columns.bank_account)),
            email=_text(_cell(row, columns.email)),
            check_value=_cell(row, columns.check_value),
            status=StatusTag.parse(_cell(row, columns.status), row_number=row_number),
        )

    def _verify_unchanged(self, record: PaymentRecord, current_value: Any) -> None:
        try:
            current = StatusTag.parse(current_value, row_number=record.row_number)
        except UnknownStatusError:
            raise StaleRecordError(
                record.row_number, record.status.value, _text(current_value)
            )
        if current is not record.status:
            raise StaleRecordError(
                record.row_number, record.status.value, current.value
            )

    def update_status(
        self, record: PaymentRecord, new_status: StatusTag
    ) -> PaymentRecord:
        """Write a single status change and return the updated record."""
        assert_transition(record.status, new_status, row_number=record.row_number)

        if self.optimistic_check:
            current_value = self.store.read_cell(
                record.row_number, self.columns.status
            )
            self._verify_unchanged(record, current_value)

        self.store.write_cell(record.row_number, self.columns.status, new_status.value)
        self.store.flush()
        logger.debug(
            f"Row {record.row_number}: {record.status.value!r} -> {new_status.value!r}"
        )
        return record.with_status(new_status)

    def update_statuses(
        self, records: Iterable[PaymentRecord], new_status: StatusTag
    ) -> Tuple[List[PaymentRecord], List[StaleRecordError]]:
        """
        Write the same status to several rows in one batch.

        Returns:
            The updated records and the stale-row errors that were skipped
        """
        records = list(records)
        for record in records:
            assert_transition(record.status, new_status, row_number=record.row_number)

        stale: List[StaleRecordError] = []
        writable = records
        if self.optimistic_check and records:
            rows = self.store.read_rows()
            writable = []
            for record in records:
                row_index = record.row_number - 1
                row = rows[row_index] if row_index < len(rows) else []
                try:
                    self._verify_unchanged(record, _cell(row, self.columns.status))
                    writable.append(record)
                except StaleRecordError as e:
                    logger.warning(str(e))
                    stale.append(e)

        if writable:
            self.store.write_cells(
                [
                    (record.row_number, self.columns.status, new_status.value)
                    for record in writable
                ]
            )
            self.store.flush()

        return [record.with_status(new_status) for record in writable], stale
