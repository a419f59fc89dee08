from paynotify.services.records.record_repository import (
    PaymentRecordRepository,
    RecordLoadResult,
)
from paynotify.services.records.table_store import CellUpdate, TableStore

__all__ = [
    "PaymentRecordRepository",
    "RecordLoadResult",
    "TableStore",
    "CellUpdate",
]
