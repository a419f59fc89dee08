"""
Shared fixtures: in-memory stand-ins for the sheet, document store,
renderer and mail transport.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Set

import pytest

from paynotify.config import AppConfig, ColumnMap, MailConfig, StorageConfig
from paynotify.exceptions import MessageDeliveryError, RenderError
from paynotify.models import PaymentRecord, Period
from paynotify.orchestrator import WorkflowOrchestrator
from paynotify.services.gmail import MessageTransport, OutgoingMessage
from paynotify.services.pdf import NotificationRenderer
from paynotify.services.records import PaymentRecordRepository, TableStore
from paynotify.services.storage import DocumentStore, StoredFile

COLUMNS = ColumnMap()
HEADER = [
    "Company",
    "Agent",
    "Payment month",
    "Amount",
    "Bank account",
    "Email",
    "Check",
    "Status",
]
RUN_DATE = date(2026, 10, 16)
PERIOD = Period(2026, 10)


def payment_row(
    company: str = "Acme KK",
    agent: str = "Tanaka",
    month: Any = "2026-10-01",
    amount: Any = 108000,
    bank: str = "Mizuho 1234567",
    email: str = "tanaka@example.com",
    check: Any = 0,
    status: str = "",
) -> List[Any]:
    return [company, agent, month, amount, bank, email, check, status]


class InMemoryTableStore(TableStore):
    """Rows held in a list; row 1 is the header."""

    def __init__(self, rows: List[List[Any]]):
        self.rows = [list(row) for row in rows]
        self.writes: List[tuple] = []
        self.flushes = 0

    def read_rows(self) -> List[List[Any]]:
        return [list(row) for row in self.rows]

    def read_cell(self, row_number: int, column_index: int) -> Any:
        if row_number - 1 >= len(self.rows):
            return ""
        row = self.rows[row_number - 1]
        return row[column_index] if column_index < len(row) else ""

    def write_cell(self, row_number: int, column_index: int, value: Any) -> None:
        while len(self.rows) < row_number:
            self.rows.append([])
        row = self.rows[row_number - 1]
        while len(row) <= column_index:
            row.append("")
        row[column_index] = value
        self.writes.append((row_number, column_index, value))

    def flush(self) -> None:
        self.flushes += 1

    def status(self, row_number: int) -> Any:
        return self.read_cell(row_number, COLUMNS.status)


class InMemoryDocumentStore(DocumentStore):
    def __init__(self):
        self.folders: Dict[str, Dict[str, bytes]] = {}
        self.lookups: List[str] = []

    def find_folder(self, name: str) -> Optional[str]:
        return name if name in self.folders else None

    def create_folder(self, name: str) -> str:
        self.folders.setdefault(name, {})
        return name

    def list_file_names(self, folder_id: str) -> Set[str]:
        return set(self.folders.get(folder_id, {}))

    def find_file(self, folder_id: str, name: str) -> Optional[StoredFile]:
        self.lookups.append(name)
        if name in self.folders.get(folder_id, {}):
            return StoredFile(file_id=f"{folder_id}/{name}", name=name, folder_id=folder_id)
        return None

    def save_pdf(self, folder_id: str, name: str, content: bytes) -> StoredFile:
        self.folders.setdefault(folder_id, {})[name] = content
        return StoredFile(file_id=f"{folder_id}/{name}", name=name, folder_id=folder_id)

    def read_file(self, stored_file: StoredFile) -> bytes:
        return self.folders[stored_file.folder_id][stored_file.name]

    def delete_file(self, stored_file: StoredFile) -> None:
        del self.folders[stored_file.folder_id][stored_file.name]

    def add_file(self, folder_name: str, name: str, content: bytes = b"%PDF-1.4"):
        self.folders.setdefault(folder_name, {})[name] = content


class FakeRenderer(NotificationRenderer):
    def __init__(self, fail_rows: Set[int] = frozenset()):
        self.fail_rows = set(fail_rows)
        self.rendered: List[int] = []
        self.closed = False

    def render(self, record: PaymentRecord, period: Period) -> bytes:
        if record.row_number in self.fail_rows:
            raise RenderError(f"export failed for row {record.row_number}", status_code=500)
        self.rendered.append(record.row_number)
        return f"%PDF-1.4 row {record.row_number}".encode()

    def close(self) -> None:
        self.closed = True


class FakeTransport(MessageTransport):
    def __init__(self, fail_addresses: Set[str] = frozenset()):
        self.fail_addresses = set(fail_addresses)
        self.sent: List[OutgoingMessage] = []

    def send(self, message: OutgoingMessage) -> str:
        if self.fail_addresses.intersection(message.to):
            raise MessageDeliveryError(f"rejected {message.to}")
        self.sent.append(message)
        return f"msg-{len(self.sent)}"


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(
        storage=StorageConfig(backend="local", local_root=str(tmp_path / "output")),
        mail=MailConfig(sender_alias="ap@example.com", send_delay_seconds=0),
        renderer="reportlab",
        optimistic_status_check=True,
    )


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def orchestrator() -> WorkflowOrchestrator:
    return WorkflowOrchestrator()


@pytest.fixture
def make_sheet():
    """Build a table store and repository from data rows (header added)."""

    def _make(*rows: List[Any], optimistic_check: bool = True):
        store = InMemoryTableStore([HEADER, *rows])
        repository = PaymentRecordRepository(
            store, columns=COLUMNS, header_rows=1, optimistic_check=optimistic_check
        )
        return store, repository

    return _make


def run(orchestrator: WorkflowOrchestrator, workflow):
    orchestrator.register_workflow(workflow)
    return orchestrator.execute_workflow(workflow.workflow_id)
