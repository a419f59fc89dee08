"""
Builds the external collaborators of the workflows from configuration.
"""

from google.auth.transport.requests import AuthorizedSession
from google.oauth2.credentials import Credentials
from loguru import logger

from paynotify.config import AppConfig
from paynotify.exceptions import ConfigurationError
from paynotify.services.gmail import GmailTransport, MessageTransport
from paynotify.services.google_auth import GoogleAuth
from paynotify.services.google_drive import (
    GoogleDriveDocumentStore,
    GoogleDriveOperations,
)
from paynotify.services.google_sheets import (
    GoogleSheetsOperations,
    GoogleSheetsTableStore,
)
from paynotify.services.pdf import (
    NotificationRenderer,
    ReportLabRenderer,
    SheetExportRenderer,
)
from paynotify.services.records import PaymentRecordRepository
from paynotify.services.storage import DocumentStore, LocalDocumentStore


class ServiceFactory:
    """Creates Google-backed services sharing one set of credentials."""

    def __init__(self, app_config: AppConfig):
        self.config = app_config
        self._credentials = None
        self._sheets_operations = None

    @property
    def credentials(self) -> Credentials:
        if self._credentials is None:
            auth = GoogleAuth(
                credentials_path=self.config.google.credentials_path,
                token_path=self.config.google.token_path,
            )
            self._credentials = auth.get_credentials()
            if self._credentials is None:
                raise ConfigurationError(
                    "Google credentials could not be obtained",
                    details={"credentials_path": self.config.google.credentials_path},
                )
        return self._credentials

    @property
    def sheets_operations(self) -> GoogleSheetsOperations:
        if self._sheets_operations is None:
            spreadsheet_id = self.config.sheets.spreadsheet_id
            if not spreadsheet_id:
                raise ConfigurationError(
                    "SPREADSHEET_ID is not set",
                    details={"required_env_var": "SPREADSHEET_ID"},
                )
            self._sheets_operations = GoogleSheetsOperations(
                self.credentials, spreadsheet_id
            )
        return self._sheets_operations

    def create_repository(self) -> PaymentRecordRepository:
        sheets = self.config.sheets
        store = GoogleSheetsTableStore(self.sheets_operations, sheets.data_sheet)
        store.ensure_exists()
        return PaymentRecordRepository(
            store,
            columns=sheets.columns,
            header_rows=sheets.header_rows,
            optimistic_check=self.config.optimistic_status_check,
        )

    def create_document_store(self) -> DocumentStore:
        storage = self.config.storage
        if storage.backend == "local":
            logger.info(f"Using local document store at {storage.local_root}")
            return LocalDocumentStore(storage.local_root)

        if not storage.root_folder_id:
            raise ConfigurationError(
                "DRIVE_ROOT_FOLDER_ID is not set",
                details={"required_env_var": "DRIVE_ROOT_FOLDER_ID"},
            )
        return GoogleDriveDocumentStore(
            GoogleDriveOperations(self.credentials), storage.root_folder_id
        )

    def create_renderer(self, run_id: str) -> NotificationRenderer:
        if self.config.renderer == "reportlab":
            return ReportLabRenderer(
                issuer_name=self.config.mail.sender_name,
                currency_symbol=self.config.currency_symbol,
                timezone=self.config.timezone,
            )

        return SheetExportRenderer(
            operations=self.sheets_operations,
            session=AuthorizedSession(self.credentials),
            template_sheet=self.config.sheets.template_sheet,
            cells=self.config.sheets.template_cells,
            run_id=run_id,
            timezone=self.config.timezone,
        )

    def create_transport(self) -> MessageTransport:
        return GmailTransport(self.credentials)
