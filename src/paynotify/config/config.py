import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv(override=True)

DEFAULT_SUBJECT = "[{period}] Payment Notification - {company}"
DEFAULT_BODY = (
    "{company}\n"
    "{agent} 様\n\n"
    "Please find attached the payment notification for {period}.\n"
    "Payment amount: {amount}\n\n"
    "This message was sent automatically. Please contact us if anything is "
    "unclear."
)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class ColumnMap(BaseModel):
    """0-based column positions of the payment data sheet."""

    company_name: int = 0
    agent_name: int = 1
    payment_month: int = 2
    amount: int = 3
    bank_account: int = 4
    email: int = 5
    check_value: int = 6
    status: int = 7

    @property
    def width(self) -> int:
        return max(self.model_dump().values()) + 1


class TemplateCells(BaseModel):
    """A1 addresses filled on each clone of the notification template."""

    company_name: str = "B3"
    agent_name: str = "B4"
    payment_month: str = "B6"
    amount: str = "B7"
    bank_account: str = "B8"
    issue_date: str = "F1"


class GoogleConfig(BaseModel):
    credentials_path: str = "secrets/google_credentials.json"
    token_path: str = "secrets/google_token.json"


class SheetsConfig(BaseModel):
    spreadsheet_id: Optional[str] = None
    data_sheet: str = "Payments"
    template_sheet: str = "Notification Template"
    header_rows: int = 1
    columns: ColumnMap = Field(default_factory=ColumnMap)
    template_cells: TemplateCells = Field(default_factory=TemplateCells)


class StorageConfig(BaseModel):
    backend: Literal["drive", "local"] = "drive"
    root_folder_id: Optional[str] = None
    local_root: str = "output"


class MailConfig(BaseModel):
    sender_name: str = "Accounts Payable"
    sender_alias: Optional[str] = None
    cc: Optional[str] = None
    subject_template: str = DEFAULT_SUBJECT
    body_template: str = DEFAULT_BODY
    send_delay_seconds: float = 1.0


class AppConfig(BaseModel):
    google: GoogleConfig = Field(default_factory=GoogleConfig)
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    mail: MailConfig = Field(default_factory=MailConfig)

    renderer: Literal["sheet_export", "reportlab"] = "sheet_export"
    timezone: str = "Asia/Tokyo"
    currency_symbol: str = "¥"
    optimistic_status_check: bool = True
    log_level: str = "INFO"
    metrics_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables."""
        return cls(
            google=GoogleConfig(
                credentials_path=os.getenv(
                    "GOOGLE_CREDENTIALS_PATH", "secrets/google_credentials.json"
                ),
                token_path=os.getenv("GOOGLE_TOKEN_PATH", "secrets/google_token.json"),
            ),
            sheets=SheetsConfig(
                spreadsheet_id=os.getenv("SPREADSHEET_ID") or None,
                data_sheet=os.getenv("DATA_SHEET_NAME", "Payments"),
                template_sheet=os.getenv(
                    "TEMPLATE_SHEET_NAME", "Notification Template"
                ),
                header_rows=int(os.getenv("HEADER_ROWS", "1")),
            ),
            storage=StorageConfig(
                backend=os.getenv("STORAGE_BACKEND", "drive"),
                root_folder_id=os.getenv("DRIVE_ROOT_FOLDER_ID") or None,
                local_root=os.getenv("LOCAL_OUTPUT_DIR", "output"),
            ),
            mail=MailConfig(
                sender_name=os.getenv("MAIL_SENDER_NAME", "Accounts Payable"),
                sender_alias=os.getenv("MAIL_SENDER_ALIAS") or None,
                cc=os.getenv("MAIL_CC") or None,
                subject_template=os.getenv("MAIL_SUBJECT_TEMPLATE", DEFAULT_SUBJECT),
                body_template=os.getenv("MAIL_BODY_TEMPLATE", DEFAULT_BODY),
                send_delay_seconds=float(os.getenv("SEND_DELAY_SECONDS", "1.0")),
            ),
            renderer=os.getenv("PDF_RENDERER", "sheet_export"),
            timezone=os.getenv("TIMEZONE", "Asia/Tokyo"),
            currency_symbol=os.getenv("CURRENCY_SYMBOL", "¥"),
            optimistic_status_check=_env_bool("OPTIMISTIC_STATUS_CHECK", "true"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            metrics_file=os.getenv("METRICS_FILE") or None,
        )


config = AppConfig.from_env()
