from paynotify.config.config import (
    AppConfig,
    ColumnMap,
    GoogleConfig,
    MailConfig,
    SheetsConfig,
    StorageConfig,
    TemplateCells,
    config,
)

__all__ = [
    "AppConfig",
    "ColumnMap",
    "GoogleConfig",
    "MailConfig",
    "SheetsConfig",
    "StorageConfig",
    "TemplateCells",
    "config",
]
