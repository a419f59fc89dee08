from paynotify.services.google_sheets.sheets_operations import GoogleSheetsOperations
from paynotify.services.google_sheets.sheets_table_store import GoogleSheetsTableStore

__all__ = ["GoogleSheetsOperations", "GoogleSheetsTableStore"]
