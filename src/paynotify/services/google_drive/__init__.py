from paynotify.services.google_drive.drive_operations import GoogleDriveOperations
from paynotify.services.google_drive.drive_store import GoogleDriveDocumentStore

__all__ = ["GoogleDriveOperations", "GoogleDriveDocumentStore"]
