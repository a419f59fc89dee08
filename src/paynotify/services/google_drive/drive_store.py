"""
Document store backed by Google Drive.
"""

from typing import Dict, Optional, Set

from paynotify.services.google_drive.drive_operations import GoogleDriveOperations
from paynotify.services.storage.document_store import DocumentStore, StoredFile

PDF_MIME_TYPE = "application/pdf"


class GoogleDriveDocumentStore(DocumentStore):
    """Period folders live directly under ``root_folder_id``."""

    def __init__(self, operations: GoogleDriveOperations, root_folder_id: str):
        self.operations = operations
        self.root_folder_id = root_folder_id
        self._folder_cache: Dict[str, str] = {}

    def find_folder(self, name: str) -> Optional[str]:
        if name in self._folder_cache:
            return self._folder_cache[name]

        folder_id = self.operations.find_folder(name, self.root_folder_id)
        if folder_id:
            self._folder_cache[name] = folder_id
        return folder_id

    def create_folder(self, name: str) -> str:
        folder_id = self.operations.create_folder(name, self.root_folder_id)
        self._folder_cache[name] = folder_id
        return folder_id

    def list_file_names(self, folder_id: str) -> Set[str]:
        return {file["name"] for file in self.operations.list_files(folder_id)}

    def find_file(self, folder_id: str, name: str) -> Optional[StoredFile]:
        file = self.operations.find_file(folder_id, name)
        if file is None:
            return None
        return StoredFile(file_id=file["id"], name=file["name"], folder_id=folder_id)

    def save_pdf(self, folder_id: str, name: str, content: bytes) -> StoredFile:
        file_id = self.operations.upload_file_content(
            content, name, PDF_MIME_TYPE, folder_id
        )
        return StoredFile(file_id=file_id, name=name, folder_id=folder_id)

    def read_file(self, stored_file: StoredFile) -> bytes:
        return self.operations.download_file_content(stored_file.file_id)

    def delete_file(self, stored_file: StoredFile) -> None:
        self.operations.delete_file(stored_file.file_id)
