"""
Document store on the local filesystem.
"""

from pathlib import Path
from typing import Optional, Set

from loguru import logger

from paynotify.exceptions import DocumentStorageError
from paynotify.observability import record_file_operation
from paynotify.services.storage.document_store import DocumentStore, StoredFile


class LocalDocumentStore(DocumentStore):
    """Keeps period folders as directories below ``root``."""

    def __init__(self, root: str):
        self.root = Path(root)

    def _folder_path(self, folder_id: str) -> Path:
        return self.root / folder_id

    def find_folder(self, name: str) -> Optional[str]:
        return name if self._folder_path(name).is_dir() else None

    def create_folder(self, name: str) -> str:
        try:
            self._folder_path(name).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Error creating directory {name}: {e}")
            record_file_operation("local_create_folder", "failed")
            raise DocumentStorageError(
                f"Failed to create folder {name}", original_exception=e
            )

        logger.info(f"Folder created: {self._folder_path(name)}")
        record_file_operation("local_create_folder", "success")
        return name

    def list_file_names(self, folder_id: str) -> Set[str]:
        folder = self._folder_path(folder_id)
        if not folder.is_dir():
            return set()
        return {path.name for path in folder.iterdir() if path.is_file()}

    def find_file(self, folder_id: str, name: str) -> Optional[StoredFile]:
        path = self._folder_path(folder_id) / name
        if not path.is_file():
            return None
        return StoredFile(file_id=str(path), name=name, folder_id=folder_id)

    def save_pdf(self, folder_id: str, name: str, content: bytes) -> StoredFile:
        path = self._folder_path(folder_id) / name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error saving binary file {path}: {e}")
            record_file_operation("local_save", "failed")
            raise DocumentStorageError(f"Failed to save {path}", original_exception=e)

        logger.info(f"Binary file saved: {path}")
        record_file_operation("local_save", "success")
        return StoredFile(file_id=str(path), name=name, folder_id=folder_id)

    def read_file(self, stored_file: StoredFile) -> bytes:
        try:
            with open(stored_file.file_id, "rb") as f:
                return f.read()
        except OSError as e:
            record_file_operation("local_read", "failed")
            raise DocumentStorageError(
                f"Failed to read {stored_file.file_id}", original_exception=e
            )

    def delete_file(self, stored_file: StoredFile) -> None:
        try:
            Path(stored_file.file_id).unlink()
        except OSError as e:
            logger.error(f"Error deleting file {stored_file.file_id}: {e}")
            record_file_operation("local_delete", "failed")
            raise DocumentStorageError(
                f"Failed to delete {stored_file.file_id}", original_exception=e
            )

        logger.info(f"File deleted: {stored_file.file_id}")
        record_file_operation("local_delete", "success")
