"""
Folder-scoped document storage interface for generated PDFs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Set


@dataclass(frozen=True)
class StoredFile:
    file_id: str
    name: str
    folder_id: str


class DocumentStore(ABC):
    """Period folders under a single root, holding named PDF files."""

    @abstractmethod
    def find_folder(self, name: str) -> Optional[str]:
        """Return the folder ID for ``name`` under the root, or None."""

    @abstractmethod
    def create_folder(self, name: str) -> str:
        pass

    def ensure_folder(self, name: str) -> str:
        folder_id = self.find_folder(name)
        if folder_id is None:
            folder_id = self.create_folder(name)
        return folder_id

    @abstractmethod
    def list_file_names(self, folder_id: str) -> Set[str]:
        pass

    @abstractmethod
    def find_file(self, folder_id: str, name: str) -> Optional[StoredFile]:
        pass

    @abstractmethod
    def save_pdf(self, folder_id: str, name: str, content: bytes) -> StoredFile:
        pass

    @abstractmethod
    def read_file(self, stored_file: StoredFile) -> bytes:
        pass

    @abstractmethod
    def delete_file(self, stored_file: StoredFile) -> None:
        """Remove a file saved by this run, e.g. when its row could not be tagged."""
