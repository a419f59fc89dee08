from paynotify.services.storage.document_store import DocumentStore, StoredFile
from paynotify.services.storage.local_store import LocalDocumentStore

__all__ = ["DocumentStore", "StoredFile", "LocalDocumentStore"]
