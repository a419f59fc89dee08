"""
Google Drive file operations.
Handles folder lookup, listing, upload and download of notification PDFs.
"""

import io
from typing import Any, Dict, List, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseUpload
from loguru import logger

from paynotify.exceptions import DocumentStorageError
from paynotify.observability import record_file_operation
from paynotify.services.google_api_errors import GOOGLE_API_ERRORS

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


def escape_query_value(value: str) -> str:
    """Escape a literal for use inside a Drive query string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


class GoogleDriveOperations:
    """Handles Google Drive file operations."""

    def __init__(self, credentials: Credentials):
        """
        Initialize Google Drive operations.

        Args:
            credentials: Valid Google OAuth2 credentials
        """
        self.service = build("drive", "v3", credentials=credentials)

    def search_files(
        self,
        query: str,
        fields: str = "id,name,mimeType,parents",
    ) -> List[Dict[str, Any]]:
        """
        Search for files in Google Drive, following every result page.

        Args:
            query: Search query (e.g., "name = 'x.pdf' and trashed = false")
            fields: Fields to include for each file

        Returns:
            List of file metadata dictionaries
        """
        files: List[Dict[str, Any]] = []
        page_token = None
        try:
            while True:
                results = (
                    self.service.files()
                    .list(
                        q=query,
                        pageSize=1000,
                        pageToken=page_token,
                        fields=f"nextPageToken,files({fields})",
                        supportsAllDrives=True,
                        includeItemsFromAllDrives=True,
                    )
                    .execute()
                )
                files.extend(results.get("files", []))
                page_token = results.get("nextPageToken")
                if not page_token:
                    break

        except GOOGLE_API_ERRORS as e:
            logger.error(f"Google Drive API error during search: {e}")
            record_file_operation("drive_search", "failed")
            raise DocumentStorageError(
                f"Drive search failed: {query}", original_exception=e
            )

        logger.debug(f"Found {len(files)} files matching query: {query}")
        record_file_operation("drive_search", "success")
        return files

    def find_folder(self, folder_name: str, parent_folder_id: str) -> Optional[str]:
        query = (
            f"name = '{escape_query_value(folder_name)}' "
            f"and '{parent_folder_id}' in parents "
            f"and mimeType = '{FOLDER_MIME_TYPE}' and trashed = false"
        )
        folders = self.search_files(query, fields="id,name")
        return folders[0]["id"] if folders else None

    def create_folder(self, folder_name: str, parent_folder_id: str) -> str:
        """
        Create a folder in Google Drive.

        Args:
            folder_name: Name of the folder to create
            parent_folder_id: Parent folder ID

        Returns:
            Folder ID
        """
        folder_metadata = {
            "name": folder_name,
            "mimeType": FOLDER_MIME_TYPE,
            "parents": [parent_folder_id],
        }

        try:
            folder = (
                self.service.files()
                .create(body=folder_metadata, fields="id,name", supportsAllDrives=True)
                .execute()
            )
        except GOOGLE_API_ERRORS as e:
            logger.error(f"Google Drive API error during folder creation: {e}")
            record_file_operation("drive_create_folder", "failed")
            raise DocumentStorageError(
                f"Failed to create folder {folder_name}", original_exception=e
            )

        folder_id = folder.get("id")
        logger.info(f"Folder created successfully: {folder_name} (ID: {folder_id})")
        record_file_operation("drive_create_folder", "success")
        return folder_id

    def list_files(self, folder_id: str) -> List[Dict[str, Any]]:
        query = (
            f"'{folder_id}' in parents and mimeType != '{FOLDER_MIME_TYPE}' "
            "and trashed = false"
        )
        return self.search_files(query, fields="id,name")

    def find_file(self, folder_id: str, file_name: str) -> Optional[Dict[str, Any]]:
        query = (
            f"name = '{escape_query_value(file_name)}' "
            f"and '{folder_id}' in parents and trashed = false"
        )
        files = self.search_files(query, fields="id,name")
        return files[0] if files else None

    def upload_file_content(
        self,
        content: bytes,
        file_name: str,
        mime_type: str,
        folder_id: str,
    ) -> str:
        """
        Upload file content (bytes) to Google Drive.

        Args:
            content: File content as bytes
            file_name: Name for the uploaded file
            mime_type: MIME type of the file
            folder_id: Google Drive folder ID

        Returns:
            Google Drive file ID
        """
        file_metadata = {"name": file_name, "parents": [folder_id]}
        media = MediaIoBaseUpload(io.BytesIO(content), mimetype=mime_type, resumable=True)

        try:
            file = (
                self.service.files()
                .create(
                    body=file_metadata,
                    media_body=media,
                    fields="id,name,size",
                    supportsAllDrives=True,
                )
                .execute()
            )
        except GOOGLE_API_ERRORS as e:
            logger.error(f"Google Drive API error during content upload: {e}")
            record_file_operation("drive_upload_content", "failed")
            raise DocumentStorageError(
                f"Failed to upload {file_name}", original_exception=e
            )

        file_id = file.get("id")
        logger.info(
            f"File content uploaded successfully: {file.get('name')} "
            f"(ID: {file_id}, Size: {file.get('size')} bytes)"
        )
        record_file_operation("drive_upload_content", "success")
        return file_id

    def download_file_content(self, file_id: str) -> bytes:
        try:
            content = (
                self.service.files()
                .get_media(fileId=file_id, supportsAllDrives=True)
                .execute()
            )
        except GOOGLE_API_ERRORS as e:
            logger.error(f"Google Drive API error during download: {e}")
            record_file_operation("drive_download", "failed")
            raise DocumentStorageError(
                f"Failed to download file {file_id}", original_exception=e
            )

        record_file_operation("drive_download", "success")
        return content

    def delete_file(self, file_id: str) -> None:
        try:
            (
                self.service.files()
                .delete(fileId=file_id, supportsAllDrives=True)
                .execute()
            )
        except GOOGLE_API_ERRORS as e:
            logger.error(f"Google Drive API error during delete: {e}")
            record_file_operation("drive_delete", "failed")
            raise DocumentStorageError(
                f"Failed to delete file {file_id}", original_exception=e
            )

        logger.info(f"File deleted: {file_id}")
        record_file_operation("drive_delete", "success")
