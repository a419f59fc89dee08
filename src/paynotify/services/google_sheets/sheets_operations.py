"""
Google Sheets operations.
Handles value reads and writes and sheet duplication for one spreadsheet.
"""

from typing import Any, Dict, List, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from loguru import logger

from paynotify.exceptions import SheetsApiError
from paynotify.services.google_api_errors import GOOGLE_API_ERRORS


class GoogleSheetsOperations:
    """Handles Google Sheets API calls against a single spreadsheet."""

    def __init__(self, credentials: Credentials, spreadsheet_id: str):
        """
        Initialize Google Sheets operations.

        Args:
            credentials: Valid Google OAuth2 credentials
            spreadsheet_id: ID of the spreadsheet holding data and template
        """
        self.spreadsheet_id = spreadsheet_id
        self.service = build("sheets", "v4", credentials=credentials)

    def get_sheet_properties(self, title: str) -> Optional[Dict[str, Any]]:
        """
        Look up a sheet (tab) by title.

        Returns:
            The sheet's properties dict, or None if no tab has that title
        """
        try:
            spreadsheet = (
                self.service.spreadsheets()
                .get(spreadsheetId=self.spreadsheet_id, fields="sheets.properties")
                .execute()
            )
        except GOOGLE_API_ERRORS as e:
            logger.error(f"Google Sheets API error reading spreadsheet: {e}")
            raise SheetsApiError(
                f"Failed to read spreadsheet {self.spreadsheet_id}",
                original_exception=e,
            )

        for sheet in spreadsheet.get("sheets", []):
            properties = sheet.get("properties", {})
            if properties.get("title") == title:
                return properties
        return None

    def get_values(
        self,
        range_name: str,
        value_render_option: str = "UNFORMATTED_VALUE",
        date_time_render_option: str = "SERIAL_NUMBER",
    ) -> List[List[Any]]:
        """
        Read a range of values.

        Dates come back as serial numbers and numbers unformatted, so the
        result does not depend on the spreadsheet locale and a currency zero
        reads as 0 rather than "¥0".
        """
        try:
            result = (
                self.service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    range=range_name,
                    valueRenderOption=value_render_option,
                    dateTimeRenderOption=date_time_render_option,
                )
                .execute()
            )
        except GOOGLE_API_ERRORS as e:
            logger.error(f"Google Sheets API error reading {range_name}: {e}")
            raise SheetsApiError(f"Failed to read {range_name}", original_exception=e)

        return result.get("values", [])

    def update_values(
        self,
        range_name: str,
        values: List[List[Any]],
        value_input_option: str = "RAW",
    ) -> None:
        try:
            (
                self.service.spreadsheets()
                .values()
                .update(
                    spreadsheetId=self.spreadsheet_id,
                    range=range_name,
                    valueInputOption=value_input_option,
                    body={"values": values},
                )
                .execute()
            )
            logger.debug(f"Updated {range_name}")
        except GOOGLE_API_ERRORS as e:
            logger.error(f"Google Sheets API error writing {range_name}: {e}")
            raise SheetsApiError(f"Failed to write {range_name}", original_exception=e)

    def batch_update_values(
        self,
        data: List[Dict[str, Any]],
        value_input_option: str = "RAW",
    ) -> None:
        """
        Write several ranges in one request.

        Args:
            data: List of {"range": ..., "values": [[...]]} entries
        """
        if not data:
            return

        try:
            (
                self.service.spreadsheets()
                .values()
                .batchUpdate(
                    spreadsheetId=self.spreadsheet_id,
                    body={"valueInputOption": value_input_option, "data": data},
                )
                .execute()
            )
            logger.debug(f"Batch updated {len(data)} ranges")
        except GOOGLE_API_ERRORS as e:
            logger.error(f"Google Sheets API error in batch update: {e}")
            raise SheetsApiError(
                f"Failed to batch update {len(data)} ranges", original_exception=e
            )

    def duplicate_sheet(self, source_sheet_id: int, new_title: str) -> int:
        """
        Clone a sheet inside the spreadsheet.

        Returns:
            Sheet ID (gid) of the new sheet
        """
        request = {
            "duplicateSheet": {
                "sourceSheetId": source_sheet_id,
                "newSheetName": new_title,
            }
        }
        try:
            response = (
                self.service.spreadsheets()
                .batchUpdate(
                    spreadsheetId=self.spreadsheet_id, body={"requests": [request]}
                )
                .execute()
            )
        except GOOGLE_API_ERRORS as e:
            logger.error(f"Google Sheets API error duplicating sheet: {e}")
            raise SheetsApiError(
                f"Failed to duplicate sheet {source_sheet_id} as {new_title!r}",
                original_exception=e,
            )

        properties = response["replies"][0]["duplicateSheet"]["properties"]
        logger.debug(f"Sheet duplicated: {new_title} (gid: {properties['sheetId']})")
        return properties["sheetId"]

    def delete_sheet(self, sheet_id: int) -> bool:
        """Delete a sheet. Returns False instead of raising on failure."""
        try:
            (
                self.service.spreadsheets()
                .batchUpdate(
                    spreadsheetId=self.spreadsheet_id,
                    body={"requests": [{"deleteSheet": {"sheetId": sheet_id}}]},
                )
                .execute()
            )
            logger.debug(f"Sheet deleted: gid {sheet_id}")
            return True
        except GOOGLE_API_ERRORS as e:
            logger.error(f"Google Sheets API error deleting sheet {sheet_id}: {e}")
            return False
