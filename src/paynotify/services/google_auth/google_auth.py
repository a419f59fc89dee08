"""
Google OAuth2 authentication handler.
Manages credentials and token refresh for Sheets, Drive and Gmail.
"""

from pathlib import Path
from typing import List, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from loguru import logger

DEFAULT_SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/gmail.send",
]


class GoogleAuth:
    """Handles Google OAuth2 authentication."""

    def __init__(
        self,
        credentials_path: str,
        token_path: str,
        scopes: Optional[List[str]] = None,
    ):
        """
        Initialize Google authentication.

        Args:
            credentials_path: Path to Google OAuth2 client secrets JSON file
            token_path: Path to store/retrieve user token
            scopes: OAuth2 scopes, defaults to Sheets + Drive + Gmail send
        """
        self.credentials_path = Path(credentials_path)
        self.token_path = Path(token_path)
        self.scopes = scopes or list(DEFAULT_SCOPES)

    def get_credentials(self) -> Optional[Credentials]:
        """
        Get valid Google credentials.

        Returns:
            Valid Credentials object or None if authentication fails
        """
        try:
            creds = None

            if self.token_path.exists():
                logger.info(f"Loading existing credentials from {self.token_path}")
                creds = Credentials.from_authorized_user_file(
                    str(self.token_path), self.scopes
                )

            if not creds or not creds.valid:
                if creds and creds.expired and creds.refresh_token:
                    logger.info("Refreshing expired credentials")
                    creds.refresh(Request())
                else:
                    logger.info("Starting OAuth2 flow for new credentials")
                    creds = self._run_oauth_flow()

                self._save_credentials(creds)

            logger.info("Google credentials obtained successfully")
            return creds

        except Exception as e:
            logger.error(f"Failed to obtain Google credentials: {e}")
            return None

    def _run_oauth_flow(self) -> Credentials:
        """Run OAuth2 authorization flow."""
        if not self.credentials_path.exists():
            raise FileNotFoundError(
                f"Credentials file not found: {self.credentials_path}. "
                "Please download from Google Cloud Console."
            )

        flow = InstalledAppFlow.from_client_secrets_file(
            str(self.credentials_path), self.scopes
        )

        # Run local server for OAuth2 callback
        creds = flow.run_local_server(port=0)
        logger.info("OAuth2 flow completed successfully")
        return creds

    def _save_credentials(self, creds: Credentials) -> None:
        try:
            self.token_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.token_path, "w") as token_file:
                token_file.write(creds.to_json())

            logger.info(f"Credentials saved to {self.token_path}")

        except OSError as e:
            logger.error(f"Failed to save credentials: {e}")
