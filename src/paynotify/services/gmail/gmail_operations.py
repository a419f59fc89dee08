"""
Gmail message transport.
Sends notification emails with the PDF attached through the Gmail API.
"""

import base64
from email.message import EmailMessage
from email.utils import formataddr

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from loguru import logger

from paynotify.exceptions import MessageDeliveryError
from paynotify.services.gmail.message_transport import MessageTransport, OutgoingMessage
from paynotify.services.google_api_errors import GOOGLE_API_ERRORS


def build_mime_message(message: OutgoingMessage) -> EmailMessage:
    """
    Build the MIME message for an outgoing notification.

    The From header carries the configured alias. Gmail only honours it
    when the alias is registered as a "Send mail as" address of the
    authenticated account; otherwise the account address is used.
    """
    mime = EmailMessage()
    mime["To"] = ", ".join(message.to)
    if message.cc:
        mime["Cc"] = ", ".join(message.cc)
    if message.from_address:
        mime["From"] = formataddr((message.from_name or "", message.from_address))
    mime["Subject"] = message.subject
    mime.set_content(message.body)

    maintype, _, subtype = message.attachment_mime_type.partition("/")
    mime.add_attachment(
        message.attachment,
        maintype=maintype,
        subtype=subtype or "octet-stream",
        filename=message.attachment_name,
    )
    return mime


class GmailTransport(MessageTransport):
    """Sends messages as the authenticated Gmail user."""

    def __init__(self, credentials: Credentials):
        """
        Initialize Gmail transport.

        Args:
            credentials: Valid Google OAuth2 credentials with gmail.send scope
        """
        self.service = build("gmail", "v1", credentials=credentials)

    def send(self, message: OutgoingMessage) -> str:
        raw = base64.urlsafe_b64encode(build_mime_message(message).as_bytes()).decode()

        try:
            sent = (
                self.service.users()
                .messages()
                .send(userId="me", body={"raw": raw})
                .execute()
            )
        except GOOGLE_API_ERRORS as e:
            logger.error(f"Gmail API error sending to {message.to}: {e}")
            raise MessageDeliveryError(
                f"Failed to send message to {', '.join(message.to)}",
                original_exception=e,
            )

        message_id = sent.get("id", "")
        logger.info(f"Message sent to {', '.join(message.to)} (ID: {message_id})")
        return message_id
