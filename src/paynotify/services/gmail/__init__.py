from paynotify.services.gmail.gmail_operations import GmailTransport, build_mime_message
from paynotify.services.gmail.message_transport import MessageTransport, OutgoingMessage

__all__ = [
    "GmailTransport",
    "MessageTransport",
    "OutgoingMessage",
    "build_mime_message",
]
