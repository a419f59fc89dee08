"""
Outgoing message model and transport interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class OutgoingMessage:
    to: List[str]
    subject: str
    body: str
    attachment_name: str
    attachment: bytes
    cc: List[str] = field(default_factory=list)
    from_name: Optional[str] = None
    from_address: Optional[str] = None
    attachment_mime_type: str = "application/pdf"


class MessageTransport(ABC):
    @abstractmethod
    def send(self, message: OutgoingMessage) -> str:
        """Send the message and return the transport's message ID."""
