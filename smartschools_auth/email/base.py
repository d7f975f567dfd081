"""
Email Dispatch
==============
Collaborator interface for sending a single email.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class EmailMessage:
    """A plain-text email."""
    to: str
    subject: str
    body: str


@dataclass
class SendResult:
    """Result of an email send."""
    message_id: Optional[str] = None
    provider: str = "base"


class EmailSender(ABC):
    """
    Send-one-email interface.

    Delivery receipts are not tracked. Implementations raise
    ``DispatchError`` when the provider rejects or cannot take the message.
    """

    name: str = "base"

    @abstractmethod
    def send(self, message: EmailMessage) -> SendResult:
        """Send a message synchronously."""
