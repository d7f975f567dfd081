"""
Log Email Sender
================
Writes outgoing email to the log instead of sending it. Local development only.
"""

import uuid
from typing import List

import structlog

from .base import EmailMessage, EmailSender, SendResult

logger = structlog.get_logger(__name__)


class LogEmailSender(EmailSender):
    """Logs messages in full, including the body. Never use in production."""

    name = "log"

    def __init__(self):
        self.outbox: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> SendResult:
        self.outbox.append(message)
        logger.warning(
            "Email not sent (log backend)",
            to=message.to,
            subject=message.subject,
            body=message.body,
        )
        return SendResult(message_id=str(uuid.uuid4()), provider=self.name)
