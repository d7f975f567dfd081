"""
Amazon SES Sender
=================
Sends plain-text email through the SES ``SendEmail`` API.
"""

from typing import Any, Optional

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from smartschools_auth.errors import DispatchError
from smartschools_auth.logging import mask_identity

from .base import EmailMessage, EmailSender, SendResult

logger = structlog.get_logger(__name__)


class SESEmailSender(EmailSender):
    """
    SES email sender.

    The source address must be a verified SES identity.
    """

    name = "ses"

    def __init__(
        self,
        source: str,
        region_name: Optional[str] = None,
        client: Any = None,
    ):
        self.source = source
        self.region_name = region_name
        self._client = client

    @property
    def client(self):
        """Lazy-loaded boto3 client."""
        if self._client is None:
            self._client = boto3.client("ses", region_name=self.region_name)
        return self._client

    def send(self, message: EmailMessage) -> SendResult:
        try:
            response = self.client.send_email(
                Source=self.source,
                Destination={"ToAddresses": [message.to]},
                Message={
                    "Subject": {"Data": message.subject, "Charset": "UTF-8"},
                    "Body": {"Text": {"Data": message.body, "Charset": "UTF-8"}},
                },
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(
                "SES send failed",
                recipient=mask_identity(message.to),
                error_code=error_code,
            )
            raise DispatchError(f"SES rejected message ({error_code})") from e
        except BotoCoreError as e:
            logger.error("SES unreachable", recipient=mask_identity(message.to), error=str(e))
            raise DispatchError(str(e)) from e

        return SendResult(message_id=response.get("MessageId"), provider=self.name)
