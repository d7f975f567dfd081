"""
Unit Tests for Email Senders
============================
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from smartschools_auth.email import EmailMessage, LogEmailSender, SESEmailSender
from smartschools_auth.errors import DispatchError

MESSAGE = EmailMessage(
    to="a@x.com",
    subject="Your SmartSchools Admin Portal OTP",
    body="Your One-Time Password is: 123456",
)


class TestSESEmailSender:
    """Tests for the SES sender with a mocked client."""

    def test_send(self):
        client = MagicMock()
        client.send_email.return_value = {"MessageId": "0100-abc"}
        sender = SESEmailSender("noreply@smartschools.com", client=client)

        result = sender.send(MESSAGE)

        assert result.message_id == "0100-abc"
        assert result.provider == "ses"
        client.send_email.assert_called_once_with(
            Source="noreply@smartschools.com",
            Destination={"ToAddresses": ["a@x.com"]},
            Message={
                "Subject": {"Data": MESSAGE.subject, "Charset": "UTF-8"},
                "Body": {"Text": {"Data": MESSAGE.body, "Charset": "UTF-8"}},
            },
        )

    def test_rejected(self):
        client = MagicMock()
        client.send_email.side_effect = ClientError(
            {"Error": {"Code": "MessageRejected", "Message": "Email address is not verified."}},
            "SendEmail",
        )
        sender = SESEmailSender("noreply@smartschools.com", client=client)

        with pytest.raises(DispatchError) as exc_info:
            sender.send(MESSAGE)

        assert "MessageRejected" in exc_info.value.message

    def test_unreachable(self):
        client = MagicMock()
        client.send_email.side_effect = EndpointConnectionError(endpoint_url="https://email")
        sender = SESEmailSender("noreply@smartschools.com", client=client)

        with pytest.raises(DispatchError):
            sender.send(MESSAGE)


class TestLogEmailSender:
    """Tests for the local log sender."""

    def test_send_records_outbox(self):
        sender = LogEmailSender()

        result = sender.send(MESSAGE)

        assert sender.outbox == [MESSAGE]
        assert result.provider == "log"
        assert result.message_id
