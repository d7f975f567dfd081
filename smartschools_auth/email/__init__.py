"""
Email Dispatch
==============
Email senders for OTP delivery.
"""

from .base import EmailMessage, EmailSender, SendResult
from .ses import SESEmailSender
from .log_sender import LogEmailSender

__all__ = [
    "EmailMessage",
    "EmailSender",
    "SendResult",
    "SESEmailSender",
    "LogEmailSender",
]
