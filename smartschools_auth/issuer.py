"""
OTP Issuer
==========
Generates a one-time password, stores its hash with an expiry and emails it.
"""

import time
from typing import Callable, Optional

import structlog

from .config import DEFAULT_OTP_SUBJECT
from .email import EmailMessage, EmailSender
from .errors import DispatchError
from .identity import require_identity
from .logging import log_audit, mask_identity
from .otp import IssueResult, OTPConfig, OTPRecord, generate_otp, hash_otp
from .store import OTPStore

logger = structlog.get_logger(__name__)

ISSUE_ACK = "OTP has been sent to your email."


def render_otp_body(otp: str, expiry_seconds: int) -> str:
    minutes = max(1, expiry_seconds // 60)
    return (
        f"Your One-Time Password is: {otp}\n\n"
        f"This code expires in {minutes} minutes. "
        "If you did not request it, you can ignore this email."
    )


class OTPIssuer:
    """
    Issues email OTP challenges.

    Each call overwrites any outstanding challenge for the identity, so only
    the most recently emailed code can verify.
    """

    def __init__(
        self,
        store: OTPStore,
        sender: EmailSender,
        config: Optional[OTPConfig] = None,
        subject: str = DEFAULT_OTP_SUBJECT,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.sender = sender
        self.config = config or OTPConfig()
        self.subject = subject
        self.clock = clock

    def issue(self, identity: Optional[str]) -> IssueResult:
        """
        Issue a new challenge for an identity.

        Args:
            identity: Email address

        Returns:
            Generic acknowledgement (never the code)

        Raises:
            ValidationError: Identity missing or malformed
            DependencyError: Store unavailable
            DispatchError: Email send failed; the record stays persisted
        """
        identity = require_identity(identity)

        otp = generate_otp()
        credential_hash = hash_otp(
            otp,
            algorithm=self.config.hash_algorithm,
            rounds=self.config.hash_rounds,
        )
        expires_at = int(self.clock()) + self.config.expiry_seconds

        self.store.put(
            OTPRecord(identity=identity, credential_hash=credential_hash, expires_at=expires_at),
            ttl_seconds=self.config.expiry_seconds,
        )

        message = EmailMessage(
            to=identity,
            subject=self.subject,
            body=render_otp_body(otp, self.config.expiry_seconds),
        )
        try:
            result = self.sender.send(message)
        except Exception as e:
            # Record is already persisted; it is left for TTL eviction or overwrite
            logger.error(
                "OTP persisted but email dispatch failed",
                identity=mask_identity(identity),
                sender=self.sender.name,
                error=str(e),
            )
            log_audit("otp.issued", actor=identity, outcome="failure", reason="dispatch_failed")
            if isinstance(e, DispatchError):
                raise
            raise DispatchError(str(e)) from e

        log_audit(
            "otp.issued",
            actor=identity,
            expires_at=expires_at,
            message_id=result.message_id,
        )
        return IssueResult(message=ISSUE_ACK, expires_at=expires_at)
