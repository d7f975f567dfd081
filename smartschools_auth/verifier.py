"""
OTP Verifier
============
Checks a claimed code against the stored challenge and mints a session token.
"""

import time
from typing import Callable, Optional

import structlog

from .errors import ExpiredError, InvalidCredentialError, NotFoundError, ValidationError
from .identity import require_identity
from .logging import log_audit
from .otp import OTPConfig, VerifyResult, dummy_hash, verify_otp_hash
from .store import OTPStore
from .tokens import SessionTokenSigner

logger = structlog.get_logger(__name__)

# Longest code accepted for comparison
MAX_CODE_LENGTH = 32


class OTPVerifier:
    """
    Single read-compare-decide verification.

    The record is not consumed on success unless ``consume_on_verify`` is set;
    by default a correct code stays valid until it expires or is replaced.
    """

    def __init__(
        self,
        store: OTPStore,
        signer: SessionTokenSigner,
        config: Optional[OTPConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.signer = signer
        self.config = config or OTPConfig()
        self.clock = clock

    def verify(self, identity: Optional[str], code: Optional[str]) -> VerifyResult:
        """
        Verify a code and mint a session token.

        Args:
            identity: Email address
            code: Claimed plaintext OTP

        Returns:
            Result carrying a freshly minted token

        Raises:
            ValidationError: Identity or code missing
            NotFoundError: No outstanding challenge
            ExpiredError: Challenge expired
            InvalidCredentialError: Code does not match
            DependencyError: Store or secret manager unavailable
        """
        if not code or not isinstance(code, str) or not code.strip():
            raise ValidationError("Email and OTP are required")
        identity = require_identity(identity)
        code = code.strip()
        if len(code) > MAX_CODE_LENGTH:
            raise ValidationError("OTP is invalid")

        record = self.store.get(identity)
        if record is None:
            # Every rejection path pays for one hash comparison
            verify_otp_hash(
                code,
                dummy_hash(self.config.hash_algorithm, self.config.hash_rounds),
            )
            log_audit("otp.rejected", actor=identity, outcome="failure", reason="not_found")
            raise NotFoundError("no outstanding challenge")

        matches = verify_otp_hash(code, record.credential_hash)

        if record.is_expired(self.clock()):
            log_audit("otp.rejected", actor=identity, outcome="failure", reason="expired")
            raise ExpiredError(f"challenge expired at {record.expires_at}")

        if not matches:
            log_audit("otp.rejected", actor=identity, outcome="failure", reason="mismatch")
            raise InvalidCredentialError("code mismatch")

        # Mint before consuming; a failed mint leaves the record in place
        minted = self.signer.mint(identity)

        if self.config.consume_on_verify:
            self.store.delete(identity)

        log_audit(
            "otp.verified",
            actor=identity,
            token_id=minted.token_id,
            token_expires_at=minted.expires_at,
        )
        return VerifyResult(identity=identity, token=minted.token, expires_at=minted.expires_at)
