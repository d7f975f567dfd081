"""
Session Token
=============
Mints and validates signed session tokens (JWT) asserting a verified identity.
"""

import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import jwt

from smartschools_auth.secret_store import SigningKeyProvider

DEFAULT_TTL_SECONDS = 3600
REQUIRED_CLAIMS = ["sub", "exp", "iat"]


class TokenError(Exception):
    """Token could not be validated."""


class InvalidTokenError(TokenError):
    """Malformed token, bad signature, wrong issuer or missing claims."""


class ExpiredTokenError(TokenError):
    """Token signature is valid but the expiry has passed."""


@dataclass
class SessionClaims:
    """Validated claims carried by a session token."""
    identity: str
    issued_at: int
    expires_at: int
    token_id: Optional[str] = None
    issuer: Optional[str] = None


@dataclass
class MintedToken:
    token: str
    expires_at: int
    token_id: str


class SessionTokenSigner:
    """Signs and validates session tokens with the shared signing key."""

    def __init__(
        self,
        key_provider: SigningKeyProvider,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        algorithm: str = "HS256",
        issuer: Optional[str] = "smartschools-auth",
        clock: Callable[[], float] = time.time,
    ):
        self.key_provider = key_provider
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm
        self.issuer = issuer
        self.clock = clock

    def mint(self, identity: str) -> MintedToken:
        """
        Mint a token for a verified identity.

        Every call yields a distinct token (fresh ``jti``, ``iat`` and ``exp``).
        """
        now = int(self.clock())
        expires_at = now + self.ttl_seconds
        token_id = str(uuid.uuid4())

        payload: Dict[str, Any] = {
            "sub": identity,
            "email": identity,
            "iat": now,
            "exp": expires_at,
            "jti": token_id,
        }
        if self.issuer:
            payload["iss"] = self.issuer

        token = jwt.encode(payload, self.key_provider.get(), algorithm=self.algorithm)
        return MintedToken(token=token, expires_at=expires_at, token_id=token_id)

    def validate(self, token: str, now: Optional[float] = None) -> SessionClaims:
        """
        Validate a token's signature and expiry.

        Args:
            token: Encoded token
            now: Evaluation time (defaults to the signer's clock)

        Returns:
            Validated claims

        Raises:
            InvalidTokenError: Malformed, tampered, foreign-key or wrong-issuer token
            ExpiredTokenError: Expiry has passed
        """
        if not token:
            raise InvalidTokenError("empty token")

        options = {
            # Time claims are checked against the injected clock below
            "verify_exp": False,
            "verify_iat": False,
            "require": REQUIRED_CLAIMS,
        }
        try:
            payload = jwt.decode(
                token,
                self.key_provider.get(),
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options=options,
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e

        current = self.clock() if now is None else now
        try:
            expires_at = int(payload["exp"])
            issued_at = int(payload["iat"])
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("non-numeric time claim") from e

        if current >= expires_at:
            raise ExpiredTokenError(f"token expired at {expires_at}")

        identity = payload.get("sub")
        if not isinstance(identity, str) or not identity:
            raise InvalidTokenError("missing identity claim")

        return SessionClaims(
            identity=identity,
            issued_at=issued_at,
            expires_at=expires_at,
            token_id=payload.get("jti"),
            issuer=payload.get("iss"),
        )
