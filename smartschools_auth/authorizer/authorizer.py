"""
Token Authorizer
================
Validates session tokens on protected requests. Fails closed.
"""

import time
from typing import Callable, Optional

import structlog

from smartschools_auth.errors import DependencyError
from smartschools_auth.logging import log_audit
from smartschools_auth.tokens import ExpiredTokenError, InvalidTokenError, SessionTokenSigner

from .models import AuthDecision, AuthResult, DenyReason

logger = structlog.get_logger(__name__)

BEARER_SCHEME = "bearer"


def parse_authorization_header(header: Optional[str]) -> Optional[str]:
    """
    Extract the token from ``Bearer <token>``.

    Returns:
        The token, or None if the header is malformed
    """
    if not header:
        return None
    parts = header.strip().split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        return None
    return parts[1]


class TokenAuthorizer:
    """
    Allow/deny decisions from a raw Authorization header.

    Depends only on the token, the signing key and the current time; no
    datastore access.
    """

    def __init__(
        self,
        signer: SessionTokenSigner,
        clock: Callable[[], float] = time.time,
    ):
        self.signer = signer
        self.clock = clock

    def authorize(self, header: Optional[str]) -> AuthResult:
        if not header or not header.strip():
            return self._deny(DenyReason.MISSING_HEADER)

        token = parse_authorization_header(header)
        if token is None:
            return self._deny(DenyReason.MALFORMED_HEADER)

        try:
            claims = self.signer.validate(token, now=self.clock())
        except ExpiredTokenError:
            return self._deny(DenyReason.EXPIRED_TOKEN)
        except InvalidTokenError as e:
            return self._deny(DenyReason.INVALID_TOKEN, detail=str(e))
        except DependencyError as e:
            logger.error("Signing key unavailable, denying", error=e.message)
            return self._deny(DenyReason.KEY_UNAVAILABLE)

        return AuthResult(
            decision=AuthDecision.ALLOW,
            identity=claims.identity,
            expires_at=claims.expires_at,
            token_id=claims.token_id,
        )

    def _deny(self, reason: DenyReason, detail: Optional[str] = None) -> AuthResult:
        log_audit("token.denied", outcome="failure", reason=reason.value, detail=detail)
        return AuthResult.deny(reason)
