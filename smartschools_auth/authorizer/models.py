"""
Authorizer Models
=================
Decision types produced by the token authorizer.
"""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class AuthDecision(str, Enum):
    """Authorizer decision types."""
    ALLOW = "Allow"
    DENY = "Deny"


class DenyReason(str, Enum):
    """Reasons for denying a request."""
    MISSING_HEADER = "missing_header"
    MALFORMED_HEADER = "malformed_header"
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    KEY_UNAVAILABLE = "key_unavailable"


@dataclass
class AuthResult:
    """Result of a token check."""
    decision: AuthDecision
    identity: Optional[str] = None
    reason_code: Optional[DenyReason] = None
    expires_at: Optional[int] = None
    token_id: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.decision is AuthDecision.ALLOW

    @classmethod
    def deny(cls, reason: DenyReason) -> "AuthResult":
        return cls(decision=AuthDecision.DENY, reason_code=reason)
