"""
Session Tokens
==============
Signed session tokens shared by the verifier and the authorizer.
"""

from .session_token import (
    SessionTokenSigner,
    SessionClaims,
    MintedToken,
    TokenError,
    InvalidTokenError,
    ExpiredTokenError,
    DEFAULT_TTL_SECONDS,
)

__all__ = [
    "SessionTokenSigner",
    "SessionClaims",
    "MintedToken",
    "TokenError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "DEFAULT_TTL_SECONDS",
]
