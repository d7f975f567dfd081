"""
Token Authorizer
================
Allow/deny decisions for protected API routes.
"""

from .models import AuthDecision, DenyReason, AuthResult
from .authorizer import TokenAuthorizer, parse_authorization_header
from .policy import build_policy, stage_wildcard_arn

__all__ = [
    # Models
    "AuthDecision",
    "DenyReason",
    "AuthResult",
    # Authorizer
    "TokenAuthorizer",
    "parse_authorization_header",
    # Policy
    "build_policy",
    "stage_wildcard_arn",
]
