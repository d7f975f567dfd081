"""
SmartSchools Auth Logging

Structured logging for the auth Lambdas.
"""

from .structured import (
    setup_logging,
    is_configured,
    bind_lambda_context,
    mask_identity,
    log_event,
    log_audit,
)

__all__ = [
    "setup_logging",
    "is_configured",
    "bind_lambda_context",
    "mask_identity",
    "log_event",
    "log_audit",
]
