"""
Structured Logging
==================

JSON logging for the auth Lambdas, built on structlog.

Usage:
    from smartschools_auth.logging import setup_logging, bind_lambda_context, log_audit

    # Once per cold start
    setup_logging(service_name="smartschools-auth")

    # Per invocation
    bind_lambda_context(context)

    log_audit("otp.issued", actor="a@x.com")
"""

import logging
import sys
from typing import Any, Optional

import structlog

_configured = False


def setup_logging(
    service_name: str,
    level: str = "INFO",
    json_output: bool = True,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        service_name: Bound to every event as ``service``
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render JSON lines (CloudWatch) instead of console output
    """
    global _configured

    log_level = getattr(logging, level.upper(), logging.INFO)

    # botocore and friends log through the stdlib
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=service_name)
    _configured = True


def is_configured() -> bool:
    return _configured


def bind_lambda_context(context: Any) -> None:
    """Bind per-invocation fields from a Lambda context object."""
    structlog.contextvars.clear_contextvars()
    if context is None:
        return
    structlog.contextvars.bind_contextvars(
        request_id=getattr(context, "aws_request_id", None),
        function_name=getattr(context, "function_name", None),
    )


def mask_identity(identity: Optional[str]) -> str:
    """
    Mask an email address for logs.

    ``alice@example.com`` becomes ``a***@example.com``.
    """
    if not identity:
        return ""
    local, sep, domain = identity.partition("@")
    if not sep:
        return local[:1] + "***"
    return f"{local[:1]}***@{domain}"


def log_event(event_type: str, level: str = "info", **kwargs) -> None:
    """
    Log a structured event.

    Args:
        event_type: Type of event (e.g., "otp.dispatched")
        level: Log method name on the bound logger
        **kwargs: Additional event data
    """
    logger = structlog.get_logger("events")
    getattr(logger, level.lower(), logger.info)(event_type, **kwargs)


def log_audit(
    action: str,
    actor: Optional[str] = None,
    outcome: str = "success",
    **kwargs,
) -> None:
    """
    Log an audit event.

    Args:
        action: Action performed (e.g., "otp.issued", "token.denied")
        actor: Identity performing the action, masked before logging
        outcome: Result (success, failure)
        **kwargs: Additional context
    """
    logger = structlog.get_logger("audit")
    logger.info(
        action,
        audit=True,
        actor=mask_identity(actor),
        outcome=outcome,
        **kwargs,
    )
