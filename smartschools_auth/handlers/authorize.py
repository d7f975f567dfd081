"""
Token Authorizer Handler
========================
API Gateway authorizer entry point.

Accepts TOKEN events (``authorizationToken``) and REQUEST events
(``headers.Authorization``). Always returns a policy; any failure is a Deny.
"""

from typing import Any, Dict, Mapping, Optional

import structlog

from smartschools_auth.authorizer import AuthResult, DenyReason, TokenAuthorizer, build_policy
from smartschools_auth.logging import bind_lambda_context

from . import dependencies
from .events import get_header

logger = structlog.get_logger(__name__)


def extract_authorization(event: Mapping[str, Any]) -> Optional[str]:
    if event.get("type") == "TOKEN" or "authorizationToken" in event:
        return event.get("authorizationToken")
    return get_header(event, "Authorization")


def handle_authorize(event: Mapping[str, Any], authorizer: TokenAuthorizer) -> Dict[str, Any]:
    """Evaluate the event's token and build the policy response."""
    try:
        result = authorizer.authorize(extract_authorization(event))
    except Exception:
        logger.exception("Authorizer failed, denying")
        result = AuthResult.deny(DenyReason.INVALID_TOKEN)
    return build_policy(result, event.get("methodArn"))


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Lambda entry point."""
    bind_lambda_context(context)
    try:
        authorizer = dependencies.get_authorizer()
    except Exception:
        logger.exception("Authorizer unavailable, denying")
        return build_policy(AuthResult.deny(DenyReason.KEY_UNAVAILABLE), event.get("methodArn"))
    return handle_authorize(event, authorizer)
