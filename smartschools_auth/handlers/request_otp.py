"""
Request OTP Handler
===================
``POST /auth/request-otp`` with ``{"email": str}``.
"""

from typing import Any, Dict, Mapping

from smartschools_auth.issuer import OTPIssuer
from smartschools_auth.logging import bind_lambda_context

from . import dependencies
from .events import parse_json_body
from .responses import error_response, json_response
from .schemas import MessageResponse, RequestOtpBody, parse_body


def handle_request_otp(
    event: Mapping[str, Any],
    issuer: OTPIssuer,
    cors_origin: str = "*",
) -> Dict[str, Any]:
    """Issue an OTP for the email in the request body."""
    try:
        body = parse_body(RequestOtpBody, parse_json_body(event))
        result = issuer.issue(body.email)
    except Exception as e:
        return error_response(e, cors_origin)

    return json_response(200, MessageResponse(message=result.message).model_dump(), cors_origin)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Lambda entry point."""
    bind_lambda_context(context)
    try:
        config = dependencies.get_config()
        issuer = dependencies.get_issuer()
    except Exception as e:
        return error_response(e)
    return handle_request_otp(event, issuer, cors_origin=config.cors_allow_origin)
