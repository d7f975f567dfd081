"""
Verify OTP Handler
==================
``POST /auth/verify-otp`` with ``{"email": str, "otp": str}``.
"""

from typing import Any, Dict, Mapping

from smartschools_auth.logging import bind_lambda_context
from smartschools_auth.verifier import OTPVerifier

from . import dependencies
from .events import parse_json_body
from .responses import error_response, json_response
from .schemas import TokenResponse, VerifyOtpBody, parse_body


def handle_verify_otp(
    event: Mapping[str, Any],
    verifier: OTPVerifier,
    cors_origin: str = "*",
) -> Dict[str, Any]:
    """Verify the submitted code and return a session token."""
    try:
        body = parse_body(VerifyOtpBody, parse_json_body(event))
        result = verifier.verify(body.email, body.otp)
    except Exception as e:
        return error_response(e, cors_origin)

    return json_response(200, TokenResponse(token=result.token).model_dump(), cors_origin)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Lambda entry point."""
    bind_lambda_context(context)
    try:
        config = dependencies.get_config()
        verifier = dependencies.get_verifier()
    except Exception as e:
        return error_response(e)
    return handle_verify_otp(event, verifier, cors_origin=config.cors_allow_origin)
