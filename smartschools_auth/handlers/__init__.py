"""
Lambda Handlers
===============
API Gateway entry points for the OTP flow.

Deploy with handler paths:
    smartschools_auth.handlers.request_otp.handler
    smartschools_auth.handlers.verify_otp.handler
    smartschools_auth.handlers.authorize.handler
"""

from .request_otp import handle_request_otp
from .verify_otp import handle_verify_otp
from .authorize import handle_authorize, extract_authorization
from .events import get_header, parse_json_body
from .responses import json_response, error_response

__all__ = [
    "handle_request_otp",
    "handle_verify_otp",
    "handle_authorize",
    "extract_authorization",
    "get_header",
    "parse_json_body",
    "json_response",
    "error_response",
]
