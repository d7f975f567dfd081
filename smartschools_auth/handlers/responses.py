"""
Handler Responses
=================
Lambda proxy responses and the error boundary mapping.

Clients get a fixed message per error kind; the technical detail is logged.
"""

import json
from typing import Any, Dict

import structlog

from smartschools_auth.errors import AuthFlowError, public_message, public_status

logger = structlog.get_logger(__name__)


def json_response(status_code: int, body: Dict[str, Any], cors_origin: str = "*") -> Dict[str, Any]:
    """Build an API Gateway proxy response with a JSON body."""
    headers = {"Content-Type": "application/json"}
    if cors_origin:
        headers["Access-Control-Allow-Origin"] = cors_origin
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(body),
    }


def error_response(exc: BaseException, cors_origin: str = "*") -> Dict[str, Any]:
    """
    Map an exception to a client-safe response.

    Unstructured exceptions become a generic 500.
    """
    status_code = public_status(exc)

    if isinstance(exc, AuthFlowError):
        log = logger.error if status_code >= 500 else logger.info
        log(
            "Request failed",
            error_code=exc.code,
            status_code=status_code,
            error=exc.message,
        )
    else:
        logger.exception("Unhandled error", error_type=type(exc).__name__)

    return json_response(status_code, {"message": public_message(exc)}, cors_origin)
