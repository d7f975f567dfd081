"""
API Gateway Events
==================
Helpers for reading Lambda proxy integration events.
"""

import base64
import binascii
import json
from typing import Any, Dict, Mapping, Optional

from smartschools_auth.errors import ValidationError


def get_header(event: Mapping[str, Any], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def parse_json_body(event: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Decode the JSON object body of a proxy event.

    Raises:
        ValidationError: Body missing, not JSON, or not a JSON object
    """
    body = event.get("body")
    if body is None or body == "":
        raise ValidationError("Request body is required")

    if event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            raise ValidationError("Request body is not valid base64")

    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        raise ValidationError("Request body must be valid JSON")

    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
