"""
Auth Flow Errors
================
Exception taxonomy for the OTP flow.

Every failure inside a component is raised as one of these kinds and mapped
to a response at the handler boundary. Technical detail goes to the logs,
never to the client.
"""

from typing import Optional, Any

GENERIC_AUTH_MESSAGE = "Invalid code or email"
GENERIC_SERVER_MESSAGE = "Internal server error"


class AuthFlowError(Exception):
    """Base exception for all OTP flow errors."""

    code = "AUTH_FLOW_ERROR"
    status_code = 500
    public_message = GENERIC_SERVER_MESSAGE

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(f"[{self.code}] {message}")


class ValidationError(AuthFlowError):
    """Missing or malformed client input."""

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, details)
        # Validation messages describe the client's own input.
        self.public_message = message


class AuthenticationFailed(AuthFlowError):
    """Base for failures that must look identical to the client."""

    code = "AUTHENTICATION_FAILED"
    status_code = 401
    public_message = GENERIC_AUTH_MESSAGE


class NotFoundError(AuthenticationFailed):
    """No outstanding challenge for the identity."""

    code = "OTP_NOT_FOUND"


class InvalidCredentialError(AuthenticationFailed):
    """Submitted code does not match the stored hash."""

    code = "INVALID_CREDENTIAL"


class ExpiredError(AuthenticationFailed):
    """Challenge expired before verification."""

    code = "OTP_EXPIRED"


class DispatchError(AuthFlowError):
    """
    Email send failed after the record was persisted.

    The record is not rolled back; a later issuance overwrites it and the
    store evicts it at expiry.
    """

    code = "DISPATCH_ERROR"


class DependencyError(AuthFlowError):
    """A platform collaborator (store, secret manager) is unreachable."""

    code = "DEPENDENCY_ERROR"

    def __init__(self, message: str, dependency: str = "unknown", details: Any = None):
        self.dependency = dependency
        super().__init__(f"{dependency}: {message}", details)


def public_status(exc: Optional[BaseException]) -> int:
    """HTTP status for an exception; anything unstructured is a 500."""
    if isinstance(exc, AuthFlowError):
        return exc.status_code
    return 500


def public_message(exc: Optional[BaseException]) -> str:
    """Client-visible message for an exception."""
    if isinstance(exc, AuthFlowError):
        return exc.public_message
    return GENERIC_SERVER_MESSAGE
