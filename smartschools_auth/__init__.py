"""
SmartSchools Auth
=================
Email one-time-password authentication for the SmartSchools admin panel.
"""

__version__ = "0.1.0"

# Errors
from smartschools_auth.errors import (
    AuthFlowError,
    ValidationError,
    AuthenticationFailed,
    NotFoundError,
    InvalidCredentialError,
    ExpiredError,
    DispatchError,
    DependencyError,
)

# Configuration
from smartschools_auth.config import AuthConfig

# OTP
from smartschools_auth.otp import (
    generate_otp,
    hash_otp,
    verify_otp_hash,
    HashAlgorithm,
    OTPConfig,
    OTPRecord,
)

# Components
from smartschools_auth.issuer import OTPIssuer
from smartschools_auth.verifier import OTPVerifier
from smartschools_auth.authorizer import (
    TokenAuthorizer,
    AuthDecision,
    AuthResult,
    DenyReason,
)

# Session Tokens
from smartschools_auth.tokens import SessionTokenSigner, SessionClaims

# Collaborators
from smartschools_auth.store import OTPStore, DynamoDBOTPStore, RedisOTPStore, InMemoryOTPStore
from smartschools_auth.secret_store import SecretProvider, SigningKeyProvider
from smartschools_auth.email import EmailSender, EmailMessage

__all__ = [
    # Errors
    "AuthFlowError",
    "ValidationError",
    "AuthenticationFailed",
    "NotFoundError",
    "InvalidCredentialError",
    "ExpiredError",
    "DispatchError",
    "DependencyError",
    # Configuration
    "AuthConfig",
    # OTP
    "generate_otp",
    "hash_otp",
    "verify_otp_hash",
    "HashAlgorithm",
    "OTPConfig",
    "OTPRecord",
    # Components
    "OTPIssuer",
    "OTPVerifier",
    "TokenAuthorizer",
    "AuthDecision",
    "AuthResult",
    "DenyReason",
    # Session Tokens
    "SessionTokenSigner",
    "SessionClaims",
    # Collaborators
    "OTPStore",
    "DynamoDBOTPStore",
    "RedisOTPStore",
    "InMemoryOTPStore",
    "SecretProvider",
    "SigningKeyProvider",
    "EmailSender",
    "EmailMessage",
]
