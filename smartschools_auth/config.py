"""
Auth Configuration
==================
Runtime configuration read from the Lambda environment.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_OTP_SUBJECT = "Your SmartSchools Admin Portal OTP"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class AuthConfig:
    """Configuration for the OTP issuer, verifier and authorizer."""

    service_name: str = "smartschools-auth"
    log_level: str = "INFO"
    log_json: bool = True

    # OTP record store
    otp_table_name: str = "smartschools-otp"
    otp_store_backend: str = "dynamodb"
    redis_url: str = "redis://localhost:6379/0"
    otp_ttl_seconds: int = 300
    otp_hash_algorithm: str = "bcrypt"
    otp_hash_rounds: int = 10
    consume_otp_on_verify: bool = False

    # Email dispatch
    from_email_address: str = "noreply@smartschools.com"
    otp_email_subject: str = DEFAULT_OTP_SUBJECT
    email_backend: str = "ses"

    # Signing key
    secret_backend: str = "secretsmanager"
    jwt_secret_id: str = "smartschools/jwt-secret"
    jwt_secret_field: str = "key"
    jwt_secret_env: str = "JWT_SECRET"
    vault_addr: Optional[str] = None
    vault_token: Optional[str] = None
    vault_mount_point: str = "smartschools"

    # Session tokens
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "smartschools-auth"
    session_token_ttl_seconds: int = 3600

    cors_allow_origin: str = "*"
    aws_region: Optional[str] = None

    def __post_init__(self):
        if self.otp_ttl_seconds <= 0:
            raise ValueError("otp_ttl_seconds must be positive")
        if self.session_token_ttl_seconds <= 0:
            raise ValueError("session_token_ttl_seconds must be positive")
        if not 4 <= self.otp_hash_rounds <= 31:
            raise ValueError("otp_hash_rounds must be between 4 and 31")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AuthConfig":
        """Build configuration from environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            service_name=env.get("SERVICE_NAME", defaults.service_name),
            log_level=env.get("LOG_LEVEL", defaults.log_level),
            log_json=_env_bool(env, "LOG_JSON", defaults.log_json),
            otp_table_name=env.get("OTP_TABLE_NAME", defaults.otp_table_name),
            otp_store_backend=env.get("OTP_STORE_BACKEND", defaults.otp_store_backend).lower(),
            redis_url=env.get("REDIS_URL", defaults.redis_url),
            otp_ttl_seconds=_env_int(env, "OTP_TTL_SECONDS", defaults.otp_ttl_seconds),
            otp_hash_algorithm=env.get("OTP_HASH_ALGORITHM", defaults.otp_hash_algorithm).lower(),
            otp_hash_rounds=_env_int(env, "OTP_HASH_ROUNDS", defaults.otp_hash_rounds),
            consume_otp_on_verify=_env_bool(
                env, "CONSUME_OTP_ON_VERIFY", defaults.consume_otp_on_verify
            ),
            from_email_address=env.get("FROM_EMAIL_ADDRESS", defaults.from_email_address),
            otp_email_subject=env.get("OTP_EMAIL_SUBJECT", defaults.otp_email_subject),
            email_backend=env.get("EMAIL_BACKEND", defaults.email_backend).lower(),
            secret_backend=env.get("SECRET_BACKEND", defaults.secret_backend).lower(),
            jwt_secret_id=env.get("JWT_SECRET_ARN", defaults.jwt_secret_id),
            jwt_secret_field=env.get("JWT_SECRET_FIELD", defaults.jwt_secret_field),
            vault_addr=env.get("VAULT_ADDR"),
            vault_token=env.get("VAULT_TOKEN"),
            vault_mount_point=env.get("VAULT_MOUNT_POINT", defaults.vault_mount_point),
            jwt_algorithm=env.get("JWT_ALGORITHM", defaults.jwt_algorithm),
            jwt_issuer=env.get("JWT_ISSUER", defaults.jwt_issuer),
            session_token_ttl_seconds=_env_int(
                env, "SESSION_TOKEN_TTL_SECONDS", defaults.session_token_ttl_seconds
            ),
            cors_allow_origin=env.get("CORS_ALLOW_ORIGIN", defaults.cors_allow_origin),
            aws_region=env.get("AWS_REGION") or None,
        )
