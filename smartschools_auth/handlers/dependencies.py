"""
Handler Dependencies
====================
Builds collaborators from configuration once per cold start.

Warm invocations reuse the cached clients and signing key; a new
instance reads configuration and secrets afresh.
"""

from functools import lru_cache

import structlog

from smartschools_auth.authorizer import TokenAuthorizer
from smartschools_auth.config import AuthConfig
from smartschools_auth.email import EmailSender, LogEmailSender, SESEmailSender
from smartschools_auth.issuer import OTPIssuer
from smartschools_auth.logging import is_configured, setup_logging
from smartschools_auth.otp import HashAlgorithm, OTPConfig
from smartschools_auth.secret_store import (
    EnvSecretProvider,
    SecretProvider,
    SecretsManagerProvider,
    SigningKeyProvider,
    VaultSecretProvider,
)
from smartschools_auth.store import DynamoDBOTPStore, InMemoryOTPStore, OTPStore, RedisOTPStore
from smartschools_auth.tokens import SessionTokenSigner
from smartschools_auth.verifier import OTPVerifier

logger = structlog.get_logger(__name__)


def build_store(config: AuthConfig) -> OTPStore:
    backend = config.otp_store_backend
    if backend == "dynamodb":
        return DynamoDBOTPStore(config.otp_table_name, region_name=config.aws_region)
    if backend == "redis":
        return RedisOTPStore.from_url(config.redis_url)
    if backend == "memory":
        return InMemoryOTPStore()
    raise ValueError(f"Unknown OTP_STORE_BACKEND: {backend}")


def build_secret_provider(config: AuthConfig) -> SecretProvider:
    backend = config.secret_backend
    if backend == "secretsmanager":
        return SecretsManagerProvider(region_name=config.aws_region)
    if backend == "vault":
        return VaultSecretProvider(
            url=config.vault_addr,
            token=config.vault_token,
            mount_point=config.vault_mount_point,
        )
    if backend == "env":
        return EnvSecretProvider(variable=config.jwt_secret_env)
    raise ValueError(f"Unknown SECRET_BACKEND: {backend}")


def build_email_sender(config: AuthConfig) -> EmailSender:
    backend = config.email_backend
    if backend == "ses":
        return SESEmailSender(config.from_email_address, region_name=config.aws_region)
    if backend == "log":
        return LogEmailSender()
    raise ValueError(f"Unknown EMAIL_BACKEND: {backend}")


def build_otp_config(config: AuthConfig) -> OTPConfig:
    return OTPConfig(
        expiry_seconds=config.otp_ttl_seconds,
        hash_algorithm=HashAlgorithm(config.otp_hash_algorithm),
        hash_rounds=config.otp_hash_rounds,
        consume_on_verify=config.consume_otp_on_verify,
    )


def build_signer(config: AuthConfig, key_provider: SigningKeyProvider) -> SessionTokenSigner:
    return SessionTokenSigner(
        key_provider,
        ttl_seconds=config.session_token_ttl_seconds,
        algorithm=config.jwt_algorithm,
        issuer=config.jwt_issuer,
    )


@lru_cache(maxsize=1)
def get_config() -> AuthConfig:
    """Load configuration and set up logging on first use."""
    config = AuthConfig.from_env()
    if not is_configured():
        setup_logging(
            service_name=config.service_name,
            level=config.log_level,
            json_output=config.log_json,
        )
    logger.info(
        "Auth configuration loaded",
        store=config.otp_store_backend,
        secrets=config.secret_backend,
        email=config.email_backend,
    )
    return config


@lru_cache(maxsize=1)
def get_store() -> OTPStore:
    return build_store(get_config())


@lru_cache(maxsize=1)
def get_signing_key_provider() -> SigningKeyProvider:
    config = get_config()
    return SigningKeyProvider(
        build_secret_provider(config),
        secret_id=config.jwt_secret_id,
        field=config.jwt_secret_field,
    )


@lru_cache(maxsize=1)
def get_issuer() -> OTPIssuer:
    config = get_config()
    return OTPIssuer(
        get_store(),
        build_email_sender(config),
        config=build_otp_config(config),
        subject=config.otp_email_subject,
    )


@lru_cache(maxsize=1)
def get_verifier() -> OTPVerifier:
    config = get_config()
    return OTPVerifier(
        get_store(),
        build_signer(config, get_signing_key_provider()),
        config=build_otp_config(config),
    )


@lru_cache(maxsize=1)
def get_authorizer() -> TokenAuthorizer:
    config = get_config()
    return TokenAuthorizer(build_signer(config, get_signing_key_provider()))


def reset_dependencies() -> None:
    """Drop every cached collaborator, as a cold start would."""
    for cached in (
        get_config,
        get_store,
        get_signing_key_provider,
        get_issuer,
        get_verifier,
        get_authorizer,
    ):
        cached.cache_clear()
