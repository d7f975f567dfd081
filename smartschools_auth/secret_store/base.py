"""
Secret Store
============
Read-only secret access and the cached signing-key handle.
"""

import json
from abc import ABC, abstractmethod
from typing import Optional

import structlog

from smartschools_auth.errors import DependencyError

logger = structlog.get_logger(__name__)


class SecretProvider(ABC):
    """Fetch-by-name access to a secret manager."""

    name: str = "base"

    @abstractmethod
    def get_secret(self, secret_id: str) -> str:
        """
        Return the current secret string.

        Raises:
            DependencyError: If the secret manager is unreachable or the
                secret does not exist
        """


class StaticSecretProvider(SecretProvider):
    """Secrets held in memory, keyed by id. For local runs and tests."""

    name = "static"

    def __init__(self, secrets: dict):
        self._secrets = dict(secrets)

    def get_secret(self, secret_id: str) -> str:
        try:
            return self._secrets[secret_id]
        except KeyError:
            raise DependencyError(f"secret {secret_id} not found", dependency=self.name)


class SigningKeyProvider:
    """
    Lazily fetched signing key, cached for the lifetime of the process.

    A rotated key is picked up on the next cold start, or after ``refresh()``.
    The secret string may be a bare key or a JSON object holding the key
    under ``field``.
    """

    def __init__(
        self,
        provider: SecretProvider,
        secret_id: str,
        field: Optional[str] = "key",
    ):
        self.provider = provider
        self.secret_id = secret_id
        self.field = field
        self._key: Optional[str] = None

    def get(self) -> str:
        """Return the signing key, fetching it on first use."""
        if self._key is None:
            self._key = self._load()
            logger.info(
                "Signing key loaded",
                secret_id=self.secret_id,
                provider=self.provider.name,
            )
        return self._key

    def refresh(self) -> None:
        """Drop the cached key so the next ``get()`` fetches again."""
        self._key = None

    def _load(self) -> str:
        raw = self.provider.get_secret(self.secret_id)
        key = extract_key(raw, self.field)
        if not key:
            raise DependencyError(
                f"secret {self.secret_id} has no usable key",
                dependency=self.provider.name,
            )
        return key


def extract_key(raw: str, field: Optional[str]) -> Optional[str]:
    """
    Pull the key out of a secret string.

    JSON objects yield ``raw[field]``; any other string is the key itself.
    """
    if raw is None:
        return None
    if field:
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            return raw
        if isinstance(data, dict):
            value = data.get(field)
            return str(value) if value else None
    return raw
