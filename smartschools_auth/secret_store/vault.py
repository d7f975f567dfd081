"""
HashiCorp Vault Provider
========================

Reads secrets from a Vault KV v2 mount.

Usage:
    provider = VaultSecretProvider(url="https://vault.internal", token="...")

    # Secret at <mount>/jwt-secret holding {"key": "..."}
    raw = provider.get_secret("jwt-secret")
"""

import json
import os
from typing import Optional

import hvac
import structlog
from hvac.exceptions import InvalidPath, VaultError
from requests.exceptions import RequestException

from smartschools_auth.errors import DependencyError

from .base import SecretProvider

logger = structlog.get_logger(__name__)


class VaultSecretProvider(SecretProvider):
    """Secret provider backed by HashiCorp Vault KV v2."""

    name = "vault"

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        mount_point: str = "smartschools",
        client: Optional[hvac.Client] = None,
    ):
        self.url = url or os.environ.get("VAULT_ADDR", "http://127.0.0.1:8200")
        self.token = token or os.environ.get("VAULT_TOKEN")
        self.mount_point = mount_point
        self._client = client

    @property
    def client(self) -> hvac.Client:
        """Lazy-loaded Vault client."""
        if self._client is None:
            client = hvac.Client(url=self.url, token=self.token)
            if not client.is_authenticated():
                raise DependencyError(
                    "Vault authentication failed. Check VAULT_TOKEN.",
                    dependency=self.name,
                )
            self._client = client
        return self._client

    def get_secret(self, secret_id: str) -> str:
        """
        Get a secret from Vault KV v2.

        Single-value secrets are returned as the bare value; anything else is
        returned as a JSON object string.
        """
        try:
            secret = self.client.secrets.kv.v2.read_secret_version(
                path=secret_id,
                mount_point=self.mount_point,
                raise_on_deleted_version=True,
            )
        except InvalidPath as e:
            logger.error("Secret not found", path=f"{self.mount_point}/{secret_id}")
            raise DependencyError(f"secret {secret_id} not found", dependency=self.name) from e
        except (VaultError, RequestException) as e:
            logger.error("Failed to get secret from Vault", error=str(e))
            raise DependencyError(str(e), dependency=self.name) from e

        data = secret["data"]["data"]
        if len(data) == 1 and "value" in data:
            return str(data["value"])
        return json.dumps(data)
