"""
Unit Tests for Secret Providers
===============================
"""

import json
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from hvac.exceptions import Forbidden, InvalidPath

from smartschools_auth.errors import DependencyError
from smartschools_auth.secret_store import (
    EnvSecretProvider,
    SecretsManagerProvider,
    SigningKeyProvider,
    VaultSecretProvider,
    env_var_name,
)


class TestSecretsManagerProvider:
    """Tests for AWS Secrets Manager access."""

    def test_secret_string(self):
        client = MagicMock()
        client.get_secret_value.return_value = {"SecretString": '{"key": "abc"}'}
        provider = SecretsManagerProvider(client=client)

        assert provider.get_secret("smartschools/jwt-secret") == '{"key": "abc"}'
        client.get_secret_value.assert_called_once_with(SecretId="smartschools/jwt-secret")

    def test_secret_binary(self):
        client = MagicMock()
        client.get_secret_value.return_value = {"SecretBinary": b'{"key": "abc"}'}
        provider = SecretsManagerProvider(client=client)

        assert provider.get_secret("smartschools/jwt-secret") == '{"key": "abc"}'

    def test_client_error(self):
        client = MagicMock()
        client.get_secret_value.side_effect = ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "missing"}},
            "GetSecretValue",
        )
        provider = SecretsManagerProvider(client=client)

        with pytest.raises(DependencyError) as exc_info:
            provider.get_secret("smartschools/jwt-secret")

        assert exc_info.value.dependency == "secretsmanager"
        assert "ResourceNotFoundException" in exc_info.value.message

    def test_feeds_signing_key(self):
        """Signing key is extracted from the JSON secret."""
        client = MagicMock()
        client.get_secret_value.return_value = {"SecretString": '{"key": "abc"}'}
        keys = SigningKeyProvider(SecretsManagerProvider(client=client), "smartschools/jwt-secret")

        assert keys.get() == "abc"


class TestVaultSecretProvider:
    """Tests for HashiCorp Vault access."""

    @staticmethod
    def make_client(data=None, error=None):
        client = MagicMock()
        read = client.secrets.kv.v2.read_secret_version
        if error is not None:
            read.side_effect = error
        else:
            read.return_value = {"data": {"data": data}}
        return client

    def test_multi_field_secret_as_json(self):
        client = self.make_client({"key": "abc", "rotated": "2024-01-01"})
        provider = VaultSecretProvider(token="t", client=client)

        raw = provider.get_secret("jwt-secret")

        assert json.loads(raw) == {"key": "abc", "rotated": "2024-01-01"}
        client.secrets.kv.v2.read_secret_version.assert_called_once_with(
            path="jwt-secret",
            mount_point="smartschools",
            raise_on_deleted_version=True,
        )

    def test_single_value_secret(self):
        provider = VaultSecretProvider(token="t", client=self.make_client({"value": "abc"}))

        assert provider.get_secret("jwt-secret") == "abc"

    def test_missing_path(self):
        provider = VaultSecretProvider(token="t", client=self.make_client(error=InvalidPath()))

        with pytest.raises(DependencyError) as exc_info:
            provider.get_secret("jwt-secret")

        assert exc_info.value.dependency == "vault"

    def test_forbidden(self):
        provider = VaultSecretProvider(token="t", client=self.make_client(error=Forbidden()))

        with pytest.raises(DependencyError):
            provider.get_secret("jwt-secret")


class TestEnvSecretProvider:
    """Tests for environment-variable secrets."""

    def test_env_var_name(self):
        assert env_var_name("smartschools/jwt-secret") == "SMARTSCHOOLS_JWT_SECRET"

    def test_pinned_variable(self):
        provider = EnvSecretProvider(variable="JWT_SECRET", environ={"JWT_SECRET": "abc"})

        assert provider.get_secret("smartschools/jwt-secret") == "abc"

    def test_derived_variable(self):
        provider = EnvSecretProvider(environ={"SMARTSCHOOLS_JWT_SECRET": "abc"})

        assert provider.get_secret("smartschools/jwt-secret") == "abc"

    def test_missing_variable(self):
        provider = EnvSecretProvider(variable="JWT_SECRET", environ={})

        with pytest.raises(DependencyError):
            provider.get_secret("smartschools/jwt-secret")
