"""Secret store providers and the cached signing-key handle."""

from .base import SecretProvider, StaticSecretProvider, SigningKeyProvider, extract_key
from .aws import SecretsManagerProvider
from .vault import VaultSecretProvider
from .env import EnvSecretProvider, env_var_name

__all__ = [
    "SecretProvider",
    "StaticSecretProvider",
    "SigningKeyProvider",
    "extract_key",
    "SecretsManagerProvider",
    "VaultSecretProvider",
    "EnvSecretProvider",
    "env_var_name",
]
