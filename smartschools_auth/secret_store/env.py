"""
Environment Secret Provider
===========================
Secrets read from environment variables, for local development.
"""

import os
from typing import Mapping, Optional

from smartschools_auth.errors import DependencyError

from .base import SecretProvider


def env_var_name(secret_id: str) -> str:
    """``smartschools/jwt-secret`` maps to ``SMARTSCHOOLS_JWT_SECRET``."""
    return secret_id.replace("/", "_").replace("-", "_").upper()


class EnvSecretProvider(SecretProvider):
    """
    Secret provider backed by environment variables.

    ``variable`` pins a single variable for every lookup; otherwise the
    variable name is derived from the secret id.
    """

    name = "env"

    def __init__(
        self,
        variable: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.variable = variable
        self.environ = os.environ if environ is None else environ

    def get_secret(self, secret_id: str) -> str:
        name = self.variable or env_var_name(secret_id)
        value = self.environ.get(name)
        if not value:
            raise DependencyError(f"environment variable {name} not set", dependency=self.name)
        return value
