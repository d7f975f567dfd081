"""
AWS Secrets Manager Provider
============================
Fetches secrets from AWS Secrets Manager by name or ARN.
"""

from typing import Any, Optional

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from smartschools_auth.errors import DependencyError

from .base import SecretProvider

logger = structlog.get_logger(__name__)


class SecretsManagerProvider(SecretProvider):
    """Secret provider backed by AWS Secrets Manager."""

    name = "secretsmanager"

    def __init__(self, region_name: Optional[str] = None, client: Any = None):
        self.region_name = region_name
        self._client = client

    @property
    def client(self):
        """Lazy-loaded boto3 client."""
        if self._client is None:
            self._client = boto3.client("secretsmanager", region_name=self.region_name)
        return self._client

    def get_secret(self, secret_id: str) -> str:
        try:
            response = self.client.get_secret_value(SecretId=secret_id)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(
                "Failed to read secret",
                secret_id=secret_id,
                error_code=error_code,
            )
            raise DependencyError(
                f"secret {secret_id} unavailable ({error_code})",
                dependency=self.name,
            ) from e
        except BotoCoreError as e:
            logger.error("Secrets Manager unreachable", secret_id=secret_id, error=str(e))
            raise DependencyError(str(e), dependency=self.name) from e

        # Secret can be string or binary
        if "SecretString" in response:
            return response["SecretString"]
        binary = response["SecretBinary"]
        return binary.decode("utf-8") if isinstance(binary, bytes) else str(binary)
