"""
DynamoDB OTP Store
==================
OTP records in a DynamoDB table with native TTL.

Table layout:
    email   (S, partition key)
    otp     (S) credential hash
    expires (N) epoch seconds, configured as the table's TTL attribute
"""

from typing import Any, Optional

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from smartschools_auth.errors import DependencyError
from smartschools_auth.otp.models import OTPRecord

from .base import OTPStore

logger = structlog.get_logger(__name__)

PARTITION_KEY = "email"
HASH_ATTRIBUTE = "otp"
TTL_ATTRIBUTE = "expires"


class DynamoDBOTPStore(OTPStore):
    """OTP store backed by a DynamoDB table."""

    name = "dynamodb"

    def __init__(
        self,
        table_name: str,
        region_name: Optional[str] = None,
        table: Any = None,
    ):
        self.table_name = table_name
        self.region_name = region_name
        self._table = table

    @property
    def table(self):
        """Lazy-loaded boto3 Table resource."""
        if self._table is None:
            resource = boto3.resource("dynamodb", region_name=self.region_name)
            self._table = resource.Table(self.table_name)
        return self._table

    def put(self, record: OTPRecord, ttl_seconds: int) -> None:
        # DynamoDB expires the item from the TTL attribute itself
        try:
            self.table.put_item(
                Item={
                    PARTITION_KEY: record.identity,
                    HASH_ATTRIBUTE: record.credential_hash,
                    TTL_ATTRIBUTE: record.expires_at,
                }
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("OTP record write failed", table=self.table_name, error=str(e))
            raise DependencyError(str(e), dependency=self.name) from e

    def get(self, identity: str) -> Optional[OTPRecord]:
        try:
            response = self.table.get_item(
                Key={PARTITION_KEY: identity},
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("OTP record read failed", table=self.table_name, error=str(e))
            raise DependencyError(str(e), dependency=self.name) from e

        item = response.get("Item")
        if not item:
            return None

        try:
            return OTPRecord(
                identity=item[PARTITION_KEY],
                credential_hash=item[HASH_ATTRIBUTE],
                # Numbers come back as Decimal
                expires_at=int(item[TTL_ATTRIBUTE]),
            )
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            logger.error("OTP record unreadable", table=self.table_name, error=str(e))
            raise DependencyError(f"corrupt record: {e}", dependency=self.name) from e

    def delete(self, identity: str) -> None:
        try:
            self.table.delete_item(Key={PARTITION_KEY: identity})
        except (ClientError, BotoCoreError) as e:
            logger.error("OTP record delete failed", table=self.table_name, error=str(e))
            raise DependencyError(str(e), dependency=self.name) from e
