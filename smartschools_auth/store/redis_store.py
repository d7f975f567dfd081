"""
Redis OTP Store
===============
OTP records as JSON strings with a Redis key expiry.
"""

import json
from typing import Optional

import redis
import structlog

from smartschools_auth.errors import DependencyError
from smartschools_auth.otp.models import OTPRecord

from .base import OTPStore

logger = structlog.get_logger(__name__)

# Keys outlive the challenge slightly so late attempts read as expired
EVICTION_GRACE_SECONDS = 60


class RedisOTPStore(OTPStore):
    """OTP store backed by Redis."""

    name = "redis"

    def __init__(self, redis_client: redis.Redis, key_prefix: str = "otp:"):
        """
        Args:
            redis_client: Sync Redis client
            key_prefix: Namespace for OTP keys
        """
        self.redis = redis_client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "otp:") -> "RedisOTPStore":
        return cls(redis.Redis.from_url(url, decode_responses=True), key_prefix)

    def _key(self, identity: str) -> str:
        return f"{self.key_prefix}{identity}"

    def put(self, record: OTPRecord, ttl_seconds: int) -> None:
        payload = json.dumps(
            {"otp": record.credential_hash, "expires": record.expires_at},
            separators=(",", ":"),
        )
        try:
            self.redis.set(
                self._key(record.identity),
                payload,
                ex=max(1, ttl_seconds) + EVICTION_GRACE_SECONDS,
            )
        except redis.RedisError as e:
            logger.error("OTP record write failed", error=str(e))
            raise DependencyError(str(e), dependency=self.name) from e

    def get(self, identity: str) -> Optional[OTPRecord]:
        try:
            raw = self.redis.get(self._key(identity))
        except redis.RedisError as e:
            logger.error("OTP record read failed", error=str(e))
            raise DependencyError(str(e), dependency=self.name) from e

        if raw is None:
            return None
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            data = json.loads(raw)
            return OTPRecord(
                identity=identity,
                credential_hash=data["otp"],
                expires_at=int(data["expires"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.error("OTP record unreadable", key=self._key(identity), error=str(e))
            raise DependencyError(f"corrupt record: {e}", dependency=self.name) from e

    def delete(self, identity: str) -> None:
        try:
            self.redis.delete(self._key(identity))
        except redis.RedisError as e:
            logger.error("OTP record delete failed", error=str(e))
            raise DependencyError(str(e), dependency=self.name) from e
