"""
In-Memory OTP Store
===================
Process-local OTP store for local development and tests.

Not shared across Lambda instances; use DynamoDB or Redis in deployments.
"""

import time
from typing import Callable, Dict, Optional

from smartschools_auth.otp.models import OTPRecord

from .base import OTPStore


class InMemoryOTPStore(OTPStore):
    """
    Dictionary-backed OTP store.

    Eviction is lazy and trails ``expires_at`` by ``eviction_delay_seconds``,
    like a managed TTL sweep.
    """

    name = "memory"

    def __init__(
        self,
        eviction_delay_seconds: int = 60,
        clock: Callable[[], float] = time.time,
    ):
        self.eviction_delay_seconds = eviction_delay_seconds
        self.clock = clock
        self._records: Dict[str, OTPRecord] = {}

    def put(self, record: OTPRecord, ttl_seconds: int) -> None:
        self._records[record.identity] = record

    def get(self, identity: str) -> Optional[OTPRecord]:
        record = self._records.get(identity)
        if record is None:
            return None
        if self.clock() > record.expires_at + self.eviction_delay_seconds:
            del self._records[identity]
            return None
        return record

    def delete(self, identity: str) -> None:
        self._records.pop(identity, None)

    def __len__(self) -> int:
        return len(self._records)
