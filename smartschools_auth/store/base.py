"""
OTP Record Store
================
Collaborator interface for the key-value store holding OTP records.
"""

from abc import ABC, abstractmethod
from typing import Optional

from smartschools_auth.otp.models import OTPRecord


class OTPStore(ABC):
    """
    Key-value store keyed by identity.

    Single-record operations only. ``put`` overwrites any existing record for
    the same identity (last write wins). Backends evict records at or after
    ``expires_at``; eviction may lag, so callers must still check expiry.

    Backend failures surface as ``DependencyError``.
    """

    name: str = "base"

    @abstractmethod
    def put(self, record: OTPRecord, ttl_seconds: int) -> None:
        """Store a record, replacing any record for the same identity."""

    @abstractmethod
    def get(self, identity: str) -> Optional[OTPRecord]:
        """Return the record for an identity, or None."""

    @abstractmethod
    def delete(self, identity: str) -> None:
        """Remove the record for an identity; absent records are ignored."""
