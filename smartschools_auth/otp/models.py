"""
OTP Models
==========
Data models for OTP issuance and verification.
"""

from dataclasses import dataclass
from enum import Enum


class HashAlgorithm(str, Enum):
    """Adaptive hash algorithms accepted for OTP storage."""
    BCRYPT = "bcrypt"
    ARGON2 = "argon2"


@dataclass
class OTPConfig:
    """Configuration for OTP generation."""
    expiry_seconds: int = 300  # 5 minutes
    hash_algorithm: HashAlgorithm = HashAlgorithm.BCRYPT
    hash_rounds: int = 10  # bcrypt cost factor
    consume_on_verify: bool = False


@dataclass
class OTPRecord:
    """One outstanding challenge, keyed by identity."""
    identity: str
    credential_hash: str
    expires_at: int  # epoch seconds

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at

    def ttl_seconds(self, now: float) -> int:
        return max(0, int(self.expires_at - now))


@dataclass
class IssueResult:
    """Acknowledgement returned to the caller; never carries the code."""
    message: str
    expires_at: int


@dataclass
class VerifyResult:
    """Successful verification."""
    identity: str
    token: str
    expires_at: int
