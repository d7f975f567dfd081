"""
OTP Hashing Utilities
=====================
Code generation and adaptive salted hashing for OTP storage.

bcrypt is the default; Argon2id is accepted as well. Verification detects
the algorithm from the hash prefix, so records written under either
setting stay verifiable after a configuration change.
"""

import secrets
from functools import lru_cache

import bcrypt
from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from .models import HashAlgorithm

OTP_MIN = 100000
OTP_MAX = 999999

# bcrypt ignores input past 72 bytes and newer releases reject it outright
MAX_OTP_INPUT_BYTES = 72

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
ARGON2_PREFIX = "$argon2"


def generate_otp() -> str:
    """
    Generate a 6-digit numeric OTP.

    Drawn uniformly from 100000-999999 with the ``secrets`` CSPRNG.
    """
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


@lru_cache(maxsize=1)
def get_argon2_hasher() -> PasswordHasher:
    """Get cached Argon2id hasher sized for a small Lambda."""
    return PasswordHasher(
        time_cost=2,
        memory_cost=19456,  # 19 MiB
        parallelism=1,
        hash_len=32,
        salt_len=16,
        type=Type.ID,
    )


def hash_otp(
    otp: str,
    algorithm: HashAlgorithm = HashAlgorithm.BCRYPT,
    rounds: int = 10,
) -> str:
    """
    Hash an OTP with a fresh per-call salt.

    Args:
        otp: Plain OTP
        algorithm: Hash algorithm
        rounds: bcrypt cost factor (ignored for Argon2id)

    Returns:
        Self-describing hash string (algorithm, parameters, salt, digest)
    """
    if not otp:
        raise ValueError("OTP cannot be empty")

    if HashAlgorithm(algorithm) is HashAlgorithm.ARGON2:
        return get_argon2_hasher().hash(otp)

    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(otp.encode("utf-8"), salt).decode("utf-8")


@lru_cache(maxsize=8)
def dummy_hash(
    algorithm: HashAlgorithm = HashAlgorithm.BCRYPT,
    rounds: int = 10,
) -> str:
    """
    Hash of a value that is never issued as a code.

    Compared against when no record exists, so a miss costs the same as a
    real verification.
    """
    return hash_otp("not-an-otp", algorithm=algorithm, rounds=rounds)


def verify_otp_hash(otp: str, stored_hash: str) -> bool:
    """
    Verify an OTP against its stored hash.

    Uses the hashing primitive's own check, which compares in constant time.

    Args:
        otp: User-provided OTP
        stored_hash: Hash from the OTP record

    Returns:
        True if OTP matches
    """
    if not otp or not stored_hash:
        return False

    otp_bytes = otp.encode("utf-8")
    if len(otp_bytes) > MAX_OTP_INPUT_BYTES:
        return False

    if stored_hash.startswith(BCRYPT_PREFIXES):
        try:
            return bcrypt.checkpw(otp_bytes, stored_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    if stored_hash.startswith(ARGON2_PREFIX):
        try:
            return get_argon2_hasher().verify(stored_hash, otp)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False

    return False
