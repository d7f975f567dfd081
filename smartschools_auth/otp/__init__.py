"""
OTP Primitives
==============
Code generation, adaptive hashing and record models for email OTPs.
"""

from .models import HashAlgorithm, OTPConfig, OTPRecord, IssueResult, VerifyResult
from .hashing import generate_otp, hash_otp, verify_otp_hash, dummy_hash, OTP_MIN, OTP_MAX

__all__ = [
    # Models
    "HashAlgorithm",
    "OTPConfig",
    "OTPRecord",
    "IssueResult",
    "VerifyResult",
    # Hashing
    "generate_otp",
    "hash_otp",
    "verify_otp_hash",
    "dummy_hash",
    "OTP_MIN",
    "OTP_MAX",
]
