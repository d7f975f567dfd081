"""
OTP Record Stores
=================
Backends for the OTP record store collaborator.
"""

from .base import OTPStore
from .dynamodb import DynamoDBOTPStore
from .redis_store import RedisOTPStore
from .in_memory import InMemoryOTPStore

__all__ = [
    "OTPStore",
    "DynamoDBOTPStore",
    "RedisOTPStore",
    "InMemoryOTPStore",
]
