"""
Shared fixtures for the OTP flow tests.
"""

import json
import re

import pytest

from smartschools_auth.authorizer import TokenAuthorizer
from smartschools_auth.email import LogEmailSender
from smartschools_auth.issuer import OTPIssuer
from smartschools_auth.otp import OTPConfig
from smartschools_auth.secret_store import SigningKeyProvider, StaticSecretProvider
from smartschools_auth.store import InMemoryOTPStore
from smartschools_auth.tokens import SessionTokenSigner
from smartschools_auth.verifier import OTPVerifier

SIGNING_KEY = "test-signing-key-0123456789abcdef0123456789abcdef"
OTHER_KEY = "other-signing-key-fedcba9876543210fedcba9876543210"
SECRET_ID = "smartschools/jwt-secret"
START_TIME = 1_700_000_000.0

_CODE_PATTERN = re.compile(r"Your One-Time Password is: (\d{6})")


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_key_provider(key: str = SIGNING_KEY) -> SigningKeyProvider:
    provider = StaticSecretProvider({SECRET_ID: json.dumps({"key": key})})
    return SigningKeyProvider(provider, secret_id=SECRET_ID, field="key")


def code_from(sender: LogEmailSender, index: int = -1) -> str:
    """Pull the plaintext code out of a sent email."""
    match = _CODE_PATTERN.search(sender.outbox[index].body)
    assert match, "no code in email body"
    return match.group(1)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def otp_config():
    # Lowest bcrypt cost keeps the suite fast
    return OTPConfig(hash_rounds=4)


@pytest.fixture
def store(clock):
    return InMemoryOTPStore(clock=clock)


@pytest.fixture
def sender():
    return LogEmailSender()


@pytest.fixture
def key_provider():
    return make_key_provider()


@pytest.fixture
def signer(key_provider, clock):
    return SessionTokenSigner(key_provider, ttl_seconds=3600, clock=clock)


@pytest.fixture
def issuer(store, sender, otp_config, clock):
    return OTPIssuer(store, sender, config=otp_config, clock=clock)


@pytest.fixture
def verifier(store, signer, otp_config, clock):
    return OTPVerifier(store, signer, config=otp_config, clock=clock)


@pytest.fixture
def authorizer(signer, clock):
    return TokenAuthorizer(signer, clock=clock)
