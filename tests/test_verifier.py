"""
Unit Tests for the OTP Verifier
===============================
"""

from unittest.mock import MagicMock, patch

import pytest

from smartschools_auth.errors import (
    AuthenticationFailed,
    DependencyError,
    ExpiredError,
    InvalidCredentialError,
    NotFoundError,
    ValidationError,
)
from smartschools_auth.otp import HashAlgorithm, OTPConfig, dummy_hash, verify_otp_hash
from smartschools_auth.tokens import SessionTokenSigner
from smartschools_auth.verifier import OTPVerifier

from conftest import START_TIME, code_from, make_key_provider


def wrong_code(code: str) -> str:
    return "000000" if code != "000000" else "111111"


class TestVerify:
    """Tests for OTPVerifier.verify."""

    def test_correct_code_returns_token(self, issuer, verifier, sender, signer):
        """Correct code within expiry yields a token for the identity."""
        issuer.issue("a@x.com")

        result = verifier.verify("a@x.com", code_from(sender))

        assert result.identity == "a@x.com"
        assert signer.validate(result.token).identity == "a@x.com"

    def test_wrong_code(self, issuer, verifier, sender):
        """Mismatched code is an invalid credential."""
        issuer.issue("a@x.com")

        with pytest.raises(InvalidCredentialError):
            verifier.verify("a@x.com", wrong_code(code_from(sender)))

    def test_no_record(self, verifier):
        """Identity without a challenge is not found."""
        with pytest.raises(NotFoundError):
            verifier.verify("nobody@x.com", "123456")

    def test_expired_even_with_correct_code(self, issuer, verifier, sender, clock):
        """Correct code after expiry is rejected as expired."""
        issuer.issue("a@x.com")
        clock.advance(301)

        with pytest.raises(ExpiredError):
            verifier.verify("a@x.com", code_from(sender))

    def test_valid_at_expiry_instant(self, issuer, verifier, sender, clock):
        """Code is still accepted at exactly expires_at."""
        issuer.issue("a@x.com")
        clock.advance(300)

        assert verifier.verify("a@x.com", code_from(sender)).identity == "a@x.com"

    def test_reissue_invalidates_previous_code(self, issuer, verifier, sender):
        """Only the most recently emailed code verifies."""
        issuer.issue("a@x.com")
        first = code_from(sender, 0)
        issuer.issue("a@x.com")
        second = code_from(sender, 1)

        if first != second:
            with pytest.raises(InvalidCredentialError):
                verifier.verify("a@x.com", first)
        assert verifier.verify("a@x.com", second).identity == "a@x.com"

    def test_identity_normalized(self, issuer, verifier, sender):
        """Verification matches regardless of address case."""
        issuer.issue("a@x.com")

        result = verifier.verify(" A@X.COM", code_from(sender))

        assert result.identity == "a@x.com"

    def test_surrounding_whitespace_in_code(self, issuer, verifier, sender):
        """Whitespace around the code is ignored."""
        issuer.issue("a@x.com")

        assert verifier.verify("a@x.com", f" {code_from(sender)} ").identity == "a@x.com"

    @pytest.mark.parametrize(
        "identity,code",
        [
            ("a@x.com", None),
            ("a@x.com", ""),
            (None, "123456"),
            ("", "123456"),
        ],
    )
    def test_missing_inputs(self, verifier, identity, code):
        """Missing identity or code is a validation error."""
        with pytest.raises(ValidationError):
            verifier.verify(identity, code)

    def test_oversized_code(self, verifier):
        """Absurdly long codes are rejected as input errors."""
        with pytest.raises(ValidationError):
            verifier.verify("a@x.com", "1" * 200)

    def test_failures_share_public_message(self, issuer, verifier, sender, clock):
        """Not found, mismatch and expiry look identical to the client."""
        issuer.issue("a@x.com")
        code = code_from(sender)
        errors = []

        for identity, claimed in (("b@x.com", code), ("a@x.com", wrong_code(code))):
            with pytest.raises(AuthenticationFailed) as exc_info:
                verifier.verify(identity, claimed)
            errors.append(exc_info.value)

        clock.advance(301)
        with pytest.raises(AuthenticationFailed) as exc_info:
            verifier.verify("a@x.com", code)
        errors.append(exc_info.value)

        assert {e.public_message for e in errors} == {"Invalid code or email"}
        assert {e.status_code for e in errors} == {401}


class TestTimingParity:
    """Every rejection path pays for one hash comparison."""

    def test_no_record_still_hashes(self, verifier):
        with patch("smartschools_auth.verifier.verify_otp_hash", wraps=verify_otp_hash) as check:
            with pytest.raises(NotFoundError):
                verifier.verify("nobody@x.com", "123456")

        check.assert_called_once()
        assert check.call_args.args[1].startswith("$2b$04$")

    def test_expired_still_hashes(self, issuer, verifier, sender, clock):
        issuer.issue("a@x.com")
        clock.advance(301)

        with patch("smartschools_auth.verifier.verify_otp_hash", wraps=verify_otp_hash) as check:
            with pytest.raises(ExpiredError):
                verifier.verify("a@x.com", code_from(sender))

        check.assert_called_once()

    def test_dummy_hash_never_matches_a_code(self):
        """The stand-in hash rejects every issuable code."""
        stand_in = dummy_hash(HashAlgorithm.BCRYPT, 4)

        assert dummy_hash(HashAlgorithm.BCRYPT, 4) is stand_in
        for code in ("100000", "123456", "999999"):
            assert verify_otp_hash(code, stand_in) is False


class TestReplay:
    """Tests for reuse of a verified code."""

    def test_code_reusable_by_default(self, issuer, verifier, sender, clock):
        """Without consumption the same code verifies again, with a fresh token."""
        issuer.issue("a@x.com")
        code = code_from(sender)

        first = verifier.verify("a@x.com", code)
        clock.advance(1)
        second = verifier.verify("a@x.com", code)

        assert first.token != second.token

    def test_consume_on_verify(self, issuer, store, signer, sender, clock):
        """With consumption enabled the record is deleted after success."""
        verifier = OTPVerifier(
            store,
            signer,
            config=OTPConfig(hash_rounds=4, consume_on_verify=True),
            clock=clock,
        )
        issuer.issue("a@x.com")
        code = code_from(sender)

        verifier.verify("a@x.com", code)

        assert store.get("a@x.com") is None
        with pytest.raises(NotFoundError):
            verifier.verify("a@x.com", code)

    def test_consume_keeps_record_when_mint_fails(self, issuer, store, sender, clock):
        """A correct code is not used up if no token could be issued."""
        key_provider = MagicMock()
        key_provider.get.side_effect = DependencyError("unreachable", dependency="secretsmanager")
        config = OTPConfig(hash_rounds=4, consume_on_verify=True)
        failing = OTPVerifier(
            store,
            SessionTokenSigner(key_provider, clock=clock),
            config=config,
            clock=clock,
        )
        issuer.issue("a@x.com")
        code = code_from(sender)

        with pytest.raises(DependencyError):
            failing.verify("a@x.com", code)

        assert store.get("a@x.com") is not None
        retry = OTPVerifier(
            store,
            SessionTokenSigner(make_key_provider(), clock=clock),
            config=config,
            clock=clock,
        )
        assert retry.verify("a@x.com", code).identity == "a@x.com"
        assert store.get("a@x.com") is None

    def test_failed_attempt_keeps_record(self, issuer, verifier, store, sender):
        """Wrong guesses do not consume the challenge."""
        issuer.issue("a@x.com")
        code = code_from(sender)

        with pytest.raises(InvalidCredentialError):
            verifier.verify("a@x.com", wrong_code(code))

        assert store.get("a@x.com") is not None
        assert verifier.verify("a@x.com", code).identity == "a@x.com"


class TestVerifyFailures:
    """Tests for collaborator failures during verification."""

    def test_store_unavailable(self, signer, otp_config, clock):
        """Store failure propagates as DependencyError."""
        store = MagicMock()
        store.get.side_effect = DependencyError("timeout", dependency="dynamodb")
        verifier = OTPVerifier(store, signer, config=otp_config, clock=clock)

        with pytest.raises(DependencyError):
            verifier.verify("a@x.com", "123456")

    def test_key_unavailable(self, issuer, store, sender, otp_config, clock):
        """Signing key failure after a correct code is a DependencyError."""
        key_provider = MagicMock()
        key_provider.get.side_effect = DependencyError("secret missing", dependency="secretsmanager")
        verifier = OTPVerifier(
            store,
            SessionTokenSigner(key_provider, clock=clock),
            config=otp_config,
            clock=clock,
        )
        issuer.issue("a@x.com")

        with pytest.raises(DependencyError):
            verifier.verify("a@x.com", code_from(sender))

    def test_token_expiry_from_clock(self, issuer, verifier, sender):
        """Token expiry is one hour after verification."""
        issuer.issue("a@x.com")

        result = verifier.verify("a@x.com", code_from(sender))

        assert result.expires_at == int(START_TIME) + 3600
