"""
Unit tests for credential verification (login_server/auth/passwords.py).

Tests cover:
- Digest format per scheme
- Matching and mismatching passwords
- Malformed stored hashes reported as a mismatch
- Constant-time comparison
- Scheme selection from configuration
"""

import hashlib
from unittest.mock import patch

import pytest

from login_server.auth import passwords
from login_server.auth.passwords import (
    HashVerifier,
    UnknownPasswordSchemeError,
    get_verifier,
    hash_password,
)
from tests.constants import TEST_PASSWORD, TEST_PASSWORD_SHA1

# ============================================================================
# HASHING
# ============================================================================


@pytest.mark.unit
@pytest.mark.auth
def test_hash_password_sha1_matches_stored_format():
    assert hash_password(TEST_PASSWORD) == TEST_PASSWORD_SHA1


@pytest.mark.unit
@pytest.mark.auth
@pytest.mark.parametrize("scheme", ["sha256", "sha512"])
def test_hash_password_other_schemes(scheme):
    expected = hashlib.new(scheme, TEST_PASSWORD.encode()).hexdigest()
    assert hash_password(TEST_PASSWORD, scheme) == expected


@pytest.mark.unit
@pytest.mark.auth
def test_unknown_scheme_rejected_at_construction():
    with pytest.raises(UnknownPasswordSchemeError):
        HashVerifier("md5")
    with pytest.raises(UnknownPasswordSchemeError):
        hash_password(TEST_PASSWORD, "bcrypt")


# ============================================================================
# VERIFICATION
# ============================================================================


@pytest.mark.unit
@pytest.mark.auth
def test_verify_correct_password():
    assert HashVerifier("sha1").verify(TEST_PASSWORD, TEST_PASSWORD_SHA1) is True


@pytest.mark.unit
@pytest.mark.auth
def test_verify_accepts_uppercase_hex():
    assert HashVerifier("sha1").verify(TEST_PASSWORD, TEST_PASSWORD_SHA1.upper()) is True


@pytest.mark.unit
@pytest.mark.auth
def test_verify_wrong_password():
    assert HashVerifier("sha1").verify("not-secret", TEST_PASSWORD_SHA1) is False


@pytest.mark.unit
@pytest.mark.auth
def test_verify_single_byte_difference():
    tampered = TEST_PASSWORD_SHA1[:-2] + ("00" if TEST_PASSWORD_SHA1[-2:] != "00" else "01")
    assert HashVerifier("sha1").verify(TEST_PASSWORD, tampered) is False


@pytest.mark.unit
@pytest.mark.auth
@pytest.mark.parametrize(
    "stored",
    [
        "",
        "zz",
        "abc",  # odd length
        "not a hash at all",
        TEST_PASSWORD_SHA1[:-2],  # truncated
        TEST_PASSWORD_SHA1 + "00",  # too long
    ],
)
def test_verify_malformed_or_wrong_length_hash_is_false(stored):
    assert HashVerifier("sha1").verify(TEST_PASSWORD, stored) is False


@pytest.mark.unit
@pytest.mark.auth
def test_verify_hash_from_other_scheme_is_false():
    sha256_hash = hash_password(TEST_PASSWORD, "sha256")
    assert HashVerifier("sha1").verify(TEST_PASSWORD, sha256_hash) is False
    assert HashVerifier("sha256").verify(TEST_PASSWORD, sha256_hash) is True


@pytest.mark.unit
@pytest.mark.auth
def test_verify_uses_constant_time_compare():
    with patch.object(passwords.hmac, "compare_digest", return_value=False) as compare:
        assert HashVerifier("sha1").verify(TEST_PASSWORD, TEST_PASSWORD_SHA1) is False
    compare.assert_called_once()


# ============================================================================
# CONFIGURED VERIFIER
# ============================================================================


@pytest.mark.unit
@pytest.mark.auth
def test_get_verifier_uses_configured_scheme(monkeypatch):
    from login_server.config import config

    monkeypatch.setattr(config.security, "password_scheme", "sha512")
    verifier = get_verifier()

    assert isinstance(verifier, HashVerifier)
    assert verifier.scheme == "sha512"


@pytest.mark.unit
@pytest.mark.auth
def test_get_verifier_explicit_scheme_wins():
    assert get_verifier("SHA256").scheme == "sha256"
