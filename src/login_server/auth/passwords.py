"""
Password hashing and verification.

The game server stores account passwords as an unsalted hex digest (SHA-1 on
stock installs). The scheme is a single configuration value
(``[security] password_scheme``) and callers only ever see the
``PasswordVerifier`` protocol, so adding a scheme means adding an entry to
``_SCHEMES`` and nothing else.

Verification never raises on bad input: a stored value that is not valid hex
is reported exactly like a wrong password. The digest comparison is
constant-time.
"""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Callable
from typing import Any, Protocol

_SCHEMES: dict[str, Callable[[bytes], Any]] = {
    "sha1": hashlib.sha1,
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
}


class UnknownPasswordSchemeError(ValueError):
    """Raised when configuration names a hash scheme we do not implement."""


class PasswordVerifier(Protocol):
    """Anything that can check a password against a stored hash."""

    def verify(self, password: str, stored_hash: str) -> bool: ...


def _digest_function(scheme: str) -> Callable[[bytes], Any]:
    try:
        return _SCHEMES[scheme.lower()]
    except KeyError:
        known = ", ".join(sorted(_SCHEMES))
        raise UnknownPasswordSchemeError(
            f"Unknown password scheme {scheme!r} (known: {known})"
        ) from None


def hash_password(password: str, scheme: str = "sha1") -> str:
    """Return the lowercase hex digest stored in ``accounts.password``."""
    return _digest_function(scheme)(password.encode("utf-8")).hexdigest()


class HashVerifier:
    """
    Verifier for unsalted hex-digest password hashes.

    Args:
        scheme: Hash algorithm name, one of ``sha1``, ``sha256``, ``sha512``.

    Raises:
        UnknownPasswordSchemeError: At construction, for an unsupported scheme.
    """

    def __init__(self, scheme: str = "sha1") -> None:
        self.scheme = scheme.lower()
        self._digest = _digest_function(self.scheme)

    def verify(self, password: str, stored_hash: str) -> bool:
        """Return True when ``password`` hashes to ``stored_hash``."""
        try:
            expected = bytes.fromhex(stored_hash)
        except (TypeError, ValueError):
            return False
        actual = self._digest(password.encode("utf-8")).digest()
        # compare_digest returns False on length mismatch without early exit on content.
        return hmac.compare_digest(actual, expected)

    def __repr__(self) -> str:
        return f"HashVerifier(scheme={self.scheme!r})"


def get_verifier(scheme: str | None = None) -> PasswordVerifier:
    """Build the verifier for ``scheme``, defaulting to the configured one."""
    if scheme is None:
        from login_server.config import config

        scheme = config.security.password_scheme
    return HashVerifier(scheme)
