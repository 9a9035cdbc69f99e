"""Credential verification."""

from login_server.auth.passwords import (
    HashVerifier,
    PasswordVerifier,
    UnknownPasswordSchemeError,
    get_verifier,
    hash_password,
)

__all__ = [
    "HashVerifier",
    "PasswordVerifier",
    "UnknownPasswordSchemeError",
    "get_verifier",
    "hash_password",
]
