"""
Session key factories.

``opaque`` issues a random token that carries nothing about the account.
``legacy`` reproduces the ``email\\npassword`` key that older game servers
split back into credentials; it exposes the password to anything that logs
the key, so it is opt-in only.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable

from login_server.core.types import LoginCredentials

SessionKeyFactory = Callable[[LoginCredentials], str]

OPAQUE_TOKEN_BYTES = 32


def opaque_session_key(credentials: LoginCredentials) -> str:
    """Random URL-safe token, unrelated to the credentials."""
    return secrets.token_urlsafe(OPAQUE_TOKEN_BYTES)


def legacy_session_key(credentials: LoginCredentials) -> str:
    """Email and password joined by a newline."""
    return f"{credentials.email}\n{credentials.password}"


_FACTORIES: dict[str, SessionKeyFactory] = {
    "opaque": opaque_session_key,
    "legacy": legacy_session_key,
}


def get_session_key_factory(scheme: str | None = None) -> SessionKeyFactory:
    """Return the factory for ``scheme``, defaulting to the configured one."""
    if scheme is None:
        from login_server.config import config

        scheme = config.security.session_key_scheme
    try:
        return _FACTORIES[scheme]
    except KeyError:
        raise ValueError(f"Unknown session key scheme {scheme!r}") from None
