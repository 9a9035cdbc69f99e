"""Login failures surfaced to the client.

Only two kinds exist. Messages are fixed strings: the underlying cause is
chained for server logs and never reaches the response.
"""

from __future__ import annotations


class LoginError(Exception):
    """Base class for failures returned to the client as ``{errorCode, errorMessage}``."""

    error_code: int = 1
    message: str = "Internal error."

    def __init__(self) -> None:
        super().__init__(self.message)


class InvalidCredentialsError(LoginError):
    """Unknown email, wrong password, or the account lookup itself failed."""

    error_code = 3
    message = "Invalid email or password."


class InternalLoginError(LoginError):
    """Failure after the account was authenticated."""

    error_code = 1
    message = "Internal error."
