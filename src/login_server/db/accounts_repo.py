"""Account repository operations for the SQLite backend."""

from __future__ import annotations

import sqlite3
import time

from login_server.db.connection import connection_scope
from login_server.db.errors import raise_read_error, raise_write_error
from login_server.db.types import AccountRecord


def _row_to_account(row: tuple) -> AccountRecord:
    return AccountRecord(
        id=int(row[0]),
        email=str(row[1]),
        password_hash=str(row[2]),
        premium_days=max(0, int(row[3])),
    )


def find_account_by_email(email: str) -> AccountRecord | None:
    """Return the account registered under ``email`` or ``None`` if missing."""
    try:
        with connection_scope() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, email, password, premdays FROM accounts WHERE email = ?",
                (email,),
            )
            row = cursor.fetchone()
        return _row_to_account(row) if row else None
    except Exception as exc:
        raise_read_error("accounts.find_account_by_email", exc)


def get_account_id(email: str) -> int | None:
    """Return account id for ``email`` or ``None`` if missing."""
    try:
        with connection_scope() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id FROM accounts WHERE email = ?", (email,))
            row = cursor.fetchone()
        return int(row[0]) if row else None
    except Exception as exc:
        raise_read_error("accounts.get_account_id", exc)


def create_account(email: str, password_hash: str, *, premium_days: int = 0) -> int | None:
    """Insert an account row.

    Args:
        email: Unique account email.
        password_hash: Digest produced by ``auth.passwords.hash_password``.
        premium_days: Initial premium days.

    Returns:
        The new account id, or ``None`` when the email is already taken.
    """
    if premium_days < 0:
        raise ValueError("premium_days must be non-negative")
    try:
        with connection_scope(write=True) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO accounts (email, password, premdays, creation) VALUES (?, ?, ?, ?)",
                (email, password_hash, premium_days, int(time.time())),
            )
            account_id = cursor.lastrowid
        return int(account_id) if account_id is not None else None
    except sqlite3.IntegrityError:
        return None
    except Exception as exc:
        raise_write_error("accounts.create_account", exc, details=f"email={email!r}")


def set_premium_days(account_id: int, premium_days: int) -> bool:
    """Update remaining premium days. Returns ``False`` when no row matched."""
    if premium_days < 0:
        raise ValueError("premium_days must be non-negative")
    try:
        with connection_scope(write=True) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE accounts SET premdays = ? WHERE id = ?",
                (premium_days, account_id),
            )
            return cursor.rowcount > 0
    except Exception as exc:
        raise_write_error("accounts.set_premium_days", exc, details=f"account_id={account_id}")
