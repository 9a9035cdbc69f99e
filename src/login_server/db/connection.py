"""SQLite connection primitives for the record store.

Repositories open one short-lived connection per operation. The connect
timeout bounds how long a locked or unavailable database can stall a request.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


def get_db_path() -> Path:
    """Resolve the absolute SQLite database path from runtime configuration."""
    from login_server.config import config

    return config.database.absolute_path


def get_connection() -> sqlite3.Connection:
    """Create a new SQLite connection with the configured busy timeout."""
    from login_server.config import config

    path = get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    connection = sqlite3.connect(str(path), timeout=config.database.timeout_seconds)
    connection.execute("PRAGMA foreign_keys = ON")
    return connection


@contextmanager
def connection_scope(*, write: bool = False) -> Iterator[sqlite3.Connection]:
    """Yield a configured connection and always close it.

    Args:
        write: When True, commit on success and rollback on exceptions.
    """
    connection = get_connection()
    try:
        yield connection
        if write:
            connection.commit()
    except Exception:
        if write:
            try:
                connection.rollback()
            except sqlite3.Error:
                # Keep the original exception.
                pass
        raise
    finally:
        connection.close()
