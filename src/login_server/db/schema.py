"""Schema creation for the SQLite record store.

The tables mirror the subset of the game server's schema that the login
gateway reads. Column names follow the game server so an exported database
can be pointed at directly.
"""

from __future__ import annotations

import sqlite3

from login_server.db.connection import connection_scope
from login_server.db.errors import raise_write_error

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS accounts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        email TEXT UNIQUE NOT NULL,
        password TEXT NOT NULL,                   -- hex digest, see auth.passwords
        premdays INTEGER NOT NULL DEFAULT 0 CHECK (premdays >= 0),
        creation INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS players (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        account_id INTEGER NOT NULL REFERENCES accounts(id) ON DELETE CASCADE,
        name TEXT UNIQUE NOT NULL,
        level INTEGER NOT NULL DEFAULT 1,
        sex INTEGER NOT NULL DEFAULT 0,
        vocation INTEGER NOT NULL DEFAULT 0,
        looktype INTEGER NOT NULL DEFAULT 128,
        lookhead INTEGER NOT NULL DEFAULT 0,
        lookbody INTEGER NOT NULL DEFAULT 0,
        looklegs INTEGER NOT NULL DEFAULT 0,
        lookfeet INTEGER NOT NULL DEFAULT 0,
        lookaddons INTEGER NOT NULL DEFAULT 0,
        lastlogin INTEGER NOT NULL DEFAULT 0,
        isreward INTEGER NOT NULL DEFAULT 0,
        istutorial INTEGER NOT NULL DEFAULT 0
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_players_account_id ON players(account_id)",
    """
    CREATE TABLE IF NOT EXISTS boosted_creature (
        boostname TEXT NOT NULL DEFAULT '',
        date TEXT NOT NULL DEFAULT '',
        raceid INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS players_online (
        player_id INTEGER PRIMARY KEY
    )
    """,
)


def create_schema(conn: sqlite3.Connection) -> None:
    """Create all tables and indexes on an open connection."""
    cursor = conn.cursor()
    for statement in SCHEMA_STATEMENTS:
        cursor.execute(statement)


def init_database() -> None:
    """Create the database file and schema if they do not exist yet."""
    try:
        with connection_scope(write=True) as conn:
            create_schema(conn)
    except Exception as exc:
        raise_write_error("schema.init_database", exc)
