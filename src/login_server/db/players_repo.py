"""Character (``players`` table) repository operations for the SQLite backend."""

from __future__ import annotations

import sqlite3

from login_server.db.connection import connection_scope
from login_server.db.errors import raise_read_error, raise_write_error
from login_server.db.types import CharacterRecord

_CHARACTER_COLUMNS = (
    "name, level, sex, vocation, looktype, lookhead, lookbody, looklegs, lookfeet, "
    "lookaddons, lastlogin, isreward, istutorial"
)


def _row_to_character(row: tuple) -> CharacterRecord:
    return CharacterRecord(
        name=str(row[0]),
        level=int(row[1]),
        sex=int(row[2]),
        vocation=int(row[3]),
        look_type=int(row[4]),
        look_head=int(row[5]),
        look_body=int(row[6]),
        look_legs=int(row[7]),
        look_feet=int(row[8]),
        look_addons=int(row[9]),
        last_login=int(row[10] or 0),
        pending_reward=bool(row[11]),
        is_tutorial=bool(row[12]),
    )


def list_characters_by_account(account_id: int) -> list[CharacterRecord]:
    """Return every character owned by ``account_id`` in insertion order.

    The cursor is drained before the connection closes; a row that fails to
    convert aborts the whole listing rather than being skipped.
    """
    try:
        with connection_scope() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_CHARACTER_COLUMNS} FROM players "  # nosec B608
                "WHERE account_id = ? ORDER BY id",
                (account_id,),
            )
            rows = cursor.fetchall()
        return [_row_to_character(row) for row in rows]
    except Exception as exc:
        raise_read_error(
            "players.list_characters_by_account",
            exc,
            details=f"account_id={account_id}",
        )


def create_character(account_id: int, character: CharacterRecord) -> bool:
    """Insert a character for an existing account.

    Returns:
        ``True`` on insert, ``False`` when the name is taken or the account
        does not exist.
    """
    try:
        with connection_scope(write=True) as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                INSERT INTO players (account_id, {_CHARACTER_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,  # nosec B608
                (
                    account_id,
                    character.name,
                    character.level,
                    character.sex,
                    character.vocation,
                    character.look_type,
                    character.look_head,
                    character.look_body,
                    character.look_legs,
                    character.look_feet,
                    character.look_addons,
                    character.last_login,
                    int(character.pending_reward),
                    int(character.is_tutorial),
                ),
            )
        return True
    except sqlite3.IntegrityError:
        return False
    except Exception as exc:
        raise_write_error(
            "players.create_character",
            exc,
            details=f"account_id={account_id}, name={character.name!r}",
        )
