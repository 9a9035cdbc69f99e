"""Reads for the auxiliary client requests (boosted creature, online count)."""

from __future__ import annotations

from login_server.db.connection import connection_scope
from login_server.db.errors import raise_read_error, raise_write_error


def get_boosted_creature_race_id() -> int | None:
    """Return the boosted creature race id, or ``None`` when none is set."""
    try:
        with connection_scope() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT raceid FROM boosted_creature LIMIT 1")
            row = cursor.fetchone()
        return int(row[0]) if row else None
    except Exception as exc:
        raise_read_error("community.get_boosted_creature_race_id", exc)


def set_boosted_creature(race_id: int, *, name: str = "", date: str = "") -> None:
    """Replace the boosted creature row."""
    try:
        with connection_scope(write=True) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM boosted_creature")
            cursor.execute(
                "INSERT INTO boosted_creature (boostname, date, raceid) VALUES (?, ?, ?)",
                (name, date, race_id),
            )
    except Exception as exc:
        raise_write_error("community.set_boosted_creature", exc, details=f"race_id={race_id}")


def count_players_online() -> int:
    """Return the number of rows in ``players_online``."""
    try:
        with connection_scope() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM players_online")
            row = cursor.fetchone()
        return int(row[0]) if row else 0
    except Exception as exc:
        raise_read_error("community.count_players_online", exc)
