"""Record store adapter handed to the login pipeline.

Forwards to the repository modules at call time so tests can patch
``accounts_repo`` / ``players_repo`` functions and have the store observe it.
"""

from __future__ import annotations

from login_server.db import accounts_repo, players_repo
from login_server.db.types import AccountRecord, CharacterRecord


class SqliteRecordStore:
    """Read-only view of the SQLite database used by ``LoginPipeline``."""

    def find_account_by_email(self, email: str) -> AccountRecord | None:
        return accounts_repo.find_account_by_email(email)

    def list_characters_by_account(self, account_id: int) -> list[CharacterRecord]:
        return players_repo.list_characters_by_account(account_id)
