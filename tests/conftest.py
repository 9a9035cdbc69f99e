"""
Shared pytest fixtures for the login server test suite.

- Temporary SQLite databases wired through ``use_test_database``
- Seeded accounts and characters
- An in-memory record store for pipeline tests
- FastAPI TestClient instances
"""

import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from login_server.api.server import create_app
from login_server.auth.passwords import HashVerifier, hash_password
from login_server.config import use_test_database
from login_server.core.pipeline import LoginPipeline, create_login_pipeline
from login_server.core.session_keys import legacy_session_key
from login_server.core.types import WorldDescriptor
from login_server.db import accounts_repo, players_repo, schema
from login_server.db.types import AccountRecord, CharacterRecord
from tests.constants import FIXED_NOW, TEST_EMAIL, TEST_PASSWORD

# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """
    Point the config at a fresh temporary database file for one test.

    Yields:
        Path to temporary database file
    """
    temp_dir = tempfile.mkdtemp()
    temp_db = Path(temp_dir) / "test_login.db"

    with use_test_database(temp_db):
        yield temp_db

    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(scope="function")
def test_db(temp_db_path: Path) -> Generator[None, None, None]:
    """Initialize the schema in the temporary database, with no rows."""
    schema.init_database()
    yield


@pytest.fixture(scope="function")
def db_with_account(test_db) -> int:
    """
    Seed the scenario account: TEST_EMAIL / TEST_PASSWORD, 30 premium days,
    two characters with last login 100 and 200.

    Returns:
        The account id.
    """
    account_id = accounts_repo.create_account(
        TEST_EMAIL, hash_password(TEST_PASSWORD), premium_days=30
    )
    assert account_id is not None
    players_repo.create_character(
        account_id,
        CharacterRecord(name="Alpha", level=8, sex=1, vocation=1, last_login=100),
    )
    players_repo.create_character(
        account_id,
        CharacterRecord(name="Bravo", level=20, vocation=8, last_login=200, pending_reward=True),
    )
    return account_id


# ============================================================================
# PIPELINE FIXTURES
# ============================================================================


class FakeRecordStore:
    """
    In-memory record store with call counting.

    Set ``account_error`` / ``characters_error`` to an exception instance to
    make the corresponding lookup fail.
    """

    def __init__(self) -> None:
        self.accounts: dict[str, AccountRecord] = {}
        self.characters: dict[int, list[CharacterRecord]] = {}
        self.account_error: Exception | None = None
        self.characters_error: Exception | None = None
        self.calls: list[str] = []

    def add_account(
        self,
        email: str,
        password: str,
        *,
        premium_days: int = 0,
        characters: list[CharacterRecord] | None = None,
    ) -> AccountRecord:
        account = AccountRecord(
            id=len(self.accounts) + 1,
            email=email,
            password_hash=hash_password(password),
            premium_days=premium_days,
        )
        self.accounts[email] = account
        self.characters[account.id] = list(characters or [])
        return account

    def find_account_by_email(self, email: str) -> AccountRecord | None:
        self.calls.append("find_account_by_email")
        if self.account_error is not None:
            raise self.account_error
        return self.accounts.get(email)

    def list_characters_by_account(self, account_id: int) -> list[CharacterRecord]:
        self.calls.append("list_characters_by_account")
        if self.characters_error is not None:
            raise self.characters_error
        return list(self.characters.get(account_id, []))


@pytest.fixture
def fake_store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def world() -> WorldDescriptor:
    return WorldDescriptor(
        name="Canary",
        external_address="localhost",
        external_port=7172,
        location="BRA",
        pvp_type="pvp",
    )


@pytest.fixture
def pipeline(fake_store: FakeRecordStore, world: WorldDescriptor) -> LoginPipeline:
    """Pipeline over the fake store with a fixed clock and legacy session keys."""
    return LoginPipeline(
        fake_store,
        HashVerifier("sha1"),
        world,
        session_key_factory=legacy_session_key,
        clock=lambda: FIXED_NOW,
    )


# ============================================================================
# API FIXTURES
# ============================================================================


@pytest.fixture(scope="function")
def test_client(test_db) -> TestClient:
    """
    TestClient over an app backed by the temporary SQLite database.

    Example:
        def test_login(test_client):
            response = test_client.post("/login.php", json={"type": "cacheinfo"})
            assert response.status_code == 200
    """
    app = create_app(create_login_pipeline())
    return TestClient(app)
