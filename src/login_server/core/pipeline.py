"""
Login pipeline.

Turns ``(email, password)`` into a ``LoginResult`` or raises a ``LoginError``.
The steps run strictly in order, each store call at most once:

    1. account lookup      -> any failure is InvalidCredentialsError
    2. password check      -> failure is InvalidCredentialsError
    3. character listing   -> failure is InternalLoginError
    4. per-character projection (vocation name, reward state, max last login)
    5. premium expiry
    6. assembly

Steps 1 and 2 report identically so a caller cannot tell an unknown email
from a wrong password.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from login_server.auth.passwords import PasswordVerifier
from login_server.core.errors import InternalLoginError, InvalidCredentialsError
from login_server.core.session_keys import SessionKeyFactory, opaque_session_key
from login_server.core.types import (
    CharacterSummary,
    LoginCredentials,
    LoginResult,
    RecordStore,
    SessionDescriptor,
    SessionStatus,
    WorldDescriptor,
)
from login_server.core.vocations import get_daily_reward_state, get_vocation_name
from login_server.db.types import CharacterRecord

logger = logging.getLogger(__name__)

_DUMMY_HASH = "0" * 40  # nosec B105
SECONDS_PER_DAY = 86400


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def premium_expiry(premium_days: int, now: datetime) -> int:
    """
    Return the premium expiry as a Unix timestamp.

    Expiry is the start of the current UTC day plus ``premium_days`` days, so
    it is always in the future when ``premium_days > 0``. Returns 0 otherwise.
    """
    if premium_days <= 0:
        return 0
    start_of_day = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    # Integer arithmetic: large counters must not overflow datetime.
    return int(start_of_day.timestamp()) + premium_days * SECONDS_PER_DAY


def summarize_character(record: CharacterRecord) -> CharacterSummary:
    """Project a stored character onto its character-list entry."""
    return CharacterSummary(
        name=record.name,
        level=record.level,
        vocation=get_vocation_name(record.vocation),
        look_type=record.look_type,
        look_head=record.look_head,
        look_body=record.look_body,
        look_legs=record.look_legs,
        look_feet=record.look_feet,
        look_addons=record.look_addons,
        daily_reward_state=get_daily_reward_state(record.pending_reward),
        is_male=record.sex == 1,
        tutorial=record.is_tutorial,
    )


class LoginPipeline:
    """
    Authenticate an account and assemble its login response.

    Args:
        store: Account/character record source.
        verifier: Password verifier for the configured hash scheme.
        world: The single world advertised to clients.
        session_key_factory: Builds the session key for a successful login.
        clock: Returns the current time; premium expiry is computed from it.
    """

    def __init__(
        self,
        store: RecordStore,
        verifier: PasswordVerifier,
        world: WorldDescriptor,
        *,
        session_key_factory: SessionKeyFactory = opaque_session_key,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.store = store
        self.verifier = verifier
        self.world = world
        self.session_key_factory = session_key_factory
        self.clock = clock

    def login(self, credentials: LoginCredentials) -> LoginResult:
        """
        Run the login pipeline.

        Raises:
            InvalidCredentialsError: Unknown email, wrong password, or the
                account lookup failed.
            InternalLoginError: The character listing or result assembly failed after
                authentication succeeded.
        """
        try:
            account = self.store.find_account_by_email(credentials.email)
        except Exception as exc:
            logger.warning("Account lookup failed: %s", exc)
            raise InvalidCredentialsError() from exc

        if account is None:
            # Still hash the password so unknown emails take as long as wrong passwords.
            self.verifier.verify(credentials.password, _DUMMY_HASH)
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        if not self.verifier.verify(credentials.password, account.password_hash):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()

        try:
            records = self.store.list_characters_by_account(account.id)
        except Exception as exc:
            logger.error("Character listing failed for account %s: %s", account.id, exc)
            raise InternalLoginError() from exc

        try:
            last_login = 0
            characters: list[CharacterSummary] = []
            for record in records:
                if record.last_login > last_login:
                    last_login = record.last_login
                characters.append(summarize_character(record))

            session = SessionDescriptor(
                session_key=self.session_key_factory(credentials),
                status=SessionStatus.ACTIVE,
                last_login=last_login,
                premium_until=premium_expiry(account.premium_days, self.clock()),
            )
        except Exception as exc:
            logger.exception("Failed to assemble login result for account %s", account.id)
            raise InternalLoginError() from exc

        logger.info("Account %s logged in with %d character(s)", account.id, len(characters))
        return LoginResult(session=session, worlds=(self.world,), characters=characters)


def create_login_pipeline(store: RecordStore | None = None) -> LoginPipeline:
    """Build a pipeline from the current configuration.

    Args:
        store: Record store to use; defaults to the SQLite store.
    """
    from login_server.auth.passwords import get_verifier
    from login_server.config import config
    from login_server.core.session_keys import get_session_key_factory
    from login_server.db.store import SqliteRecordStore

    return LoginPipeline(
        store if store is not None else SqliteRecordStore(),
        get_verifier(config.security.password_scheme),
        WorldDescriptor.from_settings(config.world),
        session_key_factory=get_session_key_factory(config.security.session_key_scheme),
    )
