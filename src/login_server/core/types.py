"""
Value types produced by the login pipeline.

These are transport-neutral; ``login_server.api.models`` maps them onto the
JSON field names the game client expects.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from login_server.db.types import AccountRecord, CharacterRecord

if TYPE_CHECKING:
    from login_server.config import WorldSettings


class SessionStatus(str, Enum):
    """Account session status understood by the client."""

    ACTIVE = "active"
    FROZEN = "frozen"
    SUSPENDED = "suspended"


class RecordStore(Protocol):
    """Read access to accounts and their characters."""

    def find_account_by_email(self, email: str) -> AccountRecord | None: ...

    def list_characters_by_account(self, account_id: int) -> list[CharacterRecord]: ...


@dataclass(frozen=True, slots=True)
class LoginCredentials:
    """Typed payload of a ``login`` request."""

    email: str
    password: str
    stay_logged_in: bool = False


@dataclass(frozen=True, slots=True)
class SessionDescriptor:
    """
    Session block of a successful login.

    Attributes:
        session_key: Key the client presents to the game server.
        status: Always ``ACTIVE`` for a successful login.
        last_login: Most recent character login, 0 when there are none.
        premium_until: Premium expiry Unix timestamp, 0 when not premium.
    """

    session_key: str
    status: SessionStatus
    last_login: int
    premium_until: int

    @property
    def is_premium(self) -> bool:
        return self.premium_until > 0


@dataclass(frozen=True, slots=True)
class WorldDescriptor:
    """Game world advertised to the client. Built once from configuration."""

    name: str
    external_address: str
    external_port: int
    location: str
    pvp_type: str
    id: int = 0
    external_address_protected: str = ""
    external_port_protected: int = 0
    external_address_unprotected: str = ""
    external_port_unprotected: int = 0
    anticheat_protection: bool = False
    restricted_store: bool = False

    @classmethod
    def from_settings(cls, settings: WorldSettings) -> WorldDescriptor:
        # The client picks one of three endpoints; all point at the same listener.
        return cls(
            name=settings.name,
            external_address=settings.host,
            external_port=settings.port,
            external_address_protected=settings.host,
            external_port_protected=settings.port,
            external_address_unprotected=settings.host,
            external_port_unprotected=settings.port,
            location=settings.location,
            pvp_type=settings.pvp_type,
            anticheat_protection=settings.anticheat_protection,
            restricted_store=settings.restricted_store,
        )


@dataclass(frozen=True, slots=True)
class CharacterSummary:
    """A character as listed on the client's character selection screen."""

    name: str
    level: int
    vocation: str
    look_type: int
    look_head: int
    look_body: int
    look_legs: int
    look_feet: int
    look_addons: int
    daily_reward_state: int
    is_male: bool
    tutorial: bool
    world_id: int = 0
    is_hidden: bool = False
    is_main_character: bool = False


@dataclass(frozen=True, slots=True)
class LoginResult:
    """Everything the client needs after a successful login."""

    session: SessionDescriptor
    worlds: tuple[WorldDescriptor, ...]
    characters: list[CharacterSummary] = field(default_factory=list)
