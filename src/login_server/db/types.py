"""Row snapshots returned by the record store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AccountRecord:
    """
    One row of the ``accounts`` table.

    Attributes:
        id: Account identifier.
        email: Unique lookup key.
        password_hash: Hex digest of the account password.
        premium_days: Remaining premium days (non-negative).
    """

    id: int
    email: str
    password_hash: str
    premium_days: int = 0


@dataclass(frozen=True, slots=True)
class CharacterRecord:
    """
    One row of the ``players`` table, restricted to what the login list needs.

    Attributes:
        name: Character display name.
        level: Experience level.
        sex: Sex flag, 1 for male.
        vocation: Vocation id (0-8 in the base game).
        look_type: Outfit id.
        look_head: Head color.
        look_body: Torso color.
        look_legs: Legs color.
        look_feet: Detail color.
        look_addons: Outfit addon flags.
        last_login: Unix timestamp of the last login, 0 when never logged in.
        pending_reward: True when a daily reward is waiting to be claimed.
        is_tutorial: True while the character is on the tutorial island.
    """

    name: str
    level: int = 1
    sex: int = 0
    vocation: int = 0
    look_type: int = 128
    look_head: int = 0
    look_body: int = 0
    look_legs: int = 0
    look_feet: int = 0
    look_addons: int = 0
    last_login: int = 0
    pending_reward: bool = False
    is_tutorial: bool = False
