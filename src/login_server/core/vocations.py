"""Vocation names and daily reward codes."""

from __future__ import annotations

DEFAULT_VOCATION_NAME = "None"

VOCATION_NAMES: dict[int, str] = {
    0: "None",
    1: "Sorcerer",
    2: "Druid",
    3: "Paladin",
    4: "Knight",
    # Promotions
    5: "Master Sorcerer",
    6: "Elder Druid",
    7: "Royal Paladin",
    8: "Elite Knight",
}


def get_vocation_name(vocation_id: int) -> str:
    """Return the display name for ``vocation_id``; unknown ids map to ``"None"``."""
    return VOCATION_NAMES.get(vocation_id, DEFAULT_VOCATION_NAME)


def get_daily_reward_state(pending_reward: bool) -> int:
    """1 when a daily reward is waiting, else 0."""
    return 1 if pending_reward else 0
