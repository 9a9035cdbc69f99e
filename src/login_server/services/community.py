"""
Community data for the client's start screen.

Covers the three non-login request kinds: the boosted creature, the
"cache info" counters and the event calendar. All of it is best effort: a
store failure degrades to defaults and is logged, it never fails the request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from login_server.db import community_repo
from login_server.db.errors import DatabaseError

logger = logging.getLogger(__name__)

DEFAULT_BOOSTED_RACE_ID = 35

# Streaming counters the client displays; no data source exists for them.
TWITCH_STREAMS = 1
TWITCH_VIEWERS = 2
YOUTUBE_STREAMS = 3
YOUTUBE_VIEWERS = 4


@dataclass(frozen=True, slots=True)
class BoostedCreature:
    enabled: bool
    race_id: int


@dataclass(frozen=True, slots=True)
class CacheInfo:
    players_online: int
    twitch_streams: int = TWITCH_STREAMS
    twitch_viewers: int = TWITCH_VIEWERS
    youtube_streams: int = YOUTUBE_STREAMS
    youtube_viewers: int = YOUTUBE_VIEWERS


@dataclass(frozen=True, slots=True)
class ScheduledEvent:
    """One entry of the event calendar. Dates are Unix timestamps."""

    name: str
    start_date: int
    end_date: int
    display_priority: int
    is_seasonal: bool
    description: str
    color_light: str
    color_dark: str
    special_event: int = 0


@dataclass(frozen=True, slots=True)
class EventSchedule:
    events: list[ScheduledEvent]
    last_update: int


@dataclass(frozen=True, slots=True)
class _EventTemplate:
    name: str
    start_offset_days: int
    end_offset_days: int
    display_priority: int
    is_seasonal: bool
    color_light: str
    color_dark: str


# The client only shows the day, not the time, an event starts or ends.
EVENT_TEMPLATES: tuple[_EventTemplate, ...] = (
    _EventTemplate("Test Event 1", 0, 1, 1, False, "#2D7400", "#235C00"),
    _EventTemplate("Test Event 2", 2, 4, 0, False, "#2D74FF", "#235CFF"),
    _EventTemplate("Test Event 3", 3, 5, 0, True, "#2D74FF", "#235CFF"),
    _EventTemplate("Test Event 4", -15, 1, 0, False, "#FF7423", "#FF5C23"),
)


def get_boosted_creature() -> BoostedCreature:
    """Return the boosted creature, disabled with the default race on failure."""
    try:
        race_id = community_repo.get_boosted_creature_race_id()
    except DatabaseError as exc:
        logger.warning("Failed to load boosted creature: %s", exc)
        return BoostedCreature(enabled=False, race_id=DEFAULT_BOOSTED_RACE_ID)
    if race_id is None:
        return BoostedCreature(enabled=False, race_id=DEFAULT_BOOSTED_RACE_ID)
    return BoostedCreature(enabled=True, race_id=race_id)


def get_cache_info() -> CacheInfo:
    """Return the start-screen counters; online count is 0 on failure."""
    try:
        players_online = community_repo.count_players_online()
    except DatabaseError as exc:
        logger.warning("Failed to count online players: %s", exc)
        players_online = 0
    return CacheInfo(players_online=players_online)


def build_event_schedule(now: datetime | None = None) -> EventSchedule:
    """Lay the event templates out relative to the start of the current UTC day."""
    now = now or datetime.now(timezone.utc)
    today = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    events = [
        ScheduledEvent(
            name=template.name,
            start_date=int((today + timedelta(days=template.start_offset_days)).timestamp()),
            end_date=int((today + timedelta(days=template.end_offset_days)).timestamp()),
            display_priority=template.display_priority,
            is_seasonal=template.is_seasonal,
            description=f"{template.name} Description",
            color_light=template.color_light,
            color_dark=template.color_dark,
        )
        for template in EVENT_TEMPLATES
    ]
    return EventSchedule(events=events, last_update=int(now.timestamp()))
