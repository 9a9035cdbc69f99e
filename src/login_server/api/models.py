"""
Pydantic models for the game client's login protocol.

The client speaks a fixed JSON contract with lowercase, unseparated keys
(``sessionkey``, ``premiumuntil``...). Field names here are the wire names so
the models read as the contract itself.

Models are organized into two categories:
1. Request models: Data sent FROM the client TO the server
2. Response models: Data sent FROM the server TO the client
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from login_server.core.errors import LoginError
from login_server.core.types import (
    CharacterSummary,
    LoginResult,
    SessionDescriptor,
    WorldDescriptor,
)
from login_server.services.community import BoostedCreature, CacheInfo, EventSchedule

# ============================================================================
# REQUEST MODELS (Client → Server)
# ============================================================================


class RequestType(str, Enum):
    """Request kinds accepted on ``/login.php``."""

    LOGIN = "login"
    BOOSTED_CREATURE = "boostedcreature"
    CACHE_INFO = "cacheinfo"
    EVENT_SCHEDULE = "eventschedule"


class ClientRequest(BaseModel):
    """
    Body of every ``/login.php`` request.

    ``type`` is kept as a plain string so an unknown kind can be answered with
    "Invalid request." instead of a validation failure. Absent and ``null``
    fields decode to their empty values; only a body of the wrong shape is
    ill-formed.

    Attributes:
        type: Request kind, see ``RequestType``.
        email: Account email (login only).
        password: Plain text password (login only).
        stayloggedin: Client checkbox; accepted and ignored.
    """

    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    email: str | None = None
    password: str | None = None
    stayloggedin: bool | None = False


# ============================================================================
# RESPONSE MODELS (Server → Client)
# ============================================================================


class RequestErrorResponse(BaseModel):
    """Failure body for any request kind."""

    errorCode: int
    errorMessage: str

    @classmethod
    def from_error(cls, error: LoginError) -> RequestErrorResponse:
        return cls(errorCode=error.error_code, errorMessage=error.message)


class SessionModel(BaseModel):
    sessionkey: str
    status: str
    lastlogintime: int
    premiumuntil: int
    ispremium: bool
    isreturner: bool = False
    returnernotification: bool = False
    showrewardnews: bool = False
    fpstracking: bool = False
    optiontracking: bool = False
    emailcoderequest: bool = False
    tournamentticketpurchasestate: int = 0

    @classmethod
    def from_descriptor(cls, session: SessionDescriptor) -> SessionModel:
        return cls(
            sessionkey=session.session_key,
            status=session.status.value,
            lastlogintime=session.last_login,
            premiumuntil=session.premium_until,
            ispremium=session.is_premium,
        )


class WorldModel(BaseModel):
    id: int
    name: str
    externaladdress: str
    externalport: int
    externaladdressprotected: str
    externalportprotected: int
    externaladdressunprotected: str
    externalportunprotected: int
    location: str
    pvptype: str
    anticheatprotection: bool = False
    restrictedstore: bool = False
    istournamentworld: bool = False
    previewstate: int = 0
    currenttournamentphase: int = 0

    @classmethod
    def from_descriptor(cls, world: WorldDescriptor) -> WorldModel:
        return cls(
            id=world.id,
            name=world.name,
            externaladdress=world.external_address,
            externalport=world.external_port,
            externaladdressprotected=world.external_address_protected,
            externalportprotected=world.external_port_protected,
            externaladdressunprotected=world.external_address_unprotected,
            externalportunprotected=world.external_port_unprotected,
            location=world.location,
            pvptype=world.pvp_type,
            anticheatprotection=world.anticheat_protection,
            restrictedstore=world.restricted_store,
        )


class CharacterModel(BaseModel):
    worldid: int
    name: str
    level: int
    vocation: str
    outfitid: int
    headcolor: int
    torsocolor: int
    legscolor: int
    detailcolor: int
    addonsflags: int
    dailyrewardstate: int
    ismale: bool
    tutorial: bool
    ishidden: bool = False
    ismaincharacter: bool = False
    istournamentparticipant: bool = False
    remainingdailytournamentplaytime: int = 0

    @classmethod
    def from_summary(cls, character: CharacterSummary) -> CharacterModel:
        return cls(
            worldid=character.world_id,
            name=character.name,
            level=character.level,
            vocation=character.vocation,
            outfitid=character.look_type,
            headcolor=character.look_head,
            torsocolor=character.look_body,
            legscolor=character.look_legs,
            detailcolor=character.look_feet,
            addonsflags=character.look_addons,
            dailyrewardstate=character.daily_reward_state,
            ismale=character.is_male,
            tutorial=character.tutorial,
            ishidden=character.is_hidden,
            ismaincharacter=character.is_main_character,
        )


class PlayDataModel(BaseModel):
    worlds: list[WorldModel]
    characters: list[CharacterModel]


class LoginResponse(BaseModel):
    """Successful login: session block plus worlds and characters."""

    session: SessionModel
    playdata: PlayDataModel

    @classmethod
    def from_result(cls, result: LoginResult) -> LoginResponse:
        return cls(
            session=SessionModel.from_descriptor(result.session),
            playdata=PlayDataModel(
                worlds=[WorldModel.from_descriptor(world) for world in result.worlds],
                characters=[CharacterModel.from_summary(c) for c in result.characters],
            ),
        )


class BoostedCreatureResponse(BaseModel):
    boostedcreature: bool
    raceid: int

    @classmethod
    def from_boosted(cls, boosted: BoostedCreature) -> BoostedCreatureResponse:
        return cls(boostedcreature=boosted.enabled, raceid=boosted.race_id)


class CacheInfoResponse(BaseModel):
    playersonline: int
    twitchstreams: int
    twitchviewer: int
    gamingyoutubestreams: int
    gamingyoutubeviewer: int

    @classmethod
    def from_cache_info(cls, info: CacheInfo) -> CacheInfoResponse:
        return cls(
            playersonline=info.players_online,
            twitchstreams=info.twitch_streams,
            twitchviewer=info.twitch_viewers,
            gamingyoutubestreams=info.youtube_streams,
            gamingyoutubeviewer=info.youtube_viewers,
        )


class EventInfoModel(BaseModel):
    name: str
    startdate: int
    enddate: int
    specialevent: int
    displaypriority: int
    isseasonal: bool
    description: str
    colorlight: str
    colordark: str


class EventScheduleResponse(BaseModel):
    eventlist: list[EventInfoModel]
    lastupdatetimestamp: int

    @classmethod
    def from_schedule(cls, schedule: EventSchedule) -> EventScheduleResponse:
        return cls(
            eventlist=[
                EventInfoModel(
                    name=event.name,
                    startdate=event.start_date,
                    enddate=event.end_date,
                    specialevent=event.special_event,
                    displaypriority=event.display_priority,
                    isseasonal=event.is_seasonal,
                    description=event.description,
                    colorlight=event.color_light,
                    colordark=event.color_dark,
                )
                for event in schedule.events
            ],
            lastupdatetimestamp=schedule.last_update,
        )
