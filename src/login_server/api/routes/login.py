"""
The client's single endpoint, ``POST /login.php``.

Every request kind shares the path and is selected by the ``type`` field.
The client expects HTTP 200 for everything, failures included, with an
``{errorCode, errorMessage}`` body.
"""

import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool

from login_server.api.models import (
    BoostedCreatureResponse,
    CacheInfoResponse,
    ClientRequest,
    EventScheduleResponse,
    LoginResponse,
    RequestErrorResponse,
    RequestType,
)
from login_server.core.errors import InternalLoginError, InvalidCredentialsError, LoginError
from login_server.core.pipeline import LoginPipeline
from login_server.core.types import LoginCredentials
from login_server.services import community

logger = logging.getLogger(__name__)

ILL_FORMED_REQUEST = RequestErrorResponse(errorCode=1, errorMessage="Ill-formed request.")
INVALID_REQUEST = RequestErrorResponse(errorCode=1, errorMessage="Invalid request.")


def parse_request_type(value: str | None) -> RequestType | None:
    """Map the ``type`` field onto ``RequestType``; ``None`` when unknown or absent."""
    if value is None:
        return None
    try:
        return RequestType(value)
    except ValueError:
        return None


def handle_login(pipeline: LoginPipeline, request: ClientRequest) -> BaseModel:
    """Run the login pipeline and shape its outcome for the client."""
    if not request.email or not request.password:
        return RequestErrorResponse.from_error(InvalidCredentialsError())

    credentials = LoginCredentials(
        email=request.email,
        password=request.password,
        stay_logged_in=bool(request.stayloggedin),
    )
    try:
        result = pipeline.login(credentials)
    except LoginError as error:
        return RequestErrorResponse.from_error(error)

    try:
        return LoginResponse.from_result(result)
    except ValueError:
        logger.exception("Failed to build login response")
        return RequestErrorResponse.from_error(InternalLoginError())


def dispatch(pipeline: LoginPipeline, request: ClientRequest) -> BaseModel:
    """Route a parsed request to its handler."""
    request_type = parse_request_type(request.type)
    match request_type:
        case RequestType.LOGIN:
            return handle_login(pipeline, request)
        case RequestType.BOOSTED_CREATURE:
            return BoostedCreatureResponse.from_boosted(community.get_boosted_creature())
        case RequestType.CACHE_INFO:
            return CacheInfoResponse.from_cache_info(community.get_cache_info())
        case RequestType.EVENT_SCHEDULE:
            return EventScheduleResponse.from_schedule(community.build_event_schedule())
        case None:
            logger.info("Unknown request type %r", request.type)
            return INVALID_REQUEST


def router(pipeline: LoginPipeline) -> APIRouter:
    """Build the login router around a configured pipeline."""
    api = APIRouter()

    @api.post("/login.php")
    async def login_php(http_request: Request):
        """Decode the client request and dispatch it by ``type``."""
        body = await http_request.body()
        try:
            request = ClientRequest.model_validate_json(body)
        except ValidationError as exc:
            logger.info("Failed to decode client request (%d errors)", exc.error_count())
            return ILL_FORMED_REQUEST

        # Store access is blocking sqlite; keep it off the event loop.
        return await run_in_threadpool(dispatch, pipeline, request)

    return api
