"""Routes for signup, login, logout and profile updates."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.responses import JSONResponse
from starlette.routing import Route

from .responses import handle_errors, read_json_object
from .session_cookie import authenticate_request, clear_session_cookie, set_session_cookie

if TYPE_CHECKING:
    from starlette.requests import Request

    from realtime_chat.adapters.config import AppConfig
    from realtime_chat.domain.ports import AuthService

logger = logging.getLogger(__name__)


def _string_field(body: dict, name: str) -> str:
    value = body.get(name)
    return value if isinstance(value, str) else ""


def create_auth_routes(auth_service: AuthService, config: AppConfig) -> list[Route]:
    """Create the routes mounted under ``/api/auth``."""

    async def signup(request: Request) -> JSONResponse:
        body = await read_json_object(request)
        profile = await auth_service.signup(
            full_name=_string_field(body, "fullName"),
            email=_string_field(body, "email"),
            password=_string_field(body, "password"),
        )
        response = JSONResponse(profile.to_payload(), status_code=201)
        set_session_cookie(response, auth_service.issue_token(profile.id), config)
        return response

    async def login(request: Request) -> JSONResponse:
        body = await read_json_object(request)
        profile = await auth_service.login(
            email=_string_field(body, "email"),
            password=_string_field(body, "password"),
        )
        response = JSONResponse(profile.to_payload())
        set_session_cookie(response, auth_service.issue_token(profile.id), config)
        return response

    async def logout(_request: Request) -> JSONResponse:
        response = JSONResponse({"message": "Logged out successfully"})
        clear_session_cookie(response, config)
        return response

    async def update_profile(request: Request) -> JSONResponse:
        user = await authenticate_request(request, auth_service, config.cookie_name)
        body = await read_json_object(request)
        profile_pic = body.get("profilePic")
        updated = await auth_service.update_profile_picture(
            user.id, profile_pic if isinstance(profile_pic, str) else None
        )
        return JSONResponse(updated.to_payload())

    async def check(request: Request) -> JSONResponse:
        user = await authenticate_request(request, auth_service, config.cookie_name)
        return JSONResponse(user.to_payload())

    return [
        Route("/signup", handle_errors(signup), methods=["POST"]),
        Route("/login", handle_errors(login), methods=["POST"]),
        Route("/logout", handle_errors(logout), methods=["POST"]),
        Route("/update-profile", handle_errors(update_profile), methods=["PUT"]),
        Route("/check", handle_errors(check), methods=["GET"]),
    ]
