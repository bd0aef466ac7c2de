"""Routes for contacts, conversation history and sending messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import JSONResponse
from starlette.routing import Route

from .responses import handle_errors, read_json_object
from .session_cookie import authenticate_request

if TYPE_CHECKING:
    from starlette.requests import Request

    from realtime_chat.domain.ports import AuthService, ChatService


def _optional_string(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def create_message_routes(
    chat_service: ChatService, auth_service: AuthService, cookie_name: str
) -> list[Route]:
    """Create the routes mounted under ``/api/messages``."""

    async def list_users(request: Request) -> JSONResponse:
        user = await authenticate_request(request, auth_service, cookie_name)
        contacts = await chat_service.list_contacts(user.id)
        return JSONResponse([contact.to_payload() for contact in contacts])

    async def get_messages(request: Request) -> JSONResponse:
        user = await authenticate_request(request, auth_service, cookie_name)
        peer_id = request.path_params["peer_id"]
        messages = await chat_service.get_history(user.id, peer_id)
        return JSONResponse([message.to_payload() for message in messages])

    async def send_message(request: Request) -> JSONResponse:
        user = await authenticate_request(request, auth_service, cookie_name)
        body = await read_json_object(request)
        message = await chat_service.send_message(
            sender_id=user.id,
            receiver_id=request.path_params["peer_id"],
            text=_optional_string(body.get("text")),
            image=_optional_string(body.get("image")),
        )
        return JSONResponse(message.to_payload(), status_code=201)

    return [
        Route("/users", handle_errors(list_users), methods=["GET"]),
        Route("/send/{peer_id}", handle_errors(send_message), methods=["POST"]),
        Route("/{peer_id}", handle_errors(get_messages), methods=["GET"]),
    ]
