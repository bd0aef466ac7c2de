"""Web adapters: HTTP routes and the realtime socket endpoint."""

from realtime_chat.adapters.web.starlette_app import ChatWebAdapter

__all__ = ["ChatWebAdapter"]
