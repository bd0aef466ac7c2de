"""Adapters layer - external system integrations."""

from realtime_chat.adapters.config import AppConfig
from realtime_chat.adapters.realtime import PresenceRegistry, RealtimeGateway

__all__ = ["AppConfig", "PresenceRegistry", "RealtimeGateway"]
