"""Contracts (protocols) for the realtime core."""

from realtime_chat.domain.contracts.connection_handle import ConnectionHandle
from realtime_chat.domain.contracts.message_deliverer import MessageDelivererProtocol
from realtime_chat.domain.contracts.presence_registry import PresenceRegistryProtocol
from realtime_chat.domain.contracts.roster_broadcaster import RosterBroadcasterProtocol

__all__ = [
    "ConnectionHandle",
    "MessageDelivererProtocol",
    "PresenceRegistryProtocol",
    "RosterBroadcasterProtocol",
]
