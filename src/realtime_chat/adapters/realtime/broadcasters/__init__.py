"""Broadcasters for the realtime gateway."""

from realtime_chat.adapters.realtime.broadcasters.roster_broadcaster import (
    ONLINE_USERS_EVENT,
    RosterBroadcaster,
)

__all__ = ["ONLINE_USERS_EVENT", "RosterBroadcaster"]
