"""Online roster domain model."""

from pydantic import BaseModel, ConfigDict


class RosterUpdate(BaseModel):
    """Snapshot of the online roster at a given registry version.

    Versions increase monotonically with every registry mutation, so a
    higher version always describes a newer roster.
    """

    model_config = ConfigDict(frozen=True)

    version: int
    online_users: tuple[str, ...]

    @property
    def online_count(self) -> int:
        """Number of distinct online identities."""
        return len(self.online_users)

    def to_payload(self) -> list[str]:
        """Serialize to the `getOnlineUsers` event payload."""
        return list(self.online_users)
