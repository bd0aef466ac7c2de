"""Client information domain model."""

from pydantic import BaseModel, ConfigDict


class ClientInfo(BaseModel):
    """Client information extracted from connection headers."""

    model_config = ConfigDict(frozen=True)

    ip: str
    user_agent: str
