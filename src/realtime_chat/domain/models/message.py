"""Message domain models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class MessageDraft(BaseModel):
    """A message that has been validated but not yet persisted."""

    model_config = ConfigDict(frozen=True)

    sender_id: str
    receiver_id: str
    text: str | None = None
    image: str | None = None

    @model_validator(mode="after")
    def require_content(self) -> "MessageDraft":
        """Require at least one of text or image."""
        if not self.text and not self.image:
            raise ValueError("a message needs text or an image")
        return self


class Message(BaseModel):
    """A persisted chat message between two users.

    Created once by the message log and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(alias="_id")
    sender_id: str
    receiver_id: str
    text: str | None = None
    image: str | None = None
    created_at: datetime

    @model_validator(mode="after")
    def require_content(self) -> "Message":
        """Require at least one of text or image."""
        if not self.text and not self.image:
            raise ValueError("a message needs text or an image")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON shape clients consume."""
        return self.model_dump(mode="json", by_alias=True)
