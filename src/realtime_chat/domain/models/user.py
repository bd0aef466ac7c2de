"""User domain models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserProfile(BaseModel):
    """Public view of a user, safe to send to other clients."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(alias="_id")
    email: str
    full_name: str
    profile_pic: str = ""
    created_at: datetime

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON shape clients consume."""
        return self.model_dump(mode="json", by_alias=True)


class UserRecord(BaseModel):
    """Stored user, including the password hash."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    full_name: str
    password_hash: str
    profile_pic: str = ""
    created_at: datetime

    def to_profile(self) -> UserProfile:
        """Drop credentials and return the public profile."""
        return UserProfile(
            id=self.id,
            email=self.email,
            full_name=self.full_name,
            profile_pic=self.profile_pic,
            created_at=self.created_at,
        )
