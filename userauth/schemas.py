from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_serializer


class UserPayload(BaseModel):
    """
    Body accepted by every user endpoint.

    Fields are plain strings defaulting to "" so that presence rules are
    enforced by the validator with field-specific messages, not by pydantic.
    """
    email: str = ""
    fname: str = ""
    lname: str = ""
    password: str = ""
    profile_image: str = ""


class UserResponse(BaseModel):
    # Password hash is never serialized
    id: int
    email: str
    fname: str
    lname: str
    profile_image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", "deleted_at")
    def serialize_timestamps(self, value: Optional[datetime], _info):
        return value.isoformat() if value else None


class StatusResponse(BaseModel):
    status: str
    message: str


class UserEnvelope(StatusResponse):
    user: UserResponse


class TokenEnvelope(StatusResponse):
    token: str


class UserListEnvelope(StatusResponse):
    users: List[UserResponse]


@dataclass(frozen=True)
class AuthContext:
    """Identity verified by the access gate, passed explicitly to handlers"""
    user_id: int
