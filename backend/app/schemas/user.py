"""User Schemas — Pydantic response models for the /user endpoints.

Invariants:
    - UserResponse is built from ORM instances (from_attributes)
    - birthday serializes as YYYY-MM-DD, timestamps as ISO 8601 in UTC (+00:00)
    - Naive timestamps (SQLite drops the offset) are read as UTC
    - Field names are snake_case on the wire (created_at, updated_at)

Design Decisions:
    - Request bodies are NOT Pydantic models: the rule list in core/user_rules.py
      collects every violation with its own message, which the 400 body exposes
"""

from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, field_serializer


class UserResponse(BaseModel):
    """Public-facing user record."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    age: int
    sex: str
    birthday: date
    phone: str
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()


def serialize_user(user: object) -> dict:
    """ORM User → JSON-ready dict."""
    return UserResponse.model_validate(user).model_dump(mode="json")
