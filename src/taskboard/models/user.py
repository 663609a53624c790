"""
User model for the Taskboard backend
Credential records: username plus a one-way password hash
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field as PydanticField, field_validator
from sqlmodel import Field, SQLModel

from .task import as_utc, new_id, utcnow


USERNAME_MAX_LENGTH = 50
PASSWORD_MAX_LENGTH = 128


class User(SQLModel, table=True):
    """User model for database table"""
    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    username: str = Field(max_length=USERNAME_MAX_LENGTH, unique=True, index=True, nullable=False)
    hashed_password: str = Field(nullable=False)
    created_at: datetime = Field(default_factory=utcnow)


class Credentials(BaseModel):
    """Request body for registration and login"""
    username: str
    password: str = PydanticField(min_length=1, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username cannot be empty")
        if len(v) > USERNAME_MAX_LENGTH:
            raise ValueError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
        return v


class UserPublic(BaseModel):
    """Public representation of user (no password material)"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    username: str
    created_at: datetime = PydanticField(alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


__all__ = [
    "USERNAME_MAX_LENGTH",
    "User",
    "Credentials",
    "UserPublic",
]
