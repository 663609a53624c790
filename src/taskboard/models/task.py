"""
Task model for the Taskboard backend
Defines the task entity, its owner reference and the request/response schemas
"""
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field as PydanticField, field_validator
from sqlmodel import Field, SQLModel


TITLE_MAX_LENGTH = 200


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid4().hex


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; they were written as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def normalize_title(title: str) -> str:
    """Trim a title and check it is usable; raises ValueError otherwise."""
    title = title.strip()
    if not title:
        raise ValueError("Title cannot be empty")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title exceeds maximum length of {TITLE_MAX_LENGTH} characters")
    return title


class Task(SQLModel, table=True):
    """Task model for database table"""
    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    completed: bool = Field(default=False)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True)  # owner, never reassigned
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class TaskTitle(BaseModel):
    """Request body for creating a task or renaming one"""
    title: str

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return normalize_title(v)


class TaskPublic(BaseModel):
    """Public representation of task (owner reference left out)"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    completed: bool
    created_at: datetime = PydanticField(alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


__all__ = [
    "TITLE_MAX_LENGTH",
    "Task",
    "TaskTitle",
    "TaskPublic",
    "normalize_title",
    "utcnow",
    "as_utc",
    "new_id",
]
