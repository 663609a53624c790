"""
Models module for the Taskboard backend
Contains all database models and request/response schemas
"""
from sqlmodel import SQLModel
from .user import User, Credentials, UserPublic
from .task import Task, TaskTitle, TaskPublic
from .token import TokenResponse

__all__ = [
    "SQLModel",
    "User",
    "Credentials",
    "UserPublic",
    "Task",
    "TaskTitle",
    "TaskPublic",
    "TokenResponse",
]
