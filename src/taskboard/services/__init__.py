"""
Services module for the Taskboard backend
Contains business logic layer for the application
"""
from .task_service import TaskService
from .token_service import TokenService
from .user_service import UserService

__all__ = [
    "TaskService",
    "TokenService",
    "UserService",
]
