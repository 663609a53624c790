"""
Client side of the Taskboard app
HTTP wrapper plus the task list view state that drives the UI
"""
from .api_client import ApiError, ClientSession, TaskApiClient, TaskItem
from .task_view import TaskBoardView, partition_tasks

__all__ = [
    "ApiError",
    "ClientSession",
    "TaskApiClient",
    "TaskItem",
    "TaskBoardView",
    "partition_tasks",
]
