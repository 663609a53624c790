"""
Task API routes for the Taskboard backend
CRUD plus completion, every call scoped to the authenticated owner
"""
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session

from ...database.database import get_session
from ...models.task import TaskPublic, TaskTitle
from ...services.task_service import TaskService
from ..deps import get_current_user_id


router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskPublic])
def list_tasks(
    status_filter: Optional[Literal["pending", "completed"]] = Query(None, alias="status"),
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    """
    Get all tasks of the authenticated user, oldest first.

    Args:
        status_filter: Optional "pending" or "completed" filter
    """
    return TaskService.get_tasks_by_user(session, user_id, status=status_filter)


@router.post("", response_model=TaskPublic, status_code=status.HTTP_201_CREATED)
def create_task(
    request: TaskTitle,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    """Create a task owned by the caller. New tasks start out not completed."""
    task = TaskService.create_task(session, user_id, request.title)
    return task


@router.get("/{task_id}", response_model=TaskPublic)
def get_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    task = TaskService.get_task_by_id(session, task_id, user_id)
    return task


@router.put("/{task_id}", response_model=TaskPublic)
def update_task(
    task_id: str,
    request: TaskTitle,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    """
    Rename a task.

    Raises:
        400: Title empty after trimming
        404: Task not found or owned by someone else
    """
    task = TaskService.update_task_title(session, task_id, user_id, request.title)
    return task


@router.patch("/{task_id}", response_model=TaskPublic)
def complete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    """Mark a task as completed (idempotent). There is no way back to not completed."""
    task = TaskService.mark_completed(session, task_id, user_id)
    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session)
):
    """Permanently delete a task. Deleting it again yields 404."""
    TaskService.delete_task(session, task_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
