"""
Task service module for the Taskboard backend
Handles business logic for task operations, always scoped to the owning user
"""
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, select

from ..models.task import Task, normalize_title, utcnow
from ..utils.errors import (
    StoreUnavailableError,
    TaskNotFoundException,
    ValidationError,
)
from ..utils.logging import log_error


TASK_STATUS_FILTERS = ("pending", "completed")


def _store_failure(
    db: Session,
    error: Exception,
    context: str,
    user_id: Optional[str]
) -> Optional[StoreUnavailableError]:
    """
    Log and roll back after a failed store call.

    Returns the error to raise instead when the store itself is unreachable,
    or None when the caller should re-raise the original exception.
    """
    log_error(error, context, user_id)
    db.rollback()
    if isinstance(error, (OperationalError, InterfaceError)):
        return StoreUnavailableError()
    return None


class TaskService:
    """Service class for task operations"""

    @staticmethod
    def create_task(db: Session, user_id: str, title: str) -> Task:
        """
        Create a new task owned by a user.

        Args:
            db: Database session
            user_id: Owner of the new task
            title: Task title; surrounding whitespace is trimmed

        Returns:
            Created Task object, not yet completed

        Raises:
            ValidationError: If the trimmed title is empty or too long
        """
        try:
            clean_title = normalize_title(title)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        try:
            now = utcnow()
            task = Task(
                title=clean_title,
                completed=False,
                user_id=user_id,
                created_at=now,
                updated_at=now,
            )

            db.add(task)
            db.commit()
            db.refresh(task)

            return task
        except Exception as e:
            unavailable = _store_failure(db, e, "TaskService.create_task", user_id)
            if unavailable is None:
                raise
            raise unavailable from e

    @staticmethod
    def get_tasks_by_user(
        db: Session,
        user_id: str,
        status: Optional[str] = None
    ) -> List[Task]:
        """
        Get all tasks for a specific user, oldest first.

        Args:
            db: Database session
            user_id: Owner to filter by
            status: Optional filter, "pending" or "completed"

        Returns:
            List of Task objects in creation order
        """
        if status is not None and status not in TASK_STATUS_FILTERS:
            raise ValidationError(f"Unknown status filter '{status}'")

        try:
            statement = select(Task).where(Task.user_id == user_id)

            if status == "pending":
                statement = statement.where(Task.completed == False)  # noqa: E712
            elif status == "completed":
                statement = statement.where(Task.completed == True)  # noqa: E712

            statement = statement.order_by(Task.created_at.asc(), Task.id.asc())

            tasks = db.exec(statement).all()
            return list(tasks)
        except Exception as e:
            unavailable = _store_failure(db, e, "TaskService.get_tasks_by_user", user_id)
            if unavailable is None:
                raise
            raise unavailable from e

    @staticmethod
    def get_task_by_id(
        db: Session,
        task_id: str,
        user_id: str,
        for_update: bool = False
    ) -> Task:
        """
        Get a specific task by ID for a specific user.

        A task owned by someone else is reported exactly like a missing one.

        Args:
            db: Database session
            task_id: Task ID to retrieve
            user_id: User ID for ownership check
            for_update: Lock the row for the rest of the transaction

        Returns:
            Task object

        Raises:
            TaskNotFoundException: If task not found or not owned by the user
        """
        try:
            statement = select(Task).where(
                Task.id == task_id,
                Task.user_id == user_id
            )
            if for_update:
                statement = statement.with_for_update()
            task = db.exec(statement).first()
        except Exception as e:
            unavailable = _store_failure(db, e, f"TaskService.get_task_by_id (id={task_id})", user_id)
            if unavailable is None:
                raise
            raise unavailable from e

        if not task:
            raise TaskNotFoundException(task_id)

        return task

    @staticmethod
    def update_task_title(
        db: Session,
        task_id: str,
        user_id: str,
        title: str
    ) -> Task:
        """
        Rename a task. Only the title (and updated_at) change.

        Raises:
            TaskNotFoundException: If task not found or not owned by the user
            ValidationError: If the trimmed title is empty or too long
        """
        try:
            clean_title = normalize_title(title)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        task = TaskService.get_task_by_id(db, task_id, user_id, for_update=True)

        try:
            task.title = clean_title
            task.updated_at = utcnow()

            db.add(task)
            db.commit()
            db.refresh(task)

            return task
        except StaleDataError as e:
            # Row was deleted underneath us; the delete wins
            log_error(e, f"TaskService.update_task_title (id={task_id})", user_id)
            db.rollback()
            raise TaskNotFoundException(task_id) from e
        except Exception as e:
            unavailable = _store_failure(db, e, f"TaskService.update_task_title (id={task_id})", user_id)
            if unavailable is None:
                raise
            raise unavailable from e

    @staticmethod
    def mark_completed(db: Session, task_id: str, user_id: str) -> Task:
        """
        Mark a task as completed. Completing an already completed task is a no-op.

        Raises:
            TaskNotFoundException: If task not found or not owned by the user
        """
        task = TaskService.get_task_by_id(db, task_id, user_id, for_update=True)

        if task.completed:
            return task

        try:
            task.completed = True
            task.updated_at = utcnow()

            db.add(task)
            db.commit()
            db.refresh(task)

            return task
        except StaleDataError as e:
            log_error(e, f"TaskService.mark_completed (id={task_id})", user_id)
            db.rollback()
            raise TaskNotFoundException(task_id) from e
        except Exception as e:
            unavailable = _store_failure(db, e, f"TaskService.mark_completed (id={task_id})", user_id)
            if unavailable is None:
                raise
            raise unavailable from e

    @staticmethod
    def delete_task(db: Session, task_id: str, user_id: str) -> None:
        """
        Permanently delete a task.

        Raises:
            TaskNotFoundException: If task not found or not owned by the user,
                including when it was already deleted
        """
        task = TaskService.get_task_by_id(db, task_id, user_id, for_update=True)

        try:
            # A concurrent delete may already have removed the row
            result = db.exec(
                delete(Task).where(Task.id == task.id, Task.user_id == user_id)
            )
            deleted = result.rowcount
            if deleted:
                db.commit()
            else:
                db.rollback()
        except Exception as e:
            unavailable = _store_failure(db, e, f"TaskService.delete_task (id={task_id})", user_id)
            if unavailable is None:
                raise
            raise unavailable from e

        if not deleted:
            raise TaskNotFoundException(task_id)


__all__ = [
    "TaskService",
    "TASK_STATUS_FILTERS",
]
