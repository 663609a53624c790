"""
Task list view state for the Taskboard client
"""
import logging
from typing import Iterable, List, Optional, Tuple

from .api_client import ApiError, TaskApiClient, TaskItem


logger = logging.getLogger(__name__)


def partition_tasks(tasks: Iterable, search: str = "") -> Tuple[list, list]:
    """
    Split tasks into the (active, completed) lists shown to the user.

    Active tasks are those not completed whose title contains the search
    term, ignoring case. Completed tasks are never filtered by search.
    Works on TaskItem values and on anything else with `title` and `completed`.
    """
    tasks = list(tasks)
    needle = search.lower()
    active = [t for t in tasks if not t.completed and needle in t.title.lower()]
    completed = [t for t in tasks if t.completed]
    return active, completed


class TaskBoardView:
    """
    State behind the task list screen.

    The task list is never patched locally: every mutation is followed by a
    full refresh from the API. A 401 anywhere drops back to the logged-out
    state (the client has already discarded the token).
    """

    def __init__(self, client: TaskApiClient):
        self.client = client
        self.tasks: List[TaskItem] = []
        self.draft_title = ""
        self.editing_id: Optional[str] = None
        self.search = ""
        self.loading = False
        self.last_error: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return self.client.session.authenticated

    @property
    def active_tasks(self) -> List[TaskItem]:
        return partition_tasks(self.tasks, self.search)[0]

    @property
    def completed_tasks(self) -> List[TaskItem]:
        return partition_tasks(self.tasks, self.search)[1]

    def _reset(self) -> None:
        self.tasks = []
        self.draft_title = ""
        self.editing_id = None
        self.search = ""
        self.loading = False

    def _run(self, action: str, call) -> bool:
        """Run an API call, recording failures; True on success."""
        if not self.authenticated:
            self.last_error = "Not logged in"
            return False
        try:
            call()
        except ApiError as e:
            logger.warning("%s failed: %s", action, e)
            self.last_error = e.detail
            if e.unauthorized:
                self._reset()
            return False
        self.last_error = None
        return True

    def refresh(self) -> bool:
        """Re-fetch the full task list."""
        self.loading = True
        try:
            def fetch():
                self.tasks = self.client.list_tasks()
            return self._run("Fetching tasks", fetch)
        finally:
            self.loading = False

    def submit(self) -> bool:
        """Create a task from the draft, or rename the task being edited."""
        if not self.draft_title.strip():
            return False

        if self.editing_id:
            ok = self._run("Updating task", lambda: self.client.update_task(self.editing_id, self.draft_title))
        else:
            ok = self._run("Creating task", lambda: self.client.create_task(self.draft_title))

        if ok:
            self.editing_id = None
            self.draft_title = ""
            self.refresh()
        return ok

    def start_edit(self, task: TaskItem) -> None:
        self.editing_id = task.id
        self.draft_title = task.title

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.draft_title = ""

    def mark_completed(self, task_id: str) -> bool:
        ok = self._run("Marking task completed", lambda: self.client.complete_task(task_id))
        if ok:
            self.refresh()
        return ok

    def delete(self, task_id: str) -> bool:
        ok = self._run("Deleting task", lambda: self.client.delete_task(task_id))
        if ok:
            if self.editing_id == task_id:
                self.cancel_edit()
            self.refresh()
        return ok

    def logout(self) -> None:
        self.client.logout()
        self._reset()
