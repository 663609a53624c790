# tests/test_task_view.py

from __future__ import annotations

import subprocess
import sys

import pytest
from fastapi.testclient import TestClient

from taskboard.client import ApiError, TaskApiClient, TaskBoardView

from .conftest import FakeClock


@pytest.fixture()
def api(client: TestClient) -> TaskApiClient:
    api = TaskApiClient(client)
    api.register("alice", "pw1")
    api.login("alice", "pw1")
    return api


@pytest.fixture()
def view(api: TaskApiClient) -> TaskBoardView:
    view = TaskBoardView(api)
    view.refresh()
    return view


def add(view: TaskBoardView, title: str) -> None:
    view.draft_title = title
    assert view.submit()


def test_login_stores_token(api: TaskApiClient) -> None:
    assert api.session.authenticated
    assert api.session.username == "alice"


def test_login_failure_raises(client: TestClient) -> None:
    api = TaskApiClient(client)

    with pytest.raises(ApiError) as exc_info:
        api.login("ghost", "pw")

    assert exc_info.value.status_code == 401
    assert not api.session.authenticated


def test_submit_creates_and_refetches(view: TaskBoardView) -> None:
    add(view, "buy milk")

    assert [t.title for t in view.tasks] == ["buy milk"]
    assert view.draft_title == ""
    assert view.loading is False


def test_blank_draft_is_ignored(view: TaskBoardView) -> None:
    view.draft_title = "   "

    assert view.submit() is False
    assert view.tasks == []


def test_edit_flow_renames_task(view: TaskBoardView) -> None:
    add(view, "draft")
    view.start_edit(view.tasks[0])
    assert view.draft_title == "draft"

    view.draft_title = "final"
    assert view.submit()

    assert view.editing_id is None
    assert [t.title for t in view.tasks] == ["final"]


def test_partitions_follow_search(view: TaskBoardView) -> None:
    add(view, "Buy milk")
    add(view, "Walk dog")
    add(view, "Buy bread")
    bread = next(t for t in view.tasks if t.title == "Buy bread")
    assert view.mark_completed(bread.id)

    view.search = "buy"

    assert [t.title for t in view.active_tasks] == ["Buy milk"]
    assert [t.title for t in view.completed_tasks] == ["Buy bread"]


def test_completed_task_leaves_active_partition_for_any_search(view: TaskBoardView) -> None:
    add(view, "report")
    task_id = view.tasks[0].id
    view.mark_completed(task_id)

    for search in ("", "rep", "REPORT", "zzz"):
        view.search = search
        assert view.active_tasks == []
        assert [t.id for t in view.completed_tasks] == [task_id]


def test_delete_refetches(view: TaskBoardView) -> None:
    add(view, "temporary")

    assert view.delete(view.tasks[0].id)
    assert view.tasks == []


def test_deleting_missing_task_reports_error(view: TaskBoardView) -> None:
    assert view.delete("0" * 32) is False
    assert view.last_error == f"Task with ID {'0' * 32} not found"
    assert view.authenticated


def test_expired_session_logs_out(view: TaskBoardView, clock: FakeClock) -> None:
    add(view, "something")

    clock.advance(30 * 60 + 1)

    assert view.refresh() is False
    assert not view.authenticated
    assert view.client.session.token is None
    assert view.tasks == []


def test_other_users_tasks_never_visible(client: TestClient, view: TaskBoardView) -> None:
    add(view, "alice only")

    bob = TaskApiClient(client)
    bob.register("bob", "pw2")
    bob.login("bob", "pw2")

    assert bob.list_tasks() == []


def test_logout_clears_state(view: TaskBoardView) -> None:
    add(view, "x")

    view.logout()

    assert not view.authenticated
    assert view.tasks == []
    assert view.refresh() is False


def test_client_package_does_not_load_the_server_stack() -> None:
    code = (
        "import sys, taskboard.client; "
        "print(sorted(m for m in ('sqlmodel', 'sqlalchemy') if m in sys.modules))"
    )

    result = subprocess.run([sys.executable, "-c", code], capture_output=True, text=True, check=True)

    assert result.stdout.strip() == "[]"
