"""
HTTP client for the Taskboard API
Holds the bearer token for the session and attaches it to every call
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

import httpx


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised for any non-success response from the API"""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")

    @property
    def unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def retryable(self) -> bool:
        # Only an unavailable store is worth retrying
        return self.status_code == 503


@dataclass
class ClientSession:
    """Client-held authentication state"""
    token: Optional[str] = None
    username: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return self.token is not None

    def clear(self) -> None:
        self.token = None
        self.username = None


@dataclass
class TaskItem:
    """A task as the client sees it"""
    id: str
    title: str
    completed: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_json(cls, data: dict) -> "TaskItem":
        created_at = data.get("createdAt")
        return cls(
            id=data["id"],
            title=data["title"],
            completed=bool(data["completed"]),
            created_at=datetime.fromisoformat(created_at.replace("Z", "+00:00")) if created_at else None,
        )


class TaskApiClient:
    """
    Thin wrapper over an httpx.Client pointed at the API.

    Any httpx.Client works, including FastAPI's TestClient. A 401 from any
    call clears the session token before the ApiError is raised, so the
    caller has to log in again.
    """

    def __init__(self, http: httpx.Client, session: Optional[ClientSession] = None, api_prefix: str = "/api"):
        self.http = http
        self.session = session or ClientSession()
        self.api_prefix = api_prefix.rstrip("/")

    def _request(self, method: str, path: str, json: Optional[dict] = None, auth: bool = True) -> Any:
        headers = {}
        if auth and self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        response = self.http.request(method, f"{self.api_prefix}{path}", json=json, headers=headers)

        if response.status_code == 401 and auth:
            logger.info("Session rejected by the API, dropping token")
            self.session.clear()

        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise ApiError(response.status_code, str(detail))

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Auth

    def register(self, username: str, password: str) -> dict:
        return self._request("POST", "/auth/register", json={"username": username, "password": password}, auth=False)

    def login(self, username: str, password: str) -> str:
        data = self._request("POST", "/auth/login", json={"username": username, "password": password}, auth=False)
        self.session.token = data["token"]
        self.session.username = username
        return data["token"]

    def logout(self) -> None:
        self.session.clear()

    # Tasks

    def list_tasks(self) -> List[TaskItem]:
        return [TaskItem.from_json(item) for item in self._request("GET", "/tasks")]

    def create_task(self, title: str) -> TaskItem:
        return TaskItem.from_json(self._request("POST", "/tasks", json={"title": title}))

    def update_task(self, task_id: str, title: str) -> TaskItem:
        return TaskItem.from_json(self._request("PUT", f"/tasks/{task_id}", json={"title": title}))

    def complete_task(self, task_id: str) -> TaskItem:
        return TaskItem.from_json(self._request("PATCH", f"/tasks/{task_id}"))

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}")
