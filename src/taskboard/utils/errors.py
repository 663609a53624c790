"""
Error types for the Taskboard backend
Every AppError maps 1:1 to an HTTP status at the API boundary
"""
from typing import Optional


class AppError(Exception):
    """Base class for errors surfaced to API clients"""
    status_code = 500
    code = "internal_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input shape or content is invalid"""
    status_code = 400
    code = "validation_error"


class UnauthorizedError(AppError):
    """Raised when the caller is not authenticated"""
    status_code = 401
    code = "unauthorized"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class InvalidCredentialsError(UnauthorizedError):
    """Raised when a username/password pair does not match"""

    def __init__(self):
        super().__init__("Invalid username or password")


class NotFoundError(AppError):
    """Raised when a record is absent or not owned by the caller"""
    status_code = 404
    code = "not_found"


class TaskNotFoundException(NotFoundError):
    """Raised when a task is not found for the requesting user"""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found")


class UserNotFoundException(NotFoundError):
    """Raised when a user identity no longer exists"""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User with ID {user_id} not found")


class ConflictError(AppError):
    """Raised when a unique key is already taken"""
    status_code = 409
    code = "conflict"


class UsernameTakenException(ConflictError):
    """Raised when registering a username that already exists"""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' is already taken")


class StoreUnavailableError(AppError):
    """Raised when the backing database cannot be reached"""
    status_code = 503
    code = "store_unavailable"

    def __init__(self, message: str = "Storage is temporarily unavailable"):
        super().__init__(message)


# Token verification failures. These never reach clients directly,
# the auth gate turns every one of them into an UnauthorizedError.

class AuthError(Exception):
    """Base class for token verification failures"""
    reason = "invalid"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.reason)


class MalformedTokenError(AuthError):
    """Token cannot be decoded or lacks required claims"""
    reason = "malformed"


class InvalidSignatureError(AuthError):
    """Token signature does not match the signing secret"""
    reason = "invalid_signature"


class TokenExpiredError(AuthError):
    """Token expiry time has passed"""
    reason = "expired"


__all__ = [
    "AppError",
    "ValidationError",
    "UnauthorizedError",
    "InvalidCredentialsError",
    "NotFoundError",
    "TaskNotFoundException",
    "UserNotFoundException",
    "ConflictError",
    "UsernameTakenException",
    "StoreUnavailableError",
    "AuthError",
    "MalformedTokenError",
    "InvalidSignatureError",
    "TokenExpiredError",
]
