"""
Request dependencies for the Taskboard API
The auth gate lives here: it resolves the caller's identity from the bearer token
"""
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from ..database.database import get_session
from ..models.user import User
from ..services.token_service import TokenService
from ..services.user_service import UserService
from ..utils.errors import AuthError, UnauthorizedError, UserNotFoundException


logger = logging.getLogger(__name__)

# auto_error=False: a missing or non-Bearer header yields None instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> str:
    """
    Resolve the authenticated user's id from the Authorization header.

    Only the token is inspected; no store is consulted. Every failure is
    reported to the client as the same 401, the precise reason is logged.

    Raises:
        UnauthorizedError: Header missing/malformed, or token rejected
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing bearer token")

    try:
        return token_service.verify(credentials.credentials)
    except AuthError as e:
        logger.info("Rejected bearer token: %s", e.reason)
        raise UnauthorizedError("Invalid or expired token") from e


def get_current_user(
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
) -> User:
    """Load the full identity record for the authenticated caller."""
    user = UserService.get_user_by_id(session, user_id)
    if user is None:
        raise UserNotFoundException(user_id)
    return user


__all__ = [
    "bearer_scheme",
    "get_token_service",
    "get_current_user_id",
    "get_current_user",
]
