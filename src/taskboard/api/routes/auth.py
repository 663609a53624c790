"""
Auth API routes for the Taskboard backend
Registration and login; login hands out a bearer token
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ...database.database import get_session
from ...models.token import TokenResponse
from ...models.user import Credentials, User, UserPublic
from ...services.token_service import TokenService
from ...services.user_service import UserService
from ..deps import get_current_user, get_token_service


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(
    request: Credentials,
    session: Session = Depends(get_session)
):
    """
    Register a new user.

    Returns:
        The identity summary (never the password hash)

    Raises:
        409: Username already taken
    """
    user = UserService.create_user(session, request.username, request.password)
    return user


@router.post("/login", response_model=TokenResponse)
def login(
    request: Credentials,
    session: Session = Depends(get_session),
    token_service: TokenService = Depends(get_token_service)
):
    """
    Exchange a username and password for a bearer token.

    Raises:
        401: Unknown user or wrong password
    """
    user = UserService.authenticate(session, request.username, request.password)
    return TokenResponse(
        token=token_service.issue(user),
        expires_in=token_service.ttl_seconds,
    )


@router.get("/me", response_model=UserPublic)
def me(current_user: User = Depends(get_current_user)):
    """Return the identity the presented token belongs to."""
    return current_user
