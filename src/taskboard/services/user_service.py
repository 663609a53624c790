"""
User service module for the Taskboard backend
Credential store: registration, lookup and password checks
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlmodel import Session, select

from ..models.user import User
from ..models.task import utcnow
from ..utils.errors import (
    InvalidCredentialsError,
    StoreUnavailableError,
    UsernameTakenException,
)
from ..utils.logging import log_error
from ..utils.security import dummy_password_hash, hash_password, verify_password


logger = logging.getLogger(__name__)


class UserService:
    """Service class for user identity operations"""

    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        """Exact, case-sensitive lookup by username."""
        try:
            statement = select(User).where(User.username == username)
            return db.exec(statement).first()
        except (OperationalError, InterfaceError) as e:
            log_error(e, "UserService.get_user_by_username")
            raise StoreUnavailableError() from e

    @staticmethod
    def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
        try:
            return db.get(User, user_id)
        except (OperationalError, InterfaceError) as e:
            log_error(e, "UserService.get_user_by_id", user_id)
            raise StoreUnavailableError() from e

    @staticmethod
    def create_user(db: Session, username: str, password: str) -> User:
        """
        Register a new user.

        Args:
            db: Database session
            username: Desired username (unique, case-sensitive)
            password: Plaintext password; only its bcrypt hash is stored

        Returns:
            Created User object

        Raises:
            UsernameTakenException: If the username is already registered
        """
        if UserService.get_user_by_username(db, username) is not None:
            raise UsernameTakenException(username)

        user = User(
            username=username,
            hashed_password=hash_password(password),
            created_at=utcnow(),
        )

        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same name
            db.rollback()
            raise UsernameTakenException(username) from e
        except (OperationalError, InterfaceError) as e:
            log_error(e, "UserService.create_user")
            db.rollback()
            raise StoreUnavailableError() from e
        except Exception as e:
            log_error(e, "UserService.create_user")
            db.rollback()
            raise

        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    @staticmethod
    def authenticate(db: Session, username: str, password: str) -> User:
        """
        Check a username/password pair.

        Unknown users and wrong passwords fail the same way.

        Raises:
            InvalidCredentialsError: If the pair does not match a user
        """
        user = UserService.get_user_by_username(db, username)
        # Unknown users still pay for one bcrypt check
        hashed = user.hashed_password if user is not None else dummy_password_hash()
        if not verify_password(password, hashed) or user is None:
            logger.info("Failed login for username %r", username)
            raise InvalidCredentialsError()
        return user


__all__ = ["UserService"]
