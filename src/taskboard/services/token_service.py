"""
Token service module for the Taskboard backend
Issues and verifies signed, time-bounded identity tokens (JWT)
"""
from datetime import datetime, timezone
from typing import Callable, Optional, Union

import jwt

from ..config import Settings
from ..models.user import User
from ..utils.errors import InvalidSignatureError, MalformedTokenError, TokenExpiredError


Clock = Callable[[], datetime]


def _system_clock() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issue and verify bearer tokens.

    Tokens carry the identity id in `sub`, plus `iat` and `exp` as unix
    seconds. Nothing is stored server side; a token simply stops being
    accepted once the clock reaches `exp`.
    """

    def __init__(
        self,
        secret: str,
        ttl_seconds: int,
        algorithm: str = "HS256",
        clock: Optional[Clock] = None
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        if ttl_seconds <= 0:
            raise ValueError("Token time-to-live must be positive")
        self.secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm
        self.clock = clock or _system_clock

    @classmethod
    def from_settings(cls, settings: Settings, clock: Optional[Clock] = None) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            ttl_seconds=settings.access_token_ttl_seconds,
            algorithm=settings.jwt_algorithm,
            clock=clock,
        )

    def issue(self, identity: Union[User, str]) -> str:
        """Sign a token for a user (or a bare user id)."""
        user_id = identity.id if isinstance(identity, User) else identity
        issued_at = int(self.clock().timestamp())
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Check a token and return the identity id it was issued for.

        Raises:
            MalformedTokenError: Not a decodable JWT, or claims missing/ill-typed
            InvalidSignatureError: Signed with another secret or algorithm
            TokenExpiredError: The clock has reached the token's expiry
        """
        try:
            # Expiry is checked below against our own clock
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "iat", "exp"]},
            )
        except jwt.InvalidSignatureError as e:
            raise InvalidSignatureError(str(e)) from e
        except jwt.InvalidAlgorithmError as e:
            raise InvalidSignatureError(str(e)) from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(str(e)) from e

        user_id = claims.get("sub")
        expires_at = claims.get("exp")
        if not isinstance(user_id, str) or not user_id:
            raise MalformedTokenError("Token subject is missing")
        if not isinstance(expires_at, (int, float)):
            raise MalformedTokenError("Token expiry is not a timestamp")

        if self.clock().timestamp() >= expires_at:
            raise TokenExpiredError()

        return user_id


__all__ = ["TokenService"]
