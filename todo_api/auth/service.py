import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import bcrypt

from todo_api.auth import tokens
from todo_api.auth.models import Identity, User
from todo_api.auth.repository import UserRepositoryInterface
from todo_api.errors import ConflictError, InvalidCredentials, ValidationError

logger = logging.getLogger(__name__)

USERNAME_MAX_LENGTH = 50
# bcrypt only accepts up to 72 bytes of input
PASSWORD_MAX_BYTES = 72


@dataclass(frozen=True)
class LoginResult:
    """Token issued by a successful login, with the username it belongs to."""

    token: str
    username: str


def validate_credentials(username: Optional[str], password: Optional[str]) -> None:
    """Check registration input before anything is hashed or stored."""
    errors = []
    if username is None or not username.strip():
        errors.append({"field": "username", "message": "Username is required"})
    elif len(username) > USERNAME_MAX_LENGTH:
        errors.append({
            "field": "username",
            "message": f"Username must be at most {USERNAME_MAX_LENGTH} characters",
        })
    if password is None or not password.strip():
        errors.append({"field": "password", "message": "Password is required"})
    elif len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        errors.append({
            "field": "password",
            "message": f"Password must be at most {PASSWORD_MAX_BYTES} bytes",
        })
    if errors:
        raise ValidationError(errors)


class AuthService:
    """Authentication service with password hashing and token operations."""

    def __init__(self, repository: UserRepositoryInterface):
        self.repository = repository

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        password_bytes = password.encode("utf-8")
        salt = bcrypt.gensalt()
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        password_bytes = plain_password.encode("utf-8")
        if len(password_bytes) > PASSWORD_MAX_BYTES:
            return False
        hashed_bytes = hashed_password.encode("utf-8")
        return bcrypt.checkpw(password_bytes, hashed_bytes)

    def create_access_token(
        self,
        user: User,
        expires_delta: Optional[timedelta] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """Create a session token for a user."""
        identity = Identity(id=user.id, username=user.username)
        return tokens.create_access_token(identity, expires_delta=expires_delta, now=now)

    async def register(self, username: str, password: str) -> User:
        """Register a new user. Raises ConflictError if the username is taken."""
        validate_credentials(username, password)

        if await self.repository.exists_by_username(username):
            raise ConflictError("Username already exists")

        password_hash = self.hash_password(password)
        user = User.create(username=username, password_hash=password_hash)
        await self.repository.create(user)
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    async def authenticate_user(self, username: str, password: str) -> Optional[User]:
        """Authenticate user by username and password."""
        user = await self.repository.get_by_username(username)
        if user is None:
            return None
        if not self.verify_password(password, user.password_hash):
            return None
        return user

    async def login(self, username: str, password: str) -> LoginResult:
        """
        Authenticate and issue a session token.

        Unknown usernames and wrong passwords raise the same InvalidCredentials.
        """
        user = await self.authenticate_user(username, password)
        if user is None:
            logger.info("Failed login for username %s", username)
            raise InvalidCredentials()

        return LoginResult(token=self.create_access_token(user), username=user.username)
