from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from todo_api.auth.models import Identity
from todo_api.auth.repository import MongoUserRepository, UserRepositoryInterface
from todo_api.auth.service import AuthService
from todo_api.auth.tokens import verify_access_token
from todo_api.database import get_database
from todo_api.errors import Unauthorized


# HTTP Bearer token scheme - auto_error=False to handle missing tokens ourselves.
# A header that is not a bearer credential also comes back as None.
bearer_scheme = HTTPBearer(auto_error=False)


async def get_user_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> UserRepositoryInterface:
    """Dependency to get the user repository."""
    return MongoUserRepository(db)


async def get_auth_service(
    repository: Annotated[UserRepositoryInterface, Depends(get_user_repository)]
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(repository)


def get_current_identity(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> Identity:
    """
    Access guard for protected routes.

    No token -> Unauthorized (401). Token present but invalid or expired ->
    Forbidden (403). Otherwise the decoded identity, which handlers must use
    to scope every read and write.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    return verify_access_token(credentials.credentials)


# Type alias for cleaner dependency injection
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
