import logging
from abc import ABC, abstractmethod
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from todo_api.auth.models import User
from todo_api.errors import ConflictError

logger = logging.getLogger(__name__)


class UserRepositoryInterface(ABC):
    """Abstract interface for user repository.

    This interface allows swapping implementations (in-memory -> MongoDB).
    Implementations must reject a second user with the same username
    by raising ConflictError.
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user."""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        """Check if username exists."""
        pass


class MongoUserRepository(UserRepositoryInterface):
    """MongoDB implementation of the user repository."""

    COLLECTION_NAME = "users"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[self.COLLECTION_NAME]

    async def create(self, user: User) -> User:
        """Create a new user. The unique username index settles concurrent registrations."""
        try:
            await self.collection.insert_one(user.to_dict())
        except DuplicateKeyError:
            logger.info("Duplicate username rejected by store: %s", user.username)
            raise ConflictError("Username already exists")
        return user

    async def get_by_username(self, username: str) -> Optional[User]:
        doc = await self.collection.find_one({"username": username})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def exists_by_username(self, username: str) -> bool:
        count = await self.collection.count_documents({"username": username}, limit=1)
        return count > 0
