"""
Todo API Client

Python client for the Todo API: session storage, HTTP client and CLI.
"""

from todo_api.client.api import (
    ClientError,
    ClientValidationError,
    NotAuthenticated,
    ServerError,
    TodoClient,
    TodoNotFound,
    TokenRejected,
    UsernameTaken,
)
from todo_api.client.token_store import FileTokenStore, MemoryTokenStore, Session, TokenStore

__all__ = [
    "ClientError",
    "ClientValidationError",
    "FileTokenStore",
    "MemoryTokenStore",
    "NotAuthenticated",
    "ServerError",
    "Session",
    "TodoClient",
    "TodoNotFound",
    "TokenRejected",
    "TokenStore",
    "UsernameTaken",
]
