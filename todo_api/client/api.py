"""
Todo API Client - HTTP Client

Async client for the Todo API. The stored session token is attached to
every request; a 401/403 from the server discards it.
"""

import logging
from datetime import date
from typing import Any, List, Optional

import httpx

from todo_api.client.token_store import MemoryTokenStore, Session, TokenStore
from todo_api.tasks.schemas import TaskCreateRequest, TaskResponse, TaskUpdateRequest

logger = logging.getLogger(__name__)


class ClientError(Exception):
    """Non-success response from the API."""

    def __init__(self, status_code: int, detail: str, errors: Optional[list] = None):
        self.status_code = status_code
        self.detail = detail
        self.errors = errors or []
        super().__init__(f"{status_code}: {detail}")


class ClientValidationError(ClientError):
    pass


class NotAuthenticated(ClientError):
    pass


class TokenRejected(ClientError):
    pass


class TodoNotFound(ClientError):
    pass


class UsernameTaken(ClientError):
    pass


class ServerError(ClientError):
    pass


_ERRORS_BY_STATUS = {
    400: ClientValidationError,
    401: NotAuthenticated,
    403: TokenRejected,
    404: TodoNotFound,
    409: UsernameTaken,
}


def error_for_response(response: httpx.Response) -> ClientError:
    """Build the ClientError matching a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    detail = body.get("detail") or response.reason_phrase or "Request failed"
    errors = body.get("errors")

    if response.status_code >= 500:
        return ServerError(response.status_code, detail, errors)
    error_class = _ERRORS_BY_STATUS.get(response.status_code, ClientError)
    return error_class(response.status_code, detail, errors)


class BearerAuth(httpx.Auth):
    """Adds the stored session token to outgoing requests."""

    def __init__(self, token_store: TokenStore):
        self.token_store = token_store

    def auth_flow(self, request: httpx.Request):
        session = self.token_store.load()
        if session is not None:
            request.headers["Authorization"] = f"Bearer {session.token}"
        yield request


class TodoClient:
    """
    Client for the Todo API.

    Use as an async context manager:

        async with TodoClient("http://localhost:8000", FileTokenStore()) as client:
            await client.login("alice", "secret")
            todos = await client.list_todos()
    """

    def __init__(
        self,
        base_url: str,
        token_store: Optional[TokenStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store or MemoryTokenStore()
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            auth=BearerAuth(self.token_store),
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "TodoClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def session(self) -> Optional[Session]:
        return self.token_store.load()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._http.request(method, url, **kwargs)
        if response.is_success:
            return response

        error = error_for_response(response)
        if isinstance(error, (NotAuthenticated, TokenRejected)):
            logger.debug("Session rejected by server, discarding stored token")
            self.token_store.clear()
        raise error

    async def register(self, username: str, password: str) -> str:
        response = await self._request(
            "POST", "/api/register", json={"username": username, "password": password}
        )
        return response.json()["message"]

    async def login(self, username: str, password: str) -> Session:
        response = await self._request(
            "POST", "/api/login", json={"username": username, "password": password}
        )
        data = response.json()
        session = Session(token=data["token"], username=data["username"])
        self.token_store.save(session)
        return session

    def logout(self) -> None:
        self.token_store.clear()

    async def list_todos(self) -> List[TaskResponse]:
        response = await self._request("GET", "/api/todos")
        return [TaskResponse.model_validate(item) for item in response.json()]

    async def create_todo(
        self,
        title: str,
        description: Optional[str] = None,
        due_date: Optional[date] = None,
    ) -> TaskResponse:
        payload = TaskCreateRequest(
            title=title, description=description, due_date=due_date
        ).model_dump(mode="json", by_alias=True, exclude_none=True)
        response = await self._request("POST", "/api/todos", json=payload)
        return TaskResponse.model_validate(response.json())

    async def get_todo(self, task_id: str) -> TaskResponse:
        response = await self._request("GET", f"/api/todos/{task_id}")
        return TaskResponse.model_validate(response.json())

    async def update_todo(self, task_id: str, **fields: Any) -> TaskResponse:
        """Send only the given fields; passing None for description or due_date clears it."""
        payload = TaskUpdateRequest(**fields).model_dump(
            mode="json", by_alias=True, exclude_unset=True
        )
        response = await self._request("PUT", f"/api/todos/{task_id}", json=payload)
        return TaskResponse.model_validate(response.json())

    async def delete_todo(self, task_id: str) -> None:
        await self._request("DELETE", f"/api/todos/{task_id}")
