"""
Todo API - Client Tests

The httpx client and session storage, run against the app in-process.
"""

import os
from datetime import date

import pytest

from todo_api.client import (
    ClientValidationError,
    FileTokenStore,
    MemoryTokenStore,
    Session,
    TodoClient,
    TodoNotFound,
    TokenRejected,
    UsernameTaken,
)


@pytest.fixture
def token_store():
    return MemoryTokenStore()


@pytest.fixture
def todo_client(asgi_transport, token_store):
    return TodoClient("http://testserver", token_store, transport=asgi_transport)


class TestSessionFlow:

    @pytest.mark.asyncio
    async def test_login_stores_token_and_logout_clears_it(self, todo_client, token_store):
        async with todo_client:
            await todo_client.register("alice", "pw1")
            session = await todo_client.login("alice", "pw1")

            assert session.username == "alice"
            assert token_store.load() == session

            todo_client.logout()
            assert token_store.load() is None

    @pytest.mark.asyncio
    async def test_duplicate_register_raises_username_taken(self, todo_client):
        async with todo_client:
            await todo_client.register("alice", "pw1")
            with pytest.raises(UsernameTaken):
                await todo_client.register("alice", "pw2")

    @pytest.mark.asyncio
    async def test_bad_login_raises_and_stores_nothing(self, todo_client, token_store):
        async with todo_client:
            with pytest.raises(ClientValidationError) as exc_info:
                await todo_client.login("nobody", "pw")
        assert exc_info.value.detail == "Invalid credentials"
        assert token_store.load() is None

    @pytest.mark.asyncio
    async def test_rejected_token_is_discarded(self, asgi_transport):
        store = MemoryTokenStore(Session(token="stale-token", username="alice"))
        async with TodoClient("http://testserver", store, transport=asgi_transport) as client:
            with pytest.raises(TokenRejected):
                await client.list_todos()
        assert store.load() is None


class TestTodoOperations:

    @pytest.mark.asyncio
    async def test_crud_round_trip(self, todo_client):
        async with todo_client:
            await todo_client.register("alice", "pw1")
            await todo_client.login("alice", "pw1")

            created = await todo_client.create_todo(
                "Buy milk", description="2 litres", due_date=date(2030, 1, 2)
            )
            assert created.completed is False
            assert await todo_client.get_todo(created.id) == created

            updated = await todo_client.update_todo(created.id, completed=True, description=None)
            assert updated.completed is True
            assert updated.description is None
            assert updated.due_date == date(2030, 1, 2)

            assert [t.id for t in await todo_client.list_todos()] == [created.id]

            await todo_client.delete_todo(created.id)
            with pytest.raises(TodoNotFound):
                await todo_client.get_todo(created.id)

    @pytest.mark.asyncio
    async def test_validation_errors_carry_fields(self, todo_client):
        async with todo_client:
            await todo_client.register("alice", "pw1")
            await todo_client.login("alice", "pw1")
            with pytest.raises(ClientValidationError) as exc_info:
                await todo_client.create_todo("   ")
        assert exc_info.value.errors[0]["field"] == "title"


class TestFileTokenStore:

    def test_save_load_clear(self, tmp_path):
        store = FileTokenStore(tmp_path / "nested" / "session.json")
        assert store.load() is None

        store.save(Session(token="abc", username="alice"))
        assert FileTokenStore(store.path).load() == Session(token="abc", username="alice")
        assert store.path.stat().st_mode & 0o777 == 0o600

        store.clear()
        assert store.load() is None
        store.clear()

    def test_session_file_created_owner_only(self, tmp_path, monkeypatch):
        """The token never lands in a file readable by others, even briefly."""
        created_modes = []
        real_open = os.open

        def recording_open(path, flags, mode=0o777, *args, **kwargs):
            created_modes.append(mode)
            return real_open(path, flags, mode, *args, **kwargs)

        monkeypatch.setattr(os, "open", recording_open)
        store = FileTokenStore(tmp_path / "session.json")
        store.save(Session(token="abc", username="alice"))

        assert created_modes == [0o600]
        assert store.path.stat().st_mode & 0o777 == 0o600

    def test_existing_loose_file_is_tightened(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{}", encoding="utf-8")
        path.chmod(0o644)

        FileTokenStore(path).save(Session(token="abc", username="alice"))
        assert path.stat().st_mode & 0o777 == 0o600

    def test_corrupt_file_is_ignored(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")
        assert FileTokenStore(path).load() is None

    def test_path_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TODO_SESSION_FILE", str(tmp_path / "env-session.json"))
        assert FileTokenStore().path == tmp_path / "env-session.json"
