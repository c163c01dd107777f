"""
Todo API - MongoDB Task Repository Tests

Runs TaskRepository against a mocked Motor collection.
"""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from todo_api.tasks.repository import TaskRepository


class FakeCursor:
    """Async-iterable stand-in for a Motor cursor, in MongoDB's null-first order."""

    def __init__(self, docs):
        self._docs = docs

    def sort(self, *args):
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._docs:
            yield doc


def _doc(task_id, due_date, created_at):
    return {
        "_id": task_id,
        "owner_id": "u1",
        "title": task_id,
        "description": None,
        "due_date": due_date,
        "completed": False,
        "created_at": created_at,
        "updated_at": created_at,
    }


@pytest.fixture
def collection():
    return MagicMock()


@pytest.fixture
def repository(collection):
    db = MagicMock()
    db.__getitem__.return_value = collection
    return TaskRepository(db)


class TestListByOwner:

    @pytest.mark.asyncio
    async def test_undated_tasks_sorted_last(self, repository, collection):
        now = datetime.now(timezone.utc)
        cursor = FakeCursor([
            _doc("undated-old", None, now),
            _doc("undated-new", None, now + timedelta(seconds=1)),
            _doc("early", datetime(2030, 1, 1, tzinfo=timezone.utc), now),
            _doc("late", datetime(2030, 6, 1, tzinfo=timezone.utc), now),
        ])
        collection.find.return_value = cursor

        tasks = await repository.list_by_owner("u1")

        collection.find.assert_called_once_with({"owner_id": "u1"})
        assert [t.id for t in tasks] == ["early", "late", "undated-old", "undated-new"]
        assert tasks[0].due_date == date(2030, 1, 1)


class TestUpdate:

    @pytest.mark.asyncio
    async def test_due_date_encoded_for_store(self, repository, collection):
        now = datetime.now(timezone.utc)
        stored = _doc("t1", datetime(2030, 3, 3, tzinfo=timezone.utc), now)
        collection.find_one_and_update = AsyncMock(return_value=stored)

        task = await repository.update("t1", "u1", {"due_date": date(2030, 3, 3)})

        query, update = collection.find_one_and_update.call_args.args
        assert query == {"_id": "t1", "owner_id": "u1"}
        assert update["$set"]["due_date"] == datetime(2030, 3, 3, tzinfo=timezone.utc)
        assert "updated_at" in update["$set"]
        assert task.due_date == date(2030, 3, 3)

    @pytest.mark.asyncio
    async def test_cleared_due_date_stored_as_null(self, repository, collection):
        collection.find_one_and_update = AsyncMock(return_value=None)

        result = await repository.update("t1", "u1", {"due_date": None})

        update = collection.find_one_and_update.call_args.args[1]
        assert update["$set"]["due_date"] is None
        assert result is None

    @pytest.mark.asyncio
    async def test_caller_updates_not_mutated(self, repository, collection):
        collection.find_one_and_update = AsyncMock(return_value=None)
        updates = {"due_date": date(2030, 3, 3)}

        await repository.update("t1", "u1", updates)

        assert updates == {"due_date": date(2030, 3, 3)}
