"""
Fixtures for QuizzStore component tests.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from quizzhub.adapters.current_user import StaticCurrentUser
from quizzhub.components.quizz_store import PublishEvent, QuizzStore
from quizzhub.domain.entities import Quizz, User

# --- Mock Implementations ---


class MockQuizzBackend:
    """
    In-memory QuizzBackendPort.

    Each port method records its call, optionally waits on a gate (to control
    interleavings), then raises the configured error or returns the
    configured response.
    """

    def __init__(self) -> None:
        self.responses: dict[str, Any] = {}
        self.errors: dict[str, Exception] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def calls_to(self, method: str) -> list[tuple[Any, ...]]:
        return [args for name, args in self.calls if name == method]

    async def _respond(self, method: str, *args: Any) -> Any:
        self.calls.append((method, args))
        gate = self.gates.get(method)
        if gate is not None:
            await gate.wait()
        if method in self.errors:
            raise self.errors[method]
        return self.responses.get(method)

    async def list_all(self) -> Any:
        return await self._respond("list_all")

    async def list_recent_by_owner(self, owner_id: str) -> Any:
        return await self._respond("list_recent_by_owner", owner_id)

    async def list_by_likes(self, owner_id: str, order: str) -> Any:
        return await self._respond("list_by_likes", owner_id, order)

    async def create_quizz(self, name: str, description: str, owner_id: str) -> Any:
        return await self._respond("create_quizz", name, description, owner_id)

    async def create_like(self, quizz_id: str, user_id: str) -> Any:
        return await self._respond("create_like", quizz_id, user_id)

    async def delete_like(self, like_id: str | None) -> Any:
        return await self._respond("delete_like", like_id)

    async def create_completion(self, quizz_id: str, user_id: str) -> Any:
        return await self._respond("create_completion", quizz_id, user_id)

    async def delete_completion(self, completion_id: str | None) -> Any:
        return await self._respond("delete_completion", completion_id)

    async def set_hidden(self, quizz_id: str, user_id: str, hidden: bool) -> Any:
        return await self._respond("set_hidden", quizz_id, user_id, hidden)

    async def create_comment(self, text: str, quizz_id: str, user_id: str) -> Any:
        return await self._respond("create_comment", text, quizz_id, user_id)

    async def delete_quizz(self, quizz_id: str) -> Any:
        return await self._respond("delete_quizz", quizz_id)


class EventRecorder:
    """Collects PublishEvents from a store."""

    def __init__(self) -> None:
        self.events: list[PublishEvent] = []

    def __call__(self, event: PublishEvent) -> None:
        self.events.append(event)

    @property
    def reasons(self) -> list[str]:
        return [event.reason for event in self.events]


# --- Fixtures ---


@pytest.fixture
def backend() -> MockQuizzBackend:
    return MockQuizzBackend()


@pytest.fixture
def user() -> User:
    return User(id="u1", displayName="Ada")


@pytest.fixture
def store(backend: MockQuizzBackend, user: User) -> QuizzStore:
    return QuizzStore(backend, StaticCurrentUser(user))


@pytest.fixture
def anonymous_store(backend: MockQuizzBackend) -> QuizzStore:
    return QuizzStore(backend, StaticCurrentUser(None))


@pytest.fixture
def seed(store: QuizzStore, backend: MockQuizzBackend) -> Callable[..., None]:
    """Fill the cache through fetch_all with the given quizzes."""

    def _seed(*quizzs: Quizz) -> None:
        backend.responses["list_all"] = list(quizzs)
        asyncio.run(store.fetch_all())
        backend.calls.clear()

    return _seed


@pytest.fixture
def recorder(store: QuizzStore) -> EventRecorder:
    rec = EventRecorder()
    store.subscribe_events(rec)
    return rec
