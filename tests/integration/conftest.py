"""
In-process fake backend for end-to-end store tests.

A small FastAPI app with in-memory state, served to HttpQuizzBackend through
httpx.ASGITransport. It models a single viewer: like/realise/cache flags are
stored on the quizz records themselves.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from itertools import count
from typing import Any

import httpx
import pytest
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from quizzhub.adapters.current_user import StaticCurrentUser
from quizzhub.adapters.http_backend import HttpQuizzBackend
from quizzhub.components.quizz_store import QuizzStore
from quizzhub.domain.entities import User
from quizzhub.settings.models import BackendSettings, Settings

BASE_URL = "http://backend.test/api/"


class FakeQuizzServer:
    def __init__(self) -> None:
        self._ids = count(1)
        self.quizzes: dict[str, dict[str, Any]] = {}
        self.likes: dict[str, str] = {}
        self.completions: dict[str, str] = {}
        self.hidden_requests: list[tuple[str, str, bool]] = []
        self.failing_paths: set[str] = set()

    def next_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids)}"

    def add_quizz(self, owner_id: str = "u1", **fields: Any) -> dict[str, Any]:
        quizz_id = fields.pop("id", None) or self.next_id("q")
        record = {
            "id": quizz_id,
            "name": fields.pop("name", f"Quizz {quizz_id}"),
            "description": fields.pop("description", ""),
            "ownerId": owner_id,
            "like": True,
            "likeId": None,
            "realise": True,
            "realiseId": None,
            "cache": False,
            "comments": [],
            "likesCount": 0,
            "createdSeq": len(self.quizzes),
        }
        record.update(fields)
        self.quizzes[quizz_id] = record
        return record


class CreateQuizzRequest(BaseModel):
    name: str
    description: str
    ownerId: str


class JoinRequest(BaseModel):
    quizzId: str
    userId: str


class HiddenRequest(BaseModel):
    hidden: bool


class CommentRequest(BaseModel):
    text: str
    quizzId: str
    userId: str


def build_app(server: FakeQuizzServer) -> FastAPI:
    app = FastAPI()

    @app.middleware("http")
    async def fail_on_demand(request: Request, call_next):
        if request.url.path in server.failing_paths:
            return JSONResponse({"detail": "injected failure"}, status_code=500)
        return await call_next(request)

    def get_quizz(quizz_id: str) -> dict[str, Any]:
        if quizz_id not in server.quizzes:
            raise HTTPException(status_code=404, detail="Quizz not found")
        return server.quizzes[quizz_id]

    @app.get("/api/quizzes")
    def list_quizzes(
        owner: str | None = None, sort: str | None = None, order: str | None = None
    ) -> list[dict[str, Any]]:
        items = list(server.quizzes.values())
        if owner is not None:
            items = [q for q in items if q["ownerId"] == owner]
        if sort == "likes":
            items.sort(key=lambda q: q["likesCount"], reverse=order == "desc")
        elif order == "created_desc":
            items.sort(key=lambda q: q["createdSeq"], reverse=True)
        return items

    @app.post("/api/quizzes", status_code=201)
    def create_quizz(data: CreateQuizzRequest) -> dict[str, Any]:
        return server.add_quizz(
            owner_id=data.ownerId, name=data.name, description=data.description
        )

    @app.delete("/api/quizzes/{quizz_id}")
    def delete_quizz(quizz_id: str) -> bool:
        return server.quizzes.pop(quizz_id, None) is not None

    @app.post("/api/likes", status_code=201)
    def create_like(data: JoinRequest) -> dict[str, str]:
        quizz = get_quizz(data.quizzId)
        like_id = server.next_id("L")
        server.likes[like_id] = data.quizzId
        quizz.update(like=False, likeId=like_id, likesCount=quizz["likesCount"] + 1)
        return {"id": like_id}

    @app.delete("/api/likes/{like_id}")
    def delete_like(like_id: str) -> bool:
        quizz_id = server.likes.pop(like_id, None)
        if quizz_id is None:
            raise HTTPException(status_code=404, detail="Like not found")
        quizz = get_quizz(quizz_id)
        quizz.update(like=True, likeId=None, likesCount=quizz["likesCount"] - 1)
        return True

    @app.post("/api/completions", status_code=201)
    def create_completion(data: JoinRequest) -> dict[str, str]:
        quizz = get_quizz(data.quizzId)
        completion_id = server.next_id("R")
        server.completions[completion_id] = data.quizzId
        quizz.update(realise=False, realiseId=completion_id)
        return {"id": completion_id}

    @app.delete("/api/completions/{completion_id}")
    def delete_completion(completion_id: str) -> bool:
        quizz_id = server.completions.pop(completion_id, None)
        if quizz_id is None:
            raise HTTPException(status_code=404, detail="Completion not found")
        get_quizz(quizz_id).update(realise=True, realiseId=None)
        return True

    @app.put("/api/quizzes/{quizz_id}/users/{user_id}")
    def set_hidden(quizz_id: str, user_id: str, data: HiddenRequest) -> dict[str, bool]:
        get_quizz(quizz_id)["cache"] = data.hidden
        server.hidden_requests.append((quizz_id, user_id, data.hidden))
        return {"ok": True}

    @app.post("/api/comments", status_code=201)
    def create_comment(data: CommentRequest) -> dict[str, Any]:
        quizz = get_quizz(data.quizzId)
        comment = {
            "id": server.next_id("c"),
            "text": data.text,
            "authorId": data.userId,
            "quizzId": data.quizzId,
        }
        quizz["comments"].append(comment)
        return comment

    return app


# --- Fixtures ---


@pytest.fixture
def server() -> FakeQuizzServer:
    return FakeQuizzServer()


@pytest.fixture
def app(server: FakeQuizzServer) -> FastAPI:
    return build_app(server)


@pytest.fixture
def settings() -> Settings:
    return Settings(backend=BackendSettings(base_url=BASE_URL))


StoreScenario = Callable[[QuizzStore], Awaitable[Any]]


@pytest.fixture
def with_store(app: FastAPI, settings: Settings) -> Callable[..., Any]:
    """Run an async scenario against a store wired to the fake backend."""

    def _run(scenario: StoreScenario, user_id: str | None = "u1") -> Any:
        async def main() -> Any:
            client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url=BASE_URL)
            async with client:
                backend = HttpQuizzBackend(settings, client=client)
                user = User(id=user_id) if user_id else None
                store = QuizzStore(backend, StaticCurrentUser(user))
                return await scenario(store)

        return asyncio.run(main())

    return _run
