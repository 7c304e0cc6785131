"""
HTTP backend adapter.

Implements QuizzBackendPort on top of httpx.AsyncClient. Routes come from
settings; placeholder values are URL-escaped before formatting.

Error mapping:
- httpx.HTTPError (connect, timeout, protocol) -> TransportError
- non-2xx status                               -> BackendStatusError
- undecodable JSON or unexpected shape         -> MalformedResponseError

An empty body decodes to None. Acknowledgement routes (unlike, undo, hide,
delete) return the decoded body untouched.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from quizzhub.components.quizz_store.models import (
    BackendStatusError,
    MalformedResponseError,
    TransportError,
)
from quizzhub.domain.entities import CommentRecord, JoinRecord, Quizz, SortOrder
from quizzhub.settings.models import Settings

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_QUIZZ_LIST = TypeAdapter(list[Quizz])


def build_client(settings: Settings) -> httpx.AsyncClient:
    backend = settings.backend
    return httpx.AsyncClient(
        base_url=str(backend.base_url),
        timeout=backend.timeout_seconds,
        headers=backend.headers,
    )


class HttpQuizzBackend:
    """
    QuizzBackendPort over HTTP.

    Pass a client to share a connection pool (or an in-process transport in
    tests); otherwise one is built from settings and closed by aclose().
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self._routes = settings.routes
        self._owns_client = client is None
        self._client = client if client is not None else build_client(settings)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpQuizzBackend:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    # --- Reads ---

    async def list_all(self) -> list[Quizz] | None:
        url = self._url(self._routes.list_all)
        return self._quizz_list("GET", url, await self._request("GET", url))

    async def list_recent_by_owner(self, owner_id: str) -> list[Quizz] | None:
        url = self._url(self._routes.list_recent_by_owner, user_id=owner_id)
        return self._quizz_list("GET", url, await self._request("GET", url))

    async def list_by_likes(self, owner_id: str, order: SortOrder) -> list[Quizz] | None:
        url = self._url(self._routes.list_by_likes, user_id=owner_id, order=order)
        return self._quizz_list("GET", url, await self._request("GET", url))

    # --- Quizzes ---

    async def create_quizz(self, name: str, description: str, owner_id: str) -> Quizz | None:
        url = self._url(self._routes.create_quizz)
        payload = await self._request(
            "POST", url, {"name": name, "description": description, "ownerId": owner_id}
        )
        return self._model("POST", url, payload, Quizz)

    async def delete_quizz(self, quizz_id: str) -> Any:
        url = self._url(self._routes.delete_quizz, quizz_id=quizz_id)
        return await self._request("DELETE", url)

    # --- Likes / Completions ---

    async def create_like(self, quizz_id: str, user_id: str) -> JoinRecord | None:
        url = self._url(self._routes.create_like)
        payload = await self._request("POST", url, {"quizzId": quizz_id, "userId": user_id})
        return self._model("POST", url, payload, JoinRecord)

    async def delete_like(self, like_id: str | None) -> Any:
        url = self._url(self._routes.delete_like, like_id=like_id)
        return await self._request("DELETE", url)

    async def create_completion(self, quizz_id: str, user_id: str) -> JoinRecord | None:
        url = self._url(self._routes.create_completion)
        payload = await self._request("POST", url, {"quizzId": quizz_id, "userId": user_id})
        return self._model("POST", url, payload, JoinRecord)

    async def delete_completion(self, completion_id: str | None) -> Any:
        url = self._url(self._routes.delete_completion, completion_id=completion_id)
        return await self._request("DELETE", url)

    # --- Per-user state ---

    async def set_hidden(self, quizz_id: str, user_id: str, hidden: bool) -> Any:
        url = self._url(self._routes.set_hidden, quizz_id=quizz_id, user_id=user_id)
        return await self._request("PUT", url, {"hidden": hidden})

    async def create_comment(self, text: str, quizz_id: str, user_id: str) -> CommentRecord | None:
        url = self._url(self._routes.create_comment)
        payload = await self._request(
            "POST", url, {"text": text, "quizzId": quizz_id, "userId": user_id}
        )
        return self._model("POST", url, payload, CommentRecord)

    # --- Plumbing ---

    @staticmethod
    def _url(template: str, **params: object) -> str:
        # A missing record id (e.g. unlike before any like) renders as "None",
        # so the backend rejects it instead of hitting the collection route.
        escaped = {key: quote(str(value), safe="") for key, value in params.items()}
        return template.format(**escaped)

    async def _request(self, method: str, url: str, body: dict[str, Any] | None = None) -> Any:
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, json=body)
        except httpx.HTTPError as e:
            raise TransportError(method, url, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise BackendStatusError(method, url, response.status_code)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(method, url, "body is not valid JSON") from e

    @staticmethod
    def _model(method: str, url: str, payload: Any, model: type[M]) -> M | None:
        if not payload:
            return None
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise MalformedResponseError(
                method, url, f"unexpected {model.__name__} shape"
            ) from e

    @staticmethod
    def _quizz_list(method: str, url: str, payload: Any) -> list[Quizz] | None:
        if not payload:
            return None
        try:
            return _QUIZZ_LIST.validate_python(payload)
        except ValidationError as e:
            raise MalformedResponseError(method, url, "unexpected quizz list shape") from e
