"""
QuizzStore component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol

from quizzhub.domain.entities import CommentRecord, JoinRecord, Quizz, SortOrder, User


class QuizzBackendPort(Protocol):
    """
    Network boundary for quizz records.

    Every method performs exactly one request. Transport failures raise
    TransportError; an empty body is returned as None. Acknowledgement-only
    routes return the decoded body as-is so callers can test its truthiness.
    """

    async def list_all(self) -> list[Quizz] | None: ...

    async def list_recent_by_owner(self, owner_id: str) -> list[Quizz] | None:
        """Owner's quizzes, newest first."""
        ...

    async def list_by_likes(self, owner_id: str, order: SortOrder) -> list[Quizz] | None:
        """Owner's quizzes ordered by like count."""
        ...

    async def create_quizz(
        self, name: str, description: str, owner_id: str
    ) -> Quizz | None: ...

    async def create_like(self, quizz_id: str, user_id: str) -> JoinRecord | None: ...

    async def delete_like(self, like_id: str | None) -> Any: ...

    async def create_completion(self, quizz_id: str, user_id: str) -> JoinRecord | None: ...

    async def delete_completion(self, completion_id: str | None) -> Any: ...

    async def set_hidden(self, quizz_id: str, user_id: str, hidden: bool) -> Any: ...

    async def create_comment(
        self, text: str, quizz_id: str, user_id: str
    ) -> CommentRecord | None: ...

    async def delete_quizz(self, quizz_id: str) -> Any:
        """Deletion confirmation (normally a boolean)."""
        ...


class CurrentUserPort(Protocol):
    """Synchronous view of the authenticated user."""

    def current(self) -> User | None:
        """Latest known user, or None before identity resolves."""
        ...
