"""
QuizzStore component - Reactive client-side cache of quizz records.

Holds the latest known collection of quizzes and keeps it in step with the
backend. Each operation performs exactly one round trip and then transforms a
working copy of the cache and republishes it.

Per call: Idle -> SnapshotTaken -> RequestInFlight -> Applied | Failed.
Failed (transport error) re-raises and never touches the cache.

Invariants:
- Fetches replace the cache wholesale, except on a falsy response.
- The cache means "whatever the last fetch asked for", not the server state.
- Falsy responses are returned as-is and leave the cache untouched.
- A patch whose target is not cached is a logged no-op (nothing published).
- Mutations are not serialized against each other. create, add_comment and
  delete rebuild from the snapshot taken before their request; the flag
  toggles read the cache fresh when the response arrives.
- like/unlike and mark_done/undo_done go through the join-flag table;
  unlike and undo_done keep the residual record id.
- set_hidden always marks the cached entry hidden, whatever it sent.
- add_comment publishes twice: append to the target, then the raw comment
  prepended as a top-level entry. The second publication keeps the append.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, cast, get_args

from quizzhub.core.stream import Subscription
from quizzhub.domain.entities import CacheEntry, CommentRecord, Quizz, SortOrder
from quizzhub.domain.flags import FlagName, activate, read_flag, release, write_flag

from ._cache import QuizzCache, find_quizz_index
from .models import IdentityUnavailableError, PublishEvent, PublishReason
from .ports import CurrentUserPort, QuizzBackendPort

logger = logging.getLogger(__name__)

SORT_ORDERS: tuple[str, ...] = get_args(SortOrder)


class QuizzStore:
    def __init__(
        self,
        backend: QuizzBackendPort,
        current_user: CurrentUserPort | None = None,
    ) -> None:
        self._backend = backend
        self._current_user = current_user
        self._cache = QuizzCache()

    # --- Accessors ---

    @property
    def quizzs(self) -> QuizzCache:
        """Subscribable cache stream; replays the latest value to new subscribers."""
        return self._cache

    @property
    def value(self) -> tuple[CacheEntry, ...] | None:
        return self._cache.value

    def subscribe(self, callback: Callable[[tuple[CacheEntry, ...]], None]) -> Subscription:
        return self._cache.subscribe(callback)

    def subscribe_events(self, callback: Callable[[PublishEvent], None]) -> Subscription:
        return self._cache.subscribe_events(callback)

    # --- Fetch ---

    async def fetch_all(self) -> list[Quizz] | None:
        quizzs = await self._backend.list_all()
        self._replace_if_truthy(quizzs, "fetch_all")
        return quizzs

    async def fetch_completed(self, user_id: str | None = None) -> list[Quizz] | None:
        """
        Cache only the user's entries flagged realise=True (newest first).

        Returns the unfiltered response.
        """
        owner_id = self._acting_user_id(user_id, "fetch_completed")
        quizzs = await self._backend.list_recent_by_owner(owner_id)
        if quizzs:
            completed = [quizz for quizz in quizzs if quizz.realise is True]
            logger.info(
                "fetch_completed: %d of %d quizzes kept", len(completed), len(quizzs)
            )
            self._cache.replace(completed, "fetch")
        else:
            logger.info("fetch_completed: empty response, cache kept")
        return quizzs

    async def fetch_by_popularity(
        self, sort_order: SortOrder = "desc", user_id: str | None = None
    ) -> list[Quizz] | None:
        if sort_order not in SORT_ORDERS:
            raise ValueError(f"sort_order must be one of {SORT_ORDERS}, got {sort_order!r}")
        owner_id = self._acting_user_id(user_id, "fetch_by_popularity")
        quizzs = await self._backend.list_by_likes(owner_id, sort_order)
        self._replace_if_truthy(quizzs, "fetch_by_popularity")
        return quizzs

    # --- Create / Delete ---

    async def create(
        self, name: str, description: str, user_id: str | None = None
    ) -> Quizz | None:
        owner_id = self._acting_user_id(user_id, "create")
        snapshot = self._cache.snapshot()

        created = await self._backend.create_quizz(name, description, owner_id)
        if not created:
            logger.warning("create: backend returned %r, cache kept", created)
            return None

        self._cache.replace([created, *snapshot], "create")
        return created

    async def delete(self, quizz: Quizz) -> Any:
        """
        Delete a quizz and drop it from the pre-request snapshot.

        The confirmation is returned without being inspected; only a transport
        error prevents the local removal.
        """
        snapshot = self._cache.snapshot()

        confirmation = await self._backend.delete_quizz(quizz.id)

        index = find_quizz_index(snapshot, quizz.id)
        if index is None:
            logger.warning("delete: quizz %s not cached, nothing removed", quizz.id)
            return confirmation

        del snapshot[index]
        self._cache.replace(snapshot, "delete")
        return confirmation

    # --- Like / Completion ---

    async def like(self, quizz: Quizz, user_id: str | None = None) -> Any:
        acting = self._acting_user_id(user_id, "like")
        record = await self._backend.create_like(quizz.id, acting)
        if not record:
            return self._falsy("like", record)
        return self._toggle_flag(quizz.id, "like", "like", record.id)

    async def unlike(self, quizz: Quizz) -> Any:
        response = await self._backend.delete_like(quizz.like_id)
        if not response:
            return self._falsy("unlike", response)
        return self._toggle_flag(quizz.id, "like", "unlike", None)

    async def mark_done(self, quizz: Quizz, user_id: str | None = None) -> Any:
        acting = self._acting_user_id(user_id, "mark_done")
        record = await self._backend.create_completion(quizz.id, acting)
        if not record:
            return self._falsy("mark_done", record)
        return self._toggle_flag(quizz.id, "realise", "mark_done", record.id)

    async def undo_done(self, quizz: Quizz) -> Any:
        response = await self._backend.delete_completion(quizz.realise_id)
        if not response:
            return self._falsy("undo_done", response)
        return self._toggle_flag(quizz.id, "realise", "undo_done", None)

    # --- Hide ---

    async def set_hidden(self, quizz: Quizz, hidden: bool, user_id: str | None = None) -> Any:
        """Send the requested flag; the cached entry is marked hidden either way."""
        acting = self._acting_user_id(user_id, "set_hidden")
        response = await self._backend.set_hidden(quizz.id, acting, hidden)
        if not response:
            return self._falsy("set_hidden", response)

        def mark_hidden(target: Quizz) -> None:
            target.hidden = True

        return self._patch(quizz.id, "hide", mark_hidden)

    # --- Comments ---

    async def add_comment(
        self, text: str, quizz_id: str, user_id: str | None = None
    ) -> CommentRecord | None:
        acting = self._acting_user_id(user_id, "add_comment")
        snapshot = self._cache.snapshot()

        comment = await self._backend.create_comment(text, quizz_id, acting)
        if not comment:
            logger.warning("add_comment: backend returned %r, cache kept", comment)
            return None

        def append_comment(target: Quizz) -> None:
            target.comments.append(comment)

        self._patch(quizz_id, "comment_append", append_comment)

        # Second publication: the raw comment as a top-level entry on top of
        # the pre-request snapshot, which carries the appended comment too.
        index = find_quizz_index(snapshot, quizz_id)
        if index is not None:
            append_comment(cast(Quizz, snapshot[index]))
        self._cache.replace([comment, *snapshot], "comment_prepend")
        return comment

    # --- Helpers ---

    def _acting_user_id(self, user_id: str | None, operation: str) -> str:
        if user_id is not None:
            return user_id
        user = self._current_user.current() if self._current_user else None
        if user is None:
            raise IdentityUnavailableError(operation)
        return user.id

    def _replace_if_truthy(self, quizzs: list[Quizz] | None, operation: str) -> None:
        if quizzs:
            logger.info("%s: caching %d quizzes", operation, len(quizzs))
            self._cache.replace(quizzs, "fetch")
        else:
            logger.info("%s: empty response, cache kept", operation)

    def _toggle_flag(
        self,
        quizz_id: str,
        flag: FlagName,
        reason: PublishReason,
        record_id: str | None,
    ) -> list[CacheEntry]:
        def transition(target: Quizz) -> None:
            current = read_flag(target, flag)
            if record_id is None:
                write_flag(target, flag, release(current))
            else:
                write_flag(target, flag, activate(current, record_id))

        return self._patch(quizz_id, reason, transition)

    def _patch(
        self,
        quizz_id: str,
        reason: PublishReason,
        change: Callable[[Quizz], None],
    ) -> list[CacheEntry]:
        """Apply change to a fresh working copy and publish it."""
        working = self._cache.snapshot()
        index = find_quizz_index(working, quizz_id)
        if index is None:
            logger.warning("%s: quizz %s not cached, nothing published", reason, quizz_id)
            return working

        change(cast(Quizz, working[index]))
        return list(self._cache.replace(working, reason))

    def _falsy(self, operation: str, response: Any) -> Any:
        logger.warning("%s: backend returned %r, cache kept", operation, response)
        return response
