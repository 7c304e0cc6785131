"""
Single-owner quizz cache with copy-on-publish semantics.

The published value is an immutable tuple. Mutation handlers never touch it:
they take a working copy with snapshot(), change that, and hand it back to
replace(), which swaps the published reference. Two handlers working from
different snapshots can therefore overwrite each other's changes; that lost
update is observable and tested rather than hidden by aliasing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from quizzhub.core.stream import LatestValueStream, Subscription
from quizzhub.domain.entities import CacheEntry, Quizz

from .models import PublishEvent, PublishReason

logger = logging.getLogger(__name__)

Entries = tuple[CacheEntry, ...]


class QuizzCache(LatestValueStream[Entries]):
    def __init__(self) -> None:
        super().__init__("quizzs")
        self._events: LatestValueStream[PublishEvent] = LatestValueStream(
            "quizzs.events", replay=False
        )

    def snapshot(self) -> list[CacheEntry]:
        """Deep working copy of the current value ([] while unset)."""
        current = self.value or ()
        return [entry.model_copy(deep=True) for entry in current]

    def replace(self, entries: Sequence[CacheEntry], reason: PublishReason) -> Entries:
        published = tuple(entries)
        logger.debug("Publishing %d quizz entries (%s)", len(published), reason)
        self.publish(published)
        self._events.publish(PublishEvent(reason=reason, entries=published))
        return published

    def subscribe_events(self, callback: Callable[[PublishEvent], None]) -> Subscription:
        """Publications with their reason; no replay."""
        return self._events.subscribe(callback)


def find_quizz_index(entries: Sequence[CacheEntry], quizz_id: str) -> int | None:
    """Position of the Quizz with this id, None if absent."""
    for index, entry in enumerate(entries):
        if isinstance(entry, Quizz) and entry.id == quizz_id:
            return index
    return None
