"""
Latest-value broadcast stream.

Multicast, synchronous fan-out: publish() notifies every active subscriber in
subscription order before returning. With replay enabled, a new subscriber
immediately receives the latest value (if any has been published).

Subscriber callbacks never break a publisher: exceptions are logged and the
remaining subscribers are still notified.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()


class Subscription:
    """Handle returned by subscribe(); stops notifications for one subscriber."""

    def __init__(self, detach: Callable[[], None]) -> None:
        self._detach: Callable[[], None] | None = detach

    @property
    def closed(self) -> bool:
        return self._detach is None

    def unsubscribe(self) -> None:
        if self._detach is not None:
            self._detach()
            self._detach = None

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc: object) -> None:
        self.unsubscribe()


class LatestValueStream(Generic[T]):
    def __init__(self, name: str, replay: bool = True) -> None:
        self.name = name
        self._replay = replay
        self._value: object = _UNSET
        self._subscribers: dict[int, Callable[[T], None]] = {}
        self._next_key = 0

    @property
    def has_value(self) -> bool:
        return self._value is not _UNSET

    @property
    def value(self) -> T | None:
        """Latest published value, None while unset."""
        if self._value is _UNSET:
            return None
        return self._value  # type: ignore[return-value]

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        key = self._next_key
        self._next_key += 1
        self._subscribers[key] = callback

        if self._replay and self._value is not _UNSET:
            self._deliver(callback, self._value)  # type: ignore[arg-type]

        return Subscription(lambda: self._subscribers.pop(key, None))

    def publish(self, value: T) -> None:
        self._value = value
        # Copy: callbacks may unsubscribe while we iterate.
        for callback in list(self._subscribers.values()):
            self._deliver(callback, value)

    def _deliver(self, callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception("Subscriber of %s failed", self.name)
