"""Current-user adapters implementing CurrentUserPort.

The store reads current() at call time, so the value seen is always the
latest one pushed, regardless of when the store was built.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from quizzhub.core.stream import LatestValueStream, Subscription
from quizzhub.domain.entities import User

logger = logging.getLogger(__name__)


class StaticCurrentUser:
    """Fixed identity - CLI sessions and tests."""

    def __init__(self, user: User | None) -> None:
        self._user = user

    def current(self) -> User | None:
        return self._user


class ObservableCurrentUser:
    """User stream fed by the session layer; latest value readable synchronously."""

    def __init__(self, initial: User | None = None) -> None:
        self._stream: LatestValueStream[User | None] = LatestValueStream("current_user")
        if initial is not None:
            self._stream.publish(initial)

    def current(self) -> User | None:
        return self._stream.value

    def set_user(self, user: User | None) -> None:
        """Push a login, user switch or logout (None)."""
        logger.info("Current user changed to %s", user.id if user else None)
        self._stream.publish(user)

    def subscribe(self, callback: Callable[[User | None], None]) -> Subscription:
        return self._stream.subscribe(callback)
