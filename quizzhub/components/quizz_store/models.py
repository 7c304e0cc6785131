"""
QuizzStore component models: error types and publish records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from quizzhub.domain.entities import CacheEntry

# --- Error Types ---


class QuizzStoreError(Exception):
    """Base quizz store error."""

    pass


class IdentityUnavailableError(QuizzStoreError):
    """No acting user: no explicit user_id and no current user."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"No current user available for '{operation}'")


class TransportError(QuizzStoreError):
    """Network round trip failed; the cache was not modified."""

    def __init__(self, method: str, url: str, reason: str) -> None:
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"{method} {url} failed: {reason}")


class BackendStatusError(TransportError):
    """Backend answered with a non-2xx status."""

    def __init__(self, method: str, url: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(method, url, f"HTTP {status_code}")


class MalformedResponseError(TransportError):
    """Response body could not be decoded into the expected shape."""

    pass


# --- Publish Records ---

PublishReason = Literal[
    "fetch",
    "create",
    "like",
    "unlike",
    "mark_done",
    "undo_done",
    "hide",
    "comment_append",
    "comment_prepend",
    "delete",
]


@dataclass(frozen=True)
class PublishEvent:
    """One cache publication, as recorded in the store's publish log."""

    reason: PublishReason
    entries: tuple[CacheEntry, ...]
