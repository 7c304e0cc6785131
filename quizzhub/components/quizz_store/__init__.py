"""
QuizzStore component - Reactive client-side cache of quizz records.

Keeps one in-memory collection of quizzes synchronized with the backend
through fetch, create, like/unlike, mark-done/undo, hide, comment and delete.
"""

from .component import SORT_ORDERS, QuizzStore
from .models import (
    BackendStatusError,
    IdentityUnavailableError,
    MalformedResponseError,
    PublishEvent,
    PublishReason,
    QuizzStoreError,
    TransportError,
)
from .ports import (
    CurrentUserPort,
    QuizzBackendPort,
)

__all__ = [
    # Component
    "QuizzStore",
    "SORT_ORDERS",
    # Models
    "PublishEvent",
    "PublishReason",
    # Errors
    "QuizzStoreError",
    "IdentityUnavailableError",
    "TransportError",
    "BackendStatusError",
    "MalformedResponseError",
    # Ports
    "QuizzBackendPort",
    "CurrentUserPort",
]
