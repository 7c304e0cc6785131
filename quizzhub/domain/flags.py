"""
Join-flag transitions for per-user quizz flags (like, completion).

A join flag tracks a server-side record linking the current user to a quizz.
It has two states:

- UNSET: no record; the cached boolean reads True ("can still like/complete").
- ACTIVE(record_id): record exists; the cached boolean reads False and the
  record id is kept so the record can be deleted later.

Invariants:
- activate() always stores the new record id.
- release() returns to UNSET but keeps the previous record id. Callers that
  delete by id after a release therefore reuse a stale id; tests pin this.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from .entities import Quizz

FlagName = Literal["like", "realise"]


class JoinStatus(Enum):
    UNSET = "unset"
    ACTIVE = "active"


@dataclass(frozen=True)
class JoinFlag:
    status: JoinStatus
    record_id: str | None = None

    @property
    def available(self) -> bool:
        """Value of the cached boolean ("can still like")."""
        return self.status is JoinStatus.UNSET


# --- Transitions (pure) ---


def activate(flag: JoinFlag, record_id: str) -> JoinFlag:
    return JoinFlag(status=JoinStatus.ACTIVE, record_id=record_id)


def release(flag: JoinFlag) -> JoinFlag:
    """Back to UNSET; the residual record id is deliberately kept."""
    return JoinFlag(status=JoinStatus.UNSET, record_id=flag.record_id)


# --- Quizz bindings ---

_ID_FIELDS: dict[str, str] = {"like": "like_id", "realise": "realise_id"}


def read_flag(quizz: Quizz, name: FlagName) -> JoinFlag:
    status = JoinStatus.ACTIVE if getattr(quizz, name) is False else JoinStatus.UNSET
    return JoinFlag(status=status, record_id=getattr(quizz, _ID_FIELDS[name]))


def write_flag(quizz: Quizz, name: FlagName, flag: JoinFlag) -> None:
    """Store a flag on a (working copy of a) quizz, in place."""
    setattr(quizz, name, flag.available)
    setattr(quizz, _ID_FIELDS[name], flag.record_id)
