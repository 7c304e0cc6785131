"""Domain records and pure flag transitions."""

from .entities import CacheEntry, CommentRecord, JoinRecord, Quizz, SortOrder, User
from .flags import JoinFlag, JoinStatus, activate, read_flag, release, write_flag

__all__ = [
    "CacheEntry",
    "CommentRecord",
    "JoinRecord",
    "Quizz",
    "SortOrder",
    "User",
    "JoinFlag",
    "JoinStatus",
    "activate",
    "release",
    "read_flag",
    "write_flag",
]
