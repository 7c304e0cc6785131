from .current_user import ObservableCurrentUser, StaticCurrentUser
from .http_backend import HttpQuizzBackend, build_client

__all__ = [
    "HttpQuizzBackend",
    "build_client",
    "ObservableCurrentUser",
    "StaticCurrentUser",
]
