"""
File system and environment adapters for settings loading.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol


class EnvironmentPort(Protocol):
    def get(self, key: str, default: str | None = None) -> str | None: ...


class OsEnvironmentAdapter:
    """Adapter for OS environment variables."""

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get an environment variable."""
        return os.environ.get(key, default)


class DictEnvironmentAdapter:
    """Fixed environment, for tests."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(key, default)


def default_config_path() -> Path:
    return Path("quizzhub.yaml")


default_environment = OsEnvironmentAdapter()
