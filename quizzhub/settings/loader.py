from pathlib import Path

import yaml
from pydantic import ValidationError

from quizzhub.settings.adapters import (
    EnvironmentPort,
    default_config_path,
    default_environment,
)
from quizzhub.settings.models import Settings

CONFIG_PATH_ENV = "QUIZZHUB_CONFIG"
BACKEND_URL_ENV = "QUIZZHUB_BACKEND_URL"


def resolve_config_path(
    path: Path | None = None, env: EnvironmentPort = default_environment
) -> Path:
    """Explicit path first, then $QUIZZHUB_CONFIG, then ./quizzhub.yaml."""
    if path is not None:
        return path
    from_env = env.get(CONFIG_PATH_ENV)
    if from_env:
        return Path(from_env)
    return default_config_path()


def load_settings(
    path: Path | None = None, env: EnvironmentPort = default_environment
) -> Settings:
    """
    Load and validate the settings file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    path = resolve_config_path(path, env)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in settings file: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Settings file must contain a mapping at top level")

    base_url = env.get(BACKEND_URL_ENV)
    if base_url:
        if not isinstance(data.get("backend"), dict):
            data["backend"] = {}
        data["backend"]["base_url"] = base_url

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        # Re-raise with a clear message for the caller/logs
        raise ValueError(f"Settings validation failed:\n{e}") from e
