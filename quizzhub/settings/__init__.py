from .loader import BACKEND_URL_ENV, CONFIG_PATH_ENV, load_settings
from .models import BackendSettings, RouteSettings, Settings

__all__ = [
    "load_settings",
    "CONFIG_PATH_ENV",
    "BACKEND_URL_ENV",
    "Settings",
    "BackendSettings",
    "RouteSettings",
]
