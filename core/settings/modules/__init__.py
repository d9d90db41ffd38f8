# Settings modules
from .app_settings import AppSettings, get_app_settings
from .inwx_settings import InwxSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "InwxSettings",
]
