# Settings package
from core.settings.modules import AppSettings, InwxSettings, get_app_settings

__all__ = ["get_app_settings", "AppSettings", "InwxSettings"]
