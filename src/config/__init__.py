"""
Configuration.

    from src.config import settings

    settings.SECRET_KEY
    settings.COVER_IMAGE_MAX_BYTES
"""

from src.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
