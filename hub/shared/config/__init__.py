# 📄 File: hub/shared/config/__init__.py
# Settings and database configuration.

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
