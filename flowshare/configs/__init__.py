"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from flowshare.configs.database import DatabaseSettings
from flowshare.configs.editor import EditorSettings
from flowshare.configs.settings import Settings, get_settings

__all__ = ["DatabaseSettings", "EditorSettings", "Settings", "get_settings"]
