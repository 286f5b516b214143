"""Configuration system for LangVec."""

from .settings import Settings, configure_logging, get_settings, load_settings

__all__ = ["Settings", "configure_logging", "get_settings", "load_settings"]
