"""Configuration adapters."""

from realtime_chat.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
