"""Core configuration and factory components."""

from prompt_engine.core.config import Settings, get_settings
from prompt_engine.core.factory import ComponentFactory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
]
