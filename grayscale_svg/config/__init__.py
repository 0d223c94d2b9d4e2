"""Configuration files (YAML) and the helpers that load them."""

from .manager import ConfigManager, get_user_config_dir

__all__ = [
    "ConfigManager",
    "get_user_config_dir",
]
