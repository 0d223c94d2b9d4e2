from __future__ import annotations

"""Configuration loading and access helpers.

Loads the YAML files packaged with *grayscale_svg* (conversion defaults and
logging) and merges them with user overrides.

On Windows: ``%LOCALAPPDATA%\\GrayscaleSvg\\config\\*.yml``
On Unix: ``~/.grayscale_svg/*.yml``

Unlike the packaged files, user overrides are optional and never created
automatically. Keys missing from every file fall back to built-in defaults.
"""

import importlib.resources as pkg_resources
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager", "get_user_config_dir"]

USER_CONFIG_ENV = "GRAYSCALE_SVG_CONFIG_DIR"


def get_user_config_dir() -> Path:
    """Return the user configuration directory (honours ``GRAYSCALE_SVG_CONFIG_DIR``)."""
    override = os.environ.get(USER_CONFIG_ENV)
    if override:
        return Path(override)
    if os.name == 'nt':  # Windows
        local_appdata = os.environ.get('LOCALAPPDATA')
        if local_appdata:
            return Path(local_appdata) / "GrayscaleSvg" / "config"
        return Path.home() / "AppData" / "Local" / "GrayscaleSvg" / "config"
    return Path.home() / ".grayscale_svg"


class _Singleton(type):
    _instance: "ConfigManager" | None = None

    def __call__(cls, *args, **kwargs):  # type: ignore[no-self-use]
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance

    def reset(cls) -> None:
        """Forget the cached instance (used by tests)."""
        cls._instance = None


class ConfigManager(metaclass=_Singleton):
    """Lazy-loads and exposes configuration sections as dictionaries."""

    _DEFAULT_FILENAMES = {
        "conversion": "default_options.yml",
        "logging": "logging.yml",
    }

    def __init__(self, user_config_dir: Optional[Path] = None) -> None:
        self._user_config_dir = user_config_dir
        self._data: Dict[str, Dict[str, Any]] = {}
        self._ensure_loaded()

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def get_conversion_defaults(self) -> Dict[str, Any]:
        merged = dict(self._builtin_defaults()["conversion"])
        merged.update(self._data.get("conversion", {}))
        return merged

    def get_logging_config(self) -> Dict[str, Any]:
        return self._data.get("logging", {})

    # ------------------------------------------------------------------
    # Internal loading logic
    # ------------------------------------------------------------------
    def _ensure_loaded(self) -> None:
        if self._data:
            return  # already loaded

        startup_summary = []
        user_config_dir = self._user_config_dir or get_user_config_dir()

        for key, filename in self._DEFAULT_FILENAMES.items():
            merged_cfg: Dict[str, Any] = {}
            status = "missing"

            # 1. load packaged default
            try:
                resource = pkg_resources.files(__package__).joinpath(filename)
                with resource.open("r", encoding="utf-8") as fh:
                    packaged_data = yaml.safe_load(fh) or {}
                    merged_cfg.update(packaged_data)
                    status = "loaded"
            except (FileNotFoundError, OSError):
                logger.error("Missing packaged config for %s (%s)", key, filename)
                status = "missing"
            except yaml.YAMLError as exc:
                logger.error("Invalid packaged config for %s (%s): %s", key, filename, exc)
                status = "invalid"

            # 2. load user overrides
            user_path = user_config_dir / filename
            if user_path.exists():
                try:
                    user_data = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
                    merged_cfg.update(user_data)
                    if status == "loaded":
                        status = "loaded+overrides"
                except (OSError, yaml.YAMLError) as exc:
                    logger.error("Could not parse user config %s: %s", user_path, exc)

            self._data[key] = merged_cfg
            startup_summary.append(f"{key}: {status}")

        logger.debug("Config startup: %s", " | ".join(startup_summary))

    @staticmethod
    def _builtin_defaults() -> Dict[str, Dict[str, Any]]:
        return {
            "conversion": {
                "method": "hsl",
                "strength": 100,
                "output_prefix_hsl": "grayscale-hsl-",
                "output_prefix_luminance": "grayscale-lum-",
                "compare_page_title": "SVG Comparison: Original vs. HSL vs. Luminance",
            },
            "logging": {},
        }
