from __future__ import annotations

"""Central logging configuration for grayscale-svg.

Import and call :func:`setup_logging` at application start-up.
"""

import copy
import logging
import logging.config
import os

from grayscale_svg.config import ConfigManager

__all__ = ["setup_logging"]

_DEBUG_MODULES_ENV = "GRAYSCALE_SVG_DEBUG_MODULES"
_LOG_DIR_ENV = "GRAYSCALE_SVG_LOG_DIR"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging from the ``logging`` YAML section.

    *verbose* switches the ``grayscale_svg`` logger and its console handler
    to DEBUG.
    """
    log_dir = os.environ.get(_LOG_DIR_ENV, "logs")
    log_file = os.path.join(log_dir, "grayscale_svg.log")

    try:
        logging_config = copy.deepcopy(ConfigManager().get_logging_config())

        if logging_config and isinstance(logging_config, dict) and logging_config.get("version"):
            # Update the filename dynamically
            if "handlers" in logging_config and "file" in logging_config["handlers"]:
                os.makedirs(log_dir, exist_ok=True)
                logging_config["handlers"]["file"]["filename"] = log_file

            logging.config.dictConfig(logging_config)
            logging.getLogger(__name__).debug("Logging initialised from config files")
        else:
            _setup_minimal_logging()
    except (OSError, ValueError, TypeError, AttributeError, ImportError) as exc:
        _setup_minimal_logging()
        logging.getLogger(__name__).error("Error loading logging config: %s", exc)

    if verbose:
        _set_debug("grayscale_svg")
    _apply_debug_overrides()


def _setup_minimal_logging() -> None:
    """Set up console-only logging when config is unavailable."""
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'WARNING',
            },
        },
        'root': {
            'level': 'WARNING',
            'handlers': ['console'],
        },
    }
    logging.config.dictConfig(minimal_config)


def _set_debug(name: str) -> None:
    target = logging.getLogger(name)
    target.setLevel(logging.DEBUG)
    # Ensure at least one handler emits DEBUG for this logger
    for h in target.handlers:
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
            h.setLevel(logging.DEBUG)
            return
    h = logging.StreamHandler()
    h.setLevel(logging.DEBUG)
    h.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    target.addHandler(h)


def _apply_debug_overrides() -> None:
    """Apply ``GRAYSCALE_SVG_DEBUG_MODULES=comma,separated,logger,names``."""
    extra_modules = os.environ.get(_DEBUG_MODULES_ENV, '').strip()
    if not extra_modules:
        return
    for name in (m.strip() for m in extra_modules.split(',')):
        if name:
            _set_debug(name)
            logging.getLogger(name).info("Debug override active for logger '%s'", name)
