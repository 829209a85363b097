from __future__ import annotations

"""Central logging configuration for the XML configuration toolkit.

The library itself only creates module loggers; applications (such as the
``run.py`` front-end) call :func:`setup_logging` at start-up.
"""

import logging
import logging.config
import os
from typing import Any, Dict

from xmlconfig_toolkit.config import ConfigManager

__all__ = ["setup_logging"]

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int | None = None) -> None:
    """Configure logging from the ``logging`` config section.

    *level*, when given, overrides the level of the ``xmlconfig_toolkit``
    logger (e.g. ``logging.DEBUG`` for a verbose CLI run).  The packaged
    defaults are copied to the user config directory on first use.
    """
    log_dir = os.environ.get("XMLCONFIG_LOG_DIR", "logs")
    log_file = os.path.join(log_dir, "app.log")

    manager = ConfigManager()
    manager.install_user_configs()
    logging_config: Dict[str, Any] = manager.get_logging_config()
    if logging_config and isinstance(logging_config, dict) and logging_config.get("version"):
        try:
            os.makedirs(log_dir, exist_ok=True)
            if "file" in logging_config.get("handlers", {}):
                logging_config["handlers"]["file"]["filename"] = log_file
            logging.config.dictConfig(logging_config)
            logging.getLogger(__name__).debug("Logging initialised from config files")
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            _setup_minimal_logging()
            logging.getLogger(__name__).error("Invalid logging config, using console only: %s", exc)
    else:
        _setup_minimal_logging()

    if level is not None:
        logging.getLogger("xmlconfig_toolkit").setLevel(level)

    _apply_debug_overrides()


def _setup_minimal_logging() -> None:
    """Set up minimal console-only logging when config is unavailable."""
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': _FORMAT,
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'root': {
            'level': 'INFO',
            'handlers': ['console'],
        },
    }
    logging.config.dictConfig(minimal_config)


def _apply_debug_overrides() -> None:
    """Apply environment-driven module-specific debug overrides.

    ``XMLCONFIG_DEBUG_MODULES=comma,separated,logger,names`` -> DEBUG for listed loggers
    """
    extra_modules = os.environ.get('XMLCONFIG_DEBUG_MODULES', '').strip()
    targets = [m.strip() for m in extra_modules.split(',') if m.strip()]
    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        # Ensure at least one handler emits DEBUG for this logger
        has_debug_handler = any(h.level <= logging.DEBUG for h in logger.handlers)
        if not has_debug_handler:
            h = logging.StreamHandler()
            h.setLevel(logging.DEBUG)
            h.setFormatter(logging.Formatter(_FORMAT))
            logger.addHandler(h)
        logger.info("Debug override active for logger '%s'", name)
