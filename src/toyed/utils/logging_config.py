# toyed/utils/logging_config.py
"""toyed.utils.logging_config
============================

Logging setup for the toyed editor.

curses owns the terminal while the editor runs, so the primary sink is a
rotating log file rather than the console.

Handlers installed by `setup_logging`:
    - rotating ``toyed.log`` for everything at ``file_level`` and above;
    - optional stderr console handler (off by default);
    - optional rotating ``error.log`` for ERROR and CRITICAL;
    - optional ``keytrace.log`` on the ``toyed.keyevents`` logger, enabled by
      ``TOYED_KEYTRACE=1`` (usually set in ``~/.config/toyed/.env``).

Calling `setup_logging` again replaces the handlers instead of stacking them.
It never raises: problems are reported on stderr and logging continues with
whatever could be set up.

Globals:
    logger: Main application logger ("toyed").
    KEY_LOGGER: Raw key-code trace logger ("toyed.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional

logger = logging.getLogger("toyed")
KEY_LOGGER = logging.getLogger("toyed.keyevents")

LOG_FILENAME = "toyed.log"
ERROR_LOG_FILENAME = "error.log"
KEYTRACE_FILENAME = "keytrace.log"
KEYTRACE_ENV_VAR = "TOYED_KEYTRACE"

FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
CONSOLE_FORMAT = "%(levelname)-8s - %(name)-12s - %(message)s"


def _rotating_handler(
    filename: str, max_bytes: int, backup_count: int, level: int, fmt: str
) -> logging.Handler:
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)
    handler = logging.handlers.RotatingFileHandler(
        filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level)
    return handler


def _level(name: str, default: int) -> int:
    return getattr(logging, str(name).upper(), default)


def keytrace_enabled() -> bool:
    return os.environ.get(KEYTRACE_ENV_VAR, "").lower() in {"1", "true", "yes"}


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` section is read; recognised keys are
            ``file_level`` (default ``"DEBUG"``), ``console_level``
            (default ``"WARNING"``), ``log_to_console`` (default ``False``)
            and ``separate_error_log`` (default ``False``).

    Example:
        >>> setup_logging({"logging": {"file_level": "INFO", "separate_error_log": True}})
    """
    logging_config = (config or {}).get("logging", {})
    file_level = _level(logging_config.get("file_level", "DEBUG"), logging.DEBUG)

    file_handler: Optional[logging.Handler] = None
    try:
        file_handler = _rotating_handler(
            LOG_FILENAME, 2 * 1024 * 1024, 5, file_level, FILE_FORMAT
        )
    except Exception as e_fh:
        print(f"Error setting up file logger for '{LOG_FILENAME}': {e_fh}.", file=sys.stderr)
        fallback = os.path.join(tempfile.gettempdir(), LOG_FILENAME)
        try:
            file_handler = _rotating_handler(fallback, 2 * 1024 * 1024, 5, file_level, FILE_FORMAT)
            print(f"Logging to temporary file: '{fallback}'", file=sys.stderr)
        except Exception as e_tmp:
            print(f"File logging disabled: {e_tmp}", file=sys.stderr)

    console_handler: Optional[logging.Handler] = None
    if logging_config.get("log_to_console", False):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console_handler.setLevel(_level(logging_config.get("console_level", "WARNING"), logging.WARNING))

    error_file_handler: Optional[logging.Handler] = None
    if logging_config.get("separate_error_log", False):
        try:
            error_file_handler = _rotating_handler(
                ERROR_LOG_FILENAME, 1024 * 1024, 3, logging.ERROR, FILE_FORMAT
            )
        except Exception as e_efh:
            print(f"Error setting up separate error log '{ERROR_LOG_FILENAME}': {e_efh}.", file=sys.stderr)

    root_logger = logging.getLogger()
    root_logger.handlers = []
    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)
    root_logger.setLevel(file_level)

    # Key traces go to their own file only.
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []
    KEY_LOGGER.disabled = False
    if keytrace_enabled():
        try:
            KEY_LOGGER.addHandler(
                _rotating_handler(KEYTRACE_FILENAME, 1024 * 1024, 3, logging.DEBUG, "%(asctime)s - %(message)s")
            )
            logging.info("Key event tracing enabled, logging to '%s'.", KEYTRACE_FILENAME)
        except Exception as e_keytrace:
            logging.error(f"Failed to set up key trace logging: {e_keytrace}", exc_info=True)
            KEY_LOGGER.disabled = True
    else:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True
        logging.debug("Key event tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
