"""Root logger setup for the callback receiver.

Console output follows the requested level. When a log file is given, every
record down to DEBUG is also appended there, rotating at 10MB and keeping
five old files. Only the handlers installed here are ever replaced, so calling
again (the CLI group, then ``serve``) swaps the setup rather than stacking it.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from ..callback_server.config import CallbackServerConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROTATE_AT_BYTES = 10 * 1024 * 1024
ROTATED_FILES_KEPT = 5

_installed_handlers: list[logging.Handler] = []

logger = logging.getLogger(__name__)


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(
            f"Invalid log level: {level}. "
            f"Must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )
    return number


def _install(root: logging.Logger, handler: logging.Handler) -> None:
    root.addHandler(handler)
    _installed_handlers.append(handler)


def _open_log_file(path: Path, formatter: logging.Formatter) -> Optional[RotatingFileHandler]:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            filename=str(path),
            maxBytes=ROTATE_AT_BYTES,
            backupCount=ROTATED_FILES_KEPT,
            encoding="utf-8",
        )
    except OSError as e:
        logger.warning(f"Cannot write log file {path} ({e}); logging to console only")
        return None

    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """Route callback receiver logs to the console and optionally a file.

    Args:
        level: Console level name (case-insensitive)
        log_file: Rotating log file; None keeps output on the console only

    Raises:
        ValueError: If the level name is unknown
    """
    console_level = _level_number(level)
    root = logging.getLogger()

    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(formatter)
    _install(root, console)

    if log_file is not None:
        file_handler = _open_log_file(Path(log_file), formatter)
        if file_handler is not None:
            _install(root, file_handler)

    # Request lines are logged by the callback app itself
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def configure_server_logging(
    config: "CallbackServerConfig",
    verbose: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """Apply the logging part of a loaded server configuration.

    Args:
        config: Server configuration supplying ``log_level`` and ``log_path``
        verbose: Force DEBUG on the console
        log_file: Replaces ``config.log_path`` when given (``--log-file``)
    """
    configure_logging(
        level="DEBUG" if verbose else config.log_level,
        log_file=log_file or config.log_path,
    )
