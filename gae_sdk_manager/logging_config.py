"""Central logging configuration for the command-line tool.

Progress messages go to stderr so operators can follow a run.  A log file is
written as well when one of two environment variables is set:

``GAE_SDK_MANAGER_LOG_FILE``
    Absolute path to the log file that should be created.

``GAE_SDK_MANAGER_LOG_DIR``
    Directory where the default log file name will be created.  Ignored when
    ``GAE_SDK_MANAGER_LOG_FILE`` is present.

Repeated calls are no-ops so the helpers can be exercised from tests.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Iterable

_LOG_FILE_ENV = "GAE_SDK_MANAGER_LOG_FILE"
_LOG_DIR_ENV = "GAE_SDK_MANAGER_LOG_DIR"
_DEFAULT_LOGNAME = "gae_sdk_manager.log"
_HANDLER_TAG = "_gae_sdk_manager_logging_handler"

_CONSOLE_FORMAT = "%(asctime)s %(message)s"
_CONSOLE_DATEFMT = "%Y/%m/%d %H:%M:%S"
_FILE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

_CONFIGURED = False
_LOG_PATH: Path | None = None
_MANAGED_HANDLERS: list[logging.Handler] = []


class LogVerbosity(str, Enum):
    """Verbosity levels accepted on the command line."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    VERBOSE = "verbose"


_VERBOSITY_LEVELS: dict[LogVerbosity, int] = {
    LogVerbosity.ERROR: logging.ERROR,
    LogVerbosity.WARNING: logging.WARNING,
    LogVerbosity.INFO: logging.INFO,
    LogVerbosity.VERBOSE: logging.DEBUG,
}

_DEFAULT_VERBOSITY = LogVerbosity.INFO
_CURRENT_VERBOSITY = _DEFAULT_VERBOSITY


def ensure_cli_logging(verbosity: LogVerbosity | str = _DEFAULT_VERBOSITY) -> Path | None:
    """Configure the root logger for a command-line run.

    Returns
    -------
    Path | None
        Location of the log file, or ``None`` when file logging is disabled.
    """

    global _CONFIGURED, _LOG_PATH

    if _CONFIGURED:
        set_log_verbosity(verbosity)
        return _LOG_PATH

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    if _should_log_to_stderr(root.handlers):
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt=_CONSOLE_DATEFMT))
        _install(root, stream_handler)

    log_path = _resolve_log_path()
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        _install(root, file_handler)

    _CONFIGURED = True
    _LOG_PATH = log_path
    set_log_verbosity(verbosity)

    if log_path is not None:
        logging.getLogger(__name__).debug("Writing logs to %s", log_path)
    return log_path


def set_log_verbosity(verbosity: LogVerbosity | str) -> None:
    """Adjust the minimum severity emitted by the managed handlers."""

    global _CURRENT_VERBOSITY

    if isinstance(verbosity, str) and not isinstance(verbosity, LogVerbosity):
        try:
            verbosity = LogVerbosity(verbosity.lower())
        except ValueError as exc:
            raise ValueError(f"Unsupported log verbosity: {verbosity}") from exc

    _CURRENT_VERBOSITY = verbosity
    for handler in _MANAGED_HANDLERS:
        handler.setLevel(_VERBOSITY_LEVELS[verbosity])


def get_log_verbosity() -> LogVerbosity:
    return _CURRENT_VERBOSITY


def _install(root: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG, True)
    root.addHandler(handler)
    _MANAGED_HANDLERS.append(handler)


def _resolve_log_path() -> Path | None:
    env_file = os.environ.get(_LOG_FILE_ENV)
    if env_file:
        return Path(env_file).expanduser()

    env_dir = os.environ.get(_LOG_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser() / _DEFAULT_LOGNAME

    return None


def _should_log_to_stderr(handlers: Iterable[logging.Handler]) -> bool:
    stderr = getattr(sys, "stderr", None)
    if stderr is None:
        return False
    for handler in handlers:
        if isinstance(handler, logging.StreamHandler) and handler.stream is stderr:
            return False
    return True


def _reset_for_tests() -> None:
    """Remove handlers installed by :func:`ensure_cli_logging`."""

    global _CONFIGURED, _LOG_PATH, _CURRENT_VERBOSITY

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root.removeHandler(handler)
            handler.close()

    _MANAGED_HANDLERS.clear()
    _CONFIGURED = False
    _LOG_PATH = None
    _CURRENT_VERBOSITY = _DEFAULT_VERBOSITY


__all__ = [
    "LogVerbosity",
    "ensure_cli_logging",
    "get_log_verbosity",
    "set_log_verbosity",
]
