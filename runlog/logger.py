"""
Logging façade used by tests, page objects and API clients.

RunLogger exposes the small vocabulary test code logs with (info, warn,
error, debug, step). Each call is formatted once and fanned out to the
run-log files and, optionally, to the console.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any, TextIO

from .constants import RunLogConstants
from .formatters import RunLogFormatter
from .fs import FileSystem
from .handler import RunLogHandler
from .manager import RunLogManager

if TYPE_CHECKING:
    from .config import RunLogSettings


class RunLogger:
    """
    Logger writing to the run log, the error log and the console.

    The underlying logging.Logger is private to the instance and is not
    registered with the logging manager, so several RunLoggers (e.g. one per
    pytest session) never share handlers.

    Example:
        manager = RunLogManager("logs")
        lg = RunLogger(manager)
        lg.step("Open login page")
        lg.error("Login failed")    # also lands in test_error.log
    """

    def __init__(
        self,
        manager: RunLogManager,
        level: int = logging.DEBUG,
        console: bool = True,
        stream: TextIO | None = None,
        name: str = "runlog",
    ) -> None:
        """
        Initialize the façade.

        Args:
            manager: Run-log manager receiving every line
            level: Minimum level logged
            console: Mirror lines to the console
            stream: Console stream (defaults to sys.stdout)
            name: Logger name
        """
        self._manager = manager
        self._lg = logging.Logger(name, level)
        self._lg.propagate = False

        formatter = RunLogFormatter()
        run_handler = RunLogHandler(manager)
        run_handler.setFormatter(formatter)
        self._lg.addHandler(run_handler)

        if console:
            console_handler = logging.StreamHandler(
                stream if stream is not None else sys.stdout
            )
            console_handler.setFormatter(formatter)
            self._lg.addHandler(console_handler)

    @property
    def manager(self) -> RunLogManager:
        return self._manager

    @property
    def level(self) -> int:
        return self._lg.level

    @property
    def handlers(self) -> list[logging.Handler]:
        return list(self._lg.handlers)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._lg.info(msg, *args, **kwargs)

    def warn(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._lg.warning(msg, *args, **kwargs)

    warning = warn

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._lg.error(msg, *args, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._lg.debug(msg, *args, **kwargs)

    def step(self, step: str) -> None:
        """Log a test step at INFO level with the ``STEP:`` prefix."""
        self._lg.info("%s%s", RunLogConstants.STEP_PREFIX, step)

    def close(self) -> None:
        """Detach and close all handlers."""
        for handler in list(self._lg.handlers):
            self._lg.removeHandler(handler)
            handler.close()


def create_run_logger(
    settings: RunLogSettings | None = None,
    fs: FileSystem | None = None,
    clock: Callable[[], datetime] | None = None,
    stream: TextIO | None = None,
    name: str = "runlog",
) -> RunLogger:
    """
    Build a manager and façade from settings.

    Args:
        settings: Resolved settings (loaded from the environment if None)
        fs: Filesystem implementation for the manager
        clock: Clock used for run headers
        stream: Console stream
        name: Logger name

    Returns:
        RunLogger: Façade wired to a fresh RunLogManager
    """
    if settings is None:
        from .config import load_settings

        settings = load_settings()

    manager = RunLogManager(
        settings.log_dir,
        fs=fs,
        clock=clock,
        retained_runs=settings.retained_runs,
    )
    return RunLogger(
        manager,
        level=settings.level_no,
        console=settings.console,
        stream=stream,
        name=name,
    )
