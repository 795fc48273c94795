"""
Logging handler that writes records into the run-log files.

Bridges the standard logging machinery to RunLogManager: every record goes to
the active run file, and records at ERROR or above are also appended to the
persistent error log.
"""

import logging

from .manager import RunLogManager


class RunLogHandler(logging.Handler):
    """
    Handler forwarding formatted records to a RunLogManager.

    The manager never raises, so the only failures that reach handleError()
    are formatting errors in the record itself.
    """

    def __init__(
        self,
        manager: RunLogManager,
        level: int = logging.NOTSET,
        error_level: int = logging.ERROR,
    ) -> None:
        """
        Initialize run-log handler.

        Args:
            manager: Run-log manager receiving the formatted lines
            level: Minimum level handled
            error_level: Minimum level also copied to the error log
        """
        super().__init__(level)
        self.manager = manager
        self.error_level = error_level

    def emit(self, record: logging.LogRecord) -> None:
        """Append a log record to the run file (and the error log if severe)."""
        try:
            line = self.format(record)
        except Exception:
            self.handleError(record)
            return

        self.manager.append_to_run(line)
        if record.levelno >= self.error_level:
            self.manager.append_to_error_log(line)
