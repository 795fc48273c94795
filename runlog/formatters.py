"""
Formatters for run-log lines.

Produces the on-disk line format ``[<ISO-8601>] [<LEVEL>] <message>`` used by
both the run files and the console mirror.
"""

import logging
from datetime import datetime, timezone

from .constants import RunLogConstants


def iso_timestamp(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with millisecond precision.

    Naive datetimes are taken to be UTC already.

    Args:
        dt: Datetime to format

    Returns:
        str: Timestamp such as ``2024-01-01T00:00:00.000Z``
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_iso_timestamp(text: str) -> datetime | None:
    """Parse a timestamp produced by iso_timestamp(); None if malformed."""
    try:
        return datetime.strptime(text, "%Y-%m-%dT%H:%M:%S.%fZ").replace(
            tzinfo=timezone.utc
        )
    except ValueError:
        return None


def level_label(levelno: int) -> str:
    """Map a numeric logging level to its run-log label."""
    if levelno in RunLogConstants.LEVEL_LABELS:
        return RunLogConstants.LEVEL_LABELS[levelno]
    if levelno >= logging.ERROR:
        return "ERROR"
    if levelno >= logging.WARNING:
        return "WARN"
    if levelno >= logging.INFO:
        return "INFO"
    return "DEBUG"


class RunLogFormatter(logging.Formatter):
    """
    Formatter producing ``[timestamp] [LEVEL] message`` lines.

    Exception information, when attached to the record, follows the message
    on subsequent lines.
    """

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return iso_timestamp(datetime.fromtimestamp(record.created, timezone.utc))

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"[{self.formatTime(record)}] [{level_label(record.levelno)}] "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            line = f"{line}\n{record.exc_text}"
        return line
