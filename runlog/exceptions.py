"""
Exception hierarchy for the run-log package.

Only setup-time code raises these. The run-log manager itself never raises to
its callers; filesystem failures travel as FsResult values instead.
"""

from typing import Any


class RunLogError(Exception):
    """
    Base exception for all run-log errors.

    Example:
        try:
            settings = load_settings()
        except RunLogError as e:
            print(f"runlog: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(RunLogError):
    """
    Configuration-related errors.

    Examples:
        - Unreadable or malformed runlog.yaml
        - Invalid log level name
        - Negative retained run count
    """

    pass

