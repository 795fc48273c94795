"""
Rotating run logs for test-automation suites.

Keeps the current test run's log plus a short history of previous runs, and a
persistent error log collecting every error across runs:

    from runlog import RunLogManager, RunLogger

    manager = RunLogManager("logs")
    manager.start_run()
    lg = RunLogger(manager)
    lg.step("Login with valid credentials")
"""

from importlib.metadata import PackageNotFoundError, version

from .config import RunLogSettings, load_settings
from .constants import RunLogConstants
from .exceptions import ConfigError, RunLogError
from .formatters import RunLogFormatter, iso_timestamp
from .fs import FileSystem, FsResult, LocalFileSystem
from .handler import RunLogHandler
from .logger import RunLogger, create_run_logger
from .manager import RunLogEntry, RunLogManager, RunLogState

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("runlog")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

__all__ = [
    "__version__",
    # Core
    "RunLogManager",
    "RunLogState",
    "RunLogEntry",
    "RunLogConstants",
    # Filesystem
    "FileSystem",
    "FsResult",
    "LocalFileSystem",
    # Logging façade
    "RunLogger",
    "RunLogHandler",
    "RunLogFormatter",
    "create_run_logger",
    "iso_timestamp",
    # Configuration
    "RunLogSettings",
    "load_settings",
    # Exceptions
    "RunLogError",
    "ConfigError",
]
