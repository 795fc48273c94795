"""
pytest plugin recording test sessions in the run log.

Enable it per invocation or from a conftest.py:

    pytest -p runlog.pytest_plugin --runlog
    pytest -p runlog.pytest_plugin --runlog --runlog-dir build/logs

    # conftest.py
    pytest_plugins = ["runlog.pytest_plugin"]

With --runlog the session starts a new run (rotating the previous ones) and
every test outcome is logged; failures also land in test_error.log. The
``run_logger`` fixture is available either way.
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from .config import load_settings
from .exceptions import ConfigError
from .logger import RunLogger, create_run_logger

_LOGGER_KEY = pytest.StashKey[RunLogger]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("runlog", "rotating test-run logs")
    group.addoption(
        "--runlog",
        action="store_true",
        default=False,
        help="start a new run log for this session and record test outcomes",
    )
    group.addoption(
        "--runlog-dir",
        default=None,
        help="directory for run and error logs (default: from runlog settings)",
    )


def _make_logger(config: pytest.Config) -> RunLogger:
    """Build a RunLogger from settings found in the pytest rootdir."""
    log_dir = config.getoption("runlog_dir")
    try:
        settings = load_settings(
            config.rootpath,
            log_dir=Path(log_dir).absolute() if log_dir else None,
            console=False,
        )
    except ConfigError as e:
        raise pytest.UsageError(f"runlog: {e}") from e
    return create_run_logger(settings, name="runlog.pytest")


class RunLogRecorder:
    """Plugin object logging session and test events to a RunLogger."""

    def __init__(self, lg: RunLogger) -> None:
        self.lg = lg

    def pytest_runtest_logstart(self, nodeid: str) -> None:
        self.lg.step(f"Running {nodeid}")

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        if report.skipped:
            self.lg.warn(f"SKIPPED {report.nodeid}")
        elif report.failed:
            if report.when == "call":
                self.lg.error(f"FAILED {report.nodeid} ({report.duration:.3f}s)")
            else:
                self.lg.error(f"ERROR at {report.when} of {report.nodeid}")
            if report.longreprtext:
                self.lg.debug(report.longreprtext)
        elif report.when == "call":
            self.lg.info(f"PASSED {report.nodeid} ({report.duration:.3f}s)")

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        self.lg.info(
            f"Test session finished: {session.testscollected} collected, "
            f"{session.testsfailed} failed, exit status {int(exitstatus)}"
        )


@pytest.hookimpl(trylast=True)
def pytest_configure(config: pytest.Config) -> None:
    if not config.getoption("runlog"):
        return

    lg = _make_logger(config)
    lg.manager.start_run()
    lg.info(f"Test session started in {config.rootpath}")
    config.stash[_LOGGER_KEY] = lg
    config.pluginmanager.register(RunLogRecorder(lg), "runlog-recorder")


def pytest_unconfigure(config: pytest.Config) -> None:
    lg = config.stash.get(_LOGGER_KEY, None)
    if lg is not None:
        lg.close()
        del config.stash[_LOGGER_KEY]


@pytest.fixture(scope="session")
def run_logger(request: pytest.FixtureRequest) -> Generator[RunLogger, None, None]:
    """
    Session-wide RunLogger.

    Shares the session logger when --runlog is given; otherwise builds one on
    first use, which starts (and rotates) a run on its first log line.
    """
    lg = request.config.stash.get(_LOGGER_KEY, None)
    if lg is not None:
        yield lg
        return

    lg = _make_logger(request.config)
    try:
        yield lg
    finally:
        lg.close()
