"""Tests for RunLogHandler."""

import logging
from unittest.mock import Mock

import pytest

from runlog.formatters import RunLogFormatter
from runlog.handler import RunLogHandler


def make_record(level: int, msg: str, *args) -> logging.LogRecord:
    return logging.LogRecord("test", level, __file__, 1, msg, args, None)


@pytest.fixture
def manager():
    return Mock()


@pytest.fixture
def handler(manager):
    h = RunLogHandler(manager)
    h.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    return h


@pytest.mark.unit
class TestRunLogHandler:
    """Test RunLogHandler routing."""

    @pytest.mark.parametrize("level", [logging.DEBUG, logging.INFO, logging.WARNING])
    def test_non_errors_only_reach_run_log(self, handler, manager, level):
        handler.handle(make_record(level, "hello"))

        manager.append_to_run.assert_called_once()
        manager.append_to_error_log.assert_not_called()

    @pytest.mark.parametrize("level", [logging.ERROR, logging.CRITICAL])
    def test_errors_reach_both_logs(self, handler, manager, level):
        handler.handle(make_record(level, "boom"))

        line = f"{logging.getLevelName(level)} boom"
        manager.append_to_run.assert_called_once_with(line)
        manager.append_to_error_log.assert_called_once_with(line)

    def test_custom_error_level(self, manager):
        handler = RunLogHandler(manager, error_level=logging.WARNING)
        handler.setFormatter(RunLogFormatter())

        handler.handle(make_record(logging.WARNING, "careful"))

        manager.append_to_error_log.assert_called_once()

    def test_handler_level_filters(self, manager):
        lg = logging.Logger("handler-level", logging.DEBUG)
        lg.addHandler(RunLogHandler(manager, level=logging.INFO))

        lg.debug("noise")
        lg.info("kept")

        manager.append_to_run.assert_called_once()

    def test_format_error_goes_to_handle_error(self, handler, manager, monkeypatch):
        handle_error = Mock()
        monkeypatch.setattr(handler, "handleError", handle_error)

        handler.handle(make_record(logging.INFO, "%d items", "not a number"))

        handle_error.assert_called_once()
        manager.append_to_run.assert_not_called()
