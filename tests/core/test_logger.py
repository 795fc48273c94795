"""Tests for the RunLogger façade."""

import logging
import re

import pytest

from runlog import RunLogger, RunLogHandler, create_run_logger, load_settings
from tests.fixtures.logging import FAKE_LOG_DIR
from tests.helpers.clock import ticking_clock
from tests.helpers.fake_fs import FakeFileSystem

CURRENT = FAKE_LOG_DIR / "test_run.log"
ERRORS = FAKE_LOG_DIR / "test_error.log"
LINE = re.compile(
    r"^\[\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z\] \[(INFO|WARN|ERROR|DEBUG)\] .*$"
)


def body_lines(fs: FakeFileSystem):
    """Run-file lines after the header."""
    return fs.files[CURRENT].splitlines()[1:]


@pytest.fixture
def lg(fake_manager, console_stream):
    logger = RunLogger(fake_manager, stream=console_stream)
    yield logger
    logger.close()


@pytest.mark.unit
class TestRunLogger:
    """Tests for RunLogger."""

    def test_info_written_to_run_and_console(self, lg, fake_fs, console_stream):
        lg.info("GET Request to: /employee")

        [line] = body_lines(fake_fs)
        assert LINE.match(line)
        assert line.endswith("[INFO] GET Request to: /employee")
        assert console_stream.getvalue() == line + "\n"

    def test_step_prefix(self, lg, fake_fs):
        lg.step("Navigating to URL: /login")
        assert body_lines(fake_fs)[0].endswith("[INFO] STEP: Navigating to URL: /login")

    def test_levels(self, lg, fake_fs):
        lg.debug("d")
        lg.info("i")
        lg.warn("w")
        lg.warning("w2")
        lg.error("e")

        labels = [re.search(r"\] \[(\w+)\] ", l).group(1) for l in body_lines(fake_fs)]
        assert labels == ["DEBUG", "INFO", "WARN", "WARN", "ERROR"]

    def test_only_errors_reach_error_log(self, lg, fake_fs):
        lg.info("fine")
        lg.warn("hmm")
        lg.error("Response Status: 500")

        [line] = fake_fs.files[ERRORS].splitlines()
        assert line.endswith("[ERROR] Response Status: 500")
        assert body_lines(fake_fs)[-1] == line

    def test_first_line_starts_run(self, lg, fake_fs):
        lg.info("hello")
        assert fake_fs.files[CURRENT].startswith("=== Test run started: ")

    def test_printf_style_args(self, lg, fake_fs):
        lg.info("Response Status: %d", 201)
        assert body_lines(fake_fs)[0].endswith("Response Status: 201")

    def test_level_filtering(self, fake_manager, fake_fs, console_stream):
        lg = RunLogger(fake_manager, level=logging.INFO, stream=console_stream)
        lg.debug("Request Body: {}")
        lg.info("kept")
        lg.close()

        assert [l.rsplit("] ", 1)[1] for l in body_lines(fake_fs)] == ["kept"]

    def test_console_disabled(self, fake_manager, console_stream):
        lg = RunLogger(fake_manager, console=False, stream=console_stream)
        lg.info("quiet")

        assert [type(h) for h in lg.handlers] == [RunLogHandler]
        assert console_stream.getvalue() == ""

    def test_close_detaches_handlers(self, lg, fake_fs):
        lg.close()
        lg.info("after close")

        assert lg.handlers == []
        assert CURRENT not in fake_fs.files

    def test_not_registered_globally(self, lg):
        assert "runlog" not in logging.root.manager.loggerDict

    def test_denied_filesystem_does_not_raise(self, fake_manager, fake_fs):
        fake_fs.deny_all_writes()
        lg = RunLogger(fake_manager, console=False)

        lg.error("nowhere to go")

        assert fake_fs.files == {}


@pytest.mark.unit
class TestCreateRunLogger:
    """Tests for create_run_logger()."""

    def test_wires_settings(self, tmp_path, console_stream):
        settings = load_settings(
            tmp_path, environ={}, level="info", retained_runs=1, console=False
        )
        fs = FakeFileSystem()

        lg = create_run_logger(settings, fs=fs, clock=ticking_clock())

        assert lg.level == logging.INFO
        assert lg.manager.retained_runs == 1
        assert lg.manager.slot_path(0) == tmp_path / "logs" / "test_run.log"
        assert len(lg.handlers) == 1
        lg.close()

    def test_console_stream(self, tmp_path, console_stream):
        settings = load_settings(tmp_path, environ={})
        lg = create_run_logger(
            settings, fs=FakeFileSystem(), clock=ticking_clock(), stream=console_stream
        )

        lg.info("mirrored")
        lg.close()

        assert console_stream.getvalue().endswith("[INFO] mirrored\n")
