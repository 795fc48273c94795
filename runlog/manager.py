"""
Run-log lifecycle management.

RunLogManager keeps a bounded history of per-run log files next to a single
append-only error log:

    test_run.log      current run, overwritten by each start_run()
    test_run.1.log    previous run
    test_run.2.log    run before that, deleted on the next rotation
    test_error.log    every error of every run, never rotated

None of the public operations raise. Filesystem failures degrade the result
(fewer retained files, or writes routed to the error log) and are reported
back as FsResult values.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .constants import RunLogConstants
from .formatters import iso_timestamp, parse_iso_timestamp
from .fs import FileSystem, FsResult, LocalFileSystem

_HEADER_RE = re.compile(RunLogConstants.HEADER_PATTERN)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RunLogState:
    """Mutable state owned by a RunLogManager."""

    error_log_path: Path
    log_directory: Path | None = None
    current_run_path: Path | None = None


@dataclass(frozen=True)
class RunLogEntry:
    """A run file found on disk, as reported by RunLogManager.history()."""

    slot: int
    path: Path
    started: datetime | None


class RunLogManager:
    """
    Owns the run-log directory, its rotation and its append operations.

    Construct one per process and pass it to whatever needs to log; there is
    no global instance. No locking is performed, so two processes sharing a
    log directory may interleave rotations.

    Example:
        manager = RunLogManager(Path("logs"))
        manager.start_run()
        manager.append_to_run("[...] [INFO] suite started")
    """

    def __init__(
        self,
        log_dir: str | Path,
        fs: FileSystem | None = None,
        clock: Callable[[], datetime] | None = None,
        retained_runs: int = RunLogConstants.DEFAULT_RETAINED_RUNS,
    ) -> None:
        """
        Initialize the manager.

        Args:
            log_dir: Directory holding all log artifacts
            fs: Filesystem implementation (defaults to LocalFileSystem)
            clock: Callable returning the current time, used for run headers
            retained_runs: Number of historical run files kept besides the current one
        """
        if retained_runs < 0:
            raise ValueError(f"retained_runs must be >= 0, got {retained_runs}")
        self._log_dir = Path(log_dir)
        self._fs: FileSystem = fs if fs is not None else LocalFileSystem()
        self._clock = clock or _utc_now
        self._retained_runs = retained_runs
        self._state = RunLogState(
            error_log_path=self._log_dir / RunLogConstants.ERROR_LOG_NAME
        )

    @property
    def state(self) -> RunLogState:
        return self._state

    @property
    def retained_runs(self) -> int:
        return self._retained_runs

    @property
    def error_log_path(self) -> Path:
        return self._state.error_log_path

    @property
    def current_run_path(self) -> Path | None:
        return self._state.current_run_path

    def slot_path(self, slot: int) -> Path:
        """
        Get the path of a run slot.

        Args:
            slot: 0 for the current run, 1 for the previous run, and so on

        Returns:
            Path: Path of the slot's file (which may not exist)
        """
        if slot < 0:
            raise ValueError(f"slot must be >= 0, got {slot}")
        suffix = RunLogConstants.RUN_LOG_SUFFIX
        if slot == 0:
            return self._log_dir / f"{RunLogConstants.RUN_LOG_STEM}{suffix}"
        return self._log_dir / f"{RunLogConstants.RUN_LOG_STEM}.{slot}{suffix}"

    def ensure_log_directory(self) -> Path:
        """
        Make sure the log directory exists, creating it if needed.

        Creation failures are ignored; later writes fail on their own and are
        ignored there too. Only the first call touches the filesystem.

        Returns:
            Path: The log directory
        """
        if self._state.log_directory is None:
            if not self._fs.exists(self._log_dir):
                self._fs.make_dirs(self._log_dir)
            self._state.log_directory = self._log_dir
        return self._state.log_directory

    def start_run(self, force_new: bool = False) -> FsResult:
        """
        Start a new run file, rotating the previous ones out first.

        Rotation happens only when a current run file exists and force_new is
        False. The current file is then overwritten with a header line. If
        that write fails, or anything unexpected happens, subsequent run
        appends go to the error log instead.

        Args:
            force_new: Replace the current file without rotating history

        Returns:
            FsResult: ok if the run file was created; value is the active path
        """
        try:
            self.ensure_log_directory()
            current = self.slot_path(0)
            if not force_new and self._fs.exists(current):
                self._rotate()

            header = RunLogConstants.HEADER_TEMPLATE.format(
                timestamp=iso_timestamp(self._clock())
            )
            result = self._fs.write_text(current, header + "\n")
            if result:
                self._state.current_run_path = current
                return FsResult.success(current)

            self._state.current_run_path = self.error_log_path
            return FsResult.failure(result.error, value=self.error_log_path)
        except Exception as e:
            self._state.current_run_path = self.error_log_path
            return FsResult.failure(e, value=self.error_log_path)

    def rotate_run(self) -> FsResult:
        """Force a brand-new current run file without rotating history."""
        return self.start_run(force_new=True)

    def resume_run(self) -> FsResult:
        """
        Continue the run already on disk, or start one if there is none.

        Used by short-lived processes (the CLI) that append to a run started
        elsewhere and must not rotate it away.

        Returns:
            FsResult: ok with the active path; the start_run() outcome otherwise
        """
        try:
            self.ensure_log_directory()
            current = self.slot_path(0)
            if self._fs.exists(current):
                self._state.current_run_path = current
                return FsResult.success(current)
        except Exception as e:
            self._state.current_run_path = self.error_log_path
            return FsResult.failure(e, value=self.error_log_path)
        return self.start_run()

    def append_to_run(self, message: str) -> FsResult:
        """
        Append a line to the active run file, starting a run if none is active.

        Args:
            message: Line to append (a newline is added)

        Returns:
            FsResult: Outcome of the write; never raises
        """
        try:
            if self._state.current_run_path is None:
                self.start_run()
            return self._fs.append_text(self._state.current_run_path, message + "\n")
        except Exception as e:
            return FsResult.failure(e)

    def append_to_error_log(self, message: str) -> FsResult:
        """
        Append a line to the persistent error log.

        Args:
            message: Line to append (a newline is added)

        Returns:
            FsResult: Outcome of the write; never raises
        """
        try:
            self.ensure_log_directory()
            return self._fs.append_text(self.error_log_path, message + "\n")
        except Exception as e:
            return FsResult.failure(e)

    def history(self) -> list[RunLogEntry]:
        """
        List existing run files, newest first.

        Returns:
            list[RunLogEntry]: One entry per existing slot, with the start time
            parsed from its header (None when the header is unreadable)
        """
        entries = []
        for slot in range(self._retained_runs + 1):
            path = self.slot_path(slot)
            if self._fs.exists(path):
                entries.append(RunLogEntry(slot, path, self._read_started(path)))
        return entries

    def _read_started(self, path: Path) -> datetime | None:
        result = self._fs.read_text(path)
        if not result or not result.value:
            return None
        match = _HEADER_RE.match(result.value.splitlines()[0])
        if match is None:
            return None
        return parse_iso_timestamp(match.group("timestamp"))

    def _rotate(self) -> None:
        """Shift every run file one slot older, dropping the oldest."""
        oldest = self.slot_path(self._retained_runs)
        if self._retained_runs > 0 and self._fs.exists(oldest):
            self._fs.remove(oldest)

        for slot in range(self._retained_runs - 1, 0, -1):
            src = self.slot_path(slot)
            if self._fs.exists(src):
                self._move(src, self.slot_path(slot + 1))

        if self._retained_runs > 0:
            self._move(self.slot_path(0), self.slot_path(1))

    def _move(self, src: Path, dst: Path) -> FsResult:
        """Rename src to dst, falling back to copy-then-delete."""
        result = self._fs.rename(src, dst)
        if result:
            return result
        copied = self._fs.copy(src, dst)
        if not copied:
            return copied
        self._fs.remove(src)
        return copied
