#!/usr/bin/env python3
"""
runlog CLI - inspect and drive the run-log directory from the shell.

Usage:
    runlog start              # rotate history and start a new run
    runlog start --force      # replace the current run without rotating
    runlog list               # show retained runs and their start times
    runlog show 1             # print the previous run
    runlog show --errors      # print the error log
    runlog log step "Deploy payroll API"
"""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .config import RunLogSettings, load_settings
from .exceptions import ConfigError
from .formatters import iso_timestamp
from .fs import LocalFileSystem
from .logger import RunLogger
from .manager import RunLogManager
from .output import ConsoleOutput, OutputWriter

_LOG_LEVELS = ["debug", "info", "warn", "error", "step"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runlog", description="Manage rotating test-run logs"
    )
    parser.add_argument(
        "--version", action="version", version=f"runlog {__version__}"
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="directory holding runlog.yaml and .env files (default: cwd)",
    )
    parser.add_argument(
        "--log-dir", type=Path, default=None, help="override the log directory"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    start = sub.add_parser("start", help="start a new run")
    start.add_argument(
        "--force",
        action="store_true",
        help="replace the current run file without rotating history",
    )

    sub.add_parser("list", help="list retained runs")

    show = sub.add_parser("show", help="print a run file or the error log")
    show.add_argument(
        "slot", nargs="?", type=int, default=0, help="0=current, 1=previous, ..."
    )
    show.add_argument("--errors", action="store_true", help="print the error log")

    log = sub.add_parser("log", help="append a line to the current run")
    log.add_argument("level", choices=_LOG_LEVELS)
    log.add_argument("message", nargs="+")

    return parser


def _cmd_start(
    manager: RunLogManager, args: argparse.Namespace, out: OutputWriter
) -> int:
    result = manager.rotate_run() if args.force else manager.start_run()
    if not result:
        out.write(f"runlog: run file not writable, logging to {result.value}")
        return 1
    out.write(str(result.value))
    return 0


def _cmd_list(
    manager: RunLogManager, args: argparse.Namespace, out: OutputWriter
) -> int:
    entries = manager.history()
    if not entries:
        out.write("no runs recorded")
    for entry in entries:
        started = iso_timestamp(entry.started) if entry.started else "-"
        out.write(f"{entry.slot}  {started}  {entry.path}")
    out.write(f"errors  {manager.error_log_path}")
    return 0


def _cmd_show(
    manager: RunLogManager,
    args: argparse.Namespace,
    out: OutputWriter,
    fs: LocalFileSystem,
) -> int:
    if args.errors:
        path = manager.error_log_path
    elif 0 <= args.slot <= manager.retained_runs:
        path = manager.slot_path(args.slot)
    else:
        out.write(f"runlog: slot must be between 0 and {manager.retained_runs}")
        return 2

    result = fs.read_text(path)
    if not result:
        out.write(f"runlog: cannot read {path}")
        return 1
    out.write_raw(result.value)
    return 0


def _cmd_log(
    manager: RunLogManager, args: argparse.Namespace, settings: RunLogSettings
) -> int:
    manager.resume_run()
    lg = RunLogger(manager, level=settings.level_no, console=False)
    message = " ".join(args.message)
    try:
        if args.level == "step":
            lg.step(message)
        else:
            getattr(lg, args.level)(message)
    finally:
        lg.close()
    return 0


def main(argv: Sequence[str] | None = None, out: OutputWriter | None = None) -> int:
    """Main entry point for the runlog CLI."""
    out = out if out is not None else ConsoleOutput()
    args = _build_parser().parse_args(argv)

    try:
        log_dir = args.log_dir.absolute() if args.log_dir is not None else None
        settings = load_settings(args.config_dir, log_dir=log_dir)
    except ConfigError as e:
        out.write(f"runlog: {e}")
        return 2

    fs = LocalFileSystem()
    manager = RunLogManager(
        settings.log_dir, fs=fs, retained_runs=settings.retained_runs
    )

    if args.command == "start":
        return _cmd_start(manager, args, out)
    if args.command == "list":
        return _cmd_list(manager, args, out)
    if args.command == "show":
        return _cmd_show(manager, args, out, fs)
    return _cmd_log(manager, args, settings)


if __name__ == "__main__":
    sys.exit(main())
