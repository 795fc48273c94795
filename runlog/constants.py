"""
Constants for the run-log system.

This module contains the file names, header format and level names that make
up the on-disk contract of the run-log directory.
"""

import logging


class RunLogConstants:
    """Constants for the run-log system."""

    # File names inside the log directory
    RUN_LOG_STEM: str = "test_run"
    RUN_LOG_SUFFIX: str = ".log"
    ERROR_LOG_NAME: str = "test_error.log"

    # Default directory name (resolved against the config directory)
    DEFAULT_LOG_DIR: str = "logs"

    # Current run + two retained runs
    DEFAULT_RETAINED_RUNS: int = 2

    # Header written at the top of every run file
    HEADER_TEMPLATE: str = "=== Test run started: {timestamp} ==="
    HEADER_PATTERN: str = r"^=== Test run started: (?P<timestamp>\S+) ===$"

    # Prefix used by step() messages
    STEP_PREFIX: str = "STEP: "

    # Level names as they appear in log lines
    LEVEL_LABELS: dict[int, str] = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "ERROR",
    }

    # Level names accepted from configuration
    LEVEL_NAMES: dict[str, int] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    # Environment handling
    ENV_PREFIX: str = "RUNLOG_"
    ENV_NAME_VAR: str = "TEST_ENV"
    DEFAULT_ENV: str = "local"
    DOTENV_NAME: str = ".env"
    YAML_CONFIG_NAME: str = "runlog.yaml"
    YAML_SECTION: str = "runlog"
