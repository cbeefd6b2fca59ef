"""
Central configuration for the extractor.

Values come from environment variables (a local .env file is loaded by the
CLI via python-dotenv):
  - WATER_REPORT_DATA_DIR (default: ~/.water-report)
  - WATER_REPORT_LOG_LEVEL (default: INFO)
  - WATER_REPORT_LOG_DIR (default: ~/.water-report/logs)
  - WATER_REPORT_DEFAULT_FILE_NAME (default: uploaded.pdf)
"""

import os
from pathlib import Path

from .constants import DEFAULT_FILE_NAME


def get_data_dir() -> Path:
    """
    Get the local data directory path.

    Uses WATER_REPORT_DATA_DIR environment variable if set, otherwise defaults
    to ~/.water-report/

    Returns:
        Path to data directory
    """
    env_path = os.environ.get("WATER_REPORT_DATA_DIR")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return Path.home() / ".water-report"


def get_log_dir() -> Path:
    """Get the log file directory."""
    env_path = os.environ.get("WATER_REPORT_LOG_DIR")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return get_data_dir() / "logs"


def get_log_level() -> str:
    """Get the configured log level name (DEBUG, INFO, WARNING, ERROR)."""
    return os.environ.get("WATER_REPORT_LOG_LEVEL", "INFO").upper()


def get_default_file_name() -> str:
    """Get the file name reported for PDFs supplied as raw bytes."""
    return os.environ.get("WATER_REPORT_DEFAULT_FILE_NAME") or DEFAULT_FILE_NAME
