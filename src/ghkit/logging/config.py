"""
Where ghkit writes its log and how verbose it is.
"""

import os
import platform
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ghkit.constants import LOG_FILE_NAME, LOG_RETENTION_DAYS, SENSITIVE_KEYS


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["LogLevel"]:
        """Level named by value (any case), None when it names none"""
        if not value:
            return None
        try:
            return cls(value.upper())
        except ValueError:
            return None


@dataclass
class LogConfig:
    """Handler setup for one process"""

    log_filename: str = f"{LOG_FILE_NAME}.log"
    log_retention_days: int = LOG_RETENTION_DAYS

    # file handler level; the console only shows warnings and worse
    default_level: LogLevel = LogLevel.INFO
    console_level: LogLevel = LogLevel.WARNING

    include_timestamps: bool = True
    include_process_info: bool = False

    # hosting API calls and git operations each get one line per call
    log_api_requests: bool = True
    log_git_operations: bool = True

    sanitize_sensitive_data: bool = True
    sensitive_keys: tuple = SENSITIVE_KEYS


def _platform_log_dir() -> Path:
    system = platform.system().lower()

    if system == "darwin":
        return Path.home() / "Library" / "Logs" / LOG_FILE_NAME

    if system == "windows":
        appdata = Path(os.environ.get("APPDATA", ""))
        root = appdata if appdata.exists() else Path.home()
        return root / LOG_FILE_NAME / "logs"

    data_home = os.environ.get("XDG_DATA_HOME")
    root = Path(data_home) if data_home else Path.home() / ".local" / "share"
    return root / LOG_FILE_NAME / "logs"


def get_log_directory() -> Path:
    """
    Platform log directory, created on demand.

    Linux honours XDG_DATA_HOME (~/.local/share/ghkit/logs), macOS uses
    ~/Library/Logs/ghkit and Windows %APPDATA%/ghkit/logs. When the directory
    cannot be created, ./logs is used instead.
    """
    log_dir = _platform_log_dir()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        log_dir = Path.cwd() / "logs"
        log_dir.mkdir(exist_ok=True)
    return log_dir


def get_log_file_path(config: Optional[LogConfig] = None) -> Path:
    return get_log_directory() / (config or LogConfig()).log_filename
