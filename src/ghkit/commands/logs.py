"""
ghkit logs: look at what ghkit recorded.
"""

import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from rich.syntax import Syntax

from ghkit.constants import LOG_APP_NAME, LOG_FILE_NAME, LOG_LINES_TO_SHOW
from ghkit.logging import get_logger, setup_logging
from ghkit.logging.config import LogConfig, get_log_directory, get_log_file_path
from ghkit.utils.console import console, create_table, error, info, warning

app = typer.Typer(help="Inspect ghkit logs")


def _matches(line: str, level: Optional[str]) -> bool:
    return not level or level.upper() in line


def _tail(log_file: Path, lines: int, level: Optional[str]) -> List[str]:
    """Last ``lines`` lines of the log mentioning level"""
    if lines <= 0:
        return []
    with open(log_file, "r", encoding="utf-8") as f:
        matching = [line for line in f if _matches(line, level)]
    return matching[-lines:]


def _follow(log_file: Path, level: Optional[str]) -> None:
    info("Following log file... (Press Ctrl+C to stop)")
    try:
        with open(log_file, "r", encoding="utf-8") as f:
            f.seek(0, 2)
            while True:
                line = f.readline()
                if not line:
                    time.sleep(0.1)
                elif _matches(line, level):
                    console.print(line.rstrip())
    except KeyboardInterrupt:
        info("\nStopped following logs.")


@app.command("show")
def show_logs(
    lines: int = typer.Option(
        LOG_LINES_TO_SHOW, "--lines", "-n", help="Number of lines to show"
    ),
    follow: bool = typer.Option(False, "--follow", "-f", help="Keep printing new lines"),
    level: Optional[str] = typer.Option(
        None, "--level", help="Only lines of this level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Print the most recent log lines"""
    setup_logging()
    logger = get_logger("ghkit.commands.logs")

    try:
        log_file = get_log_file_path()
        if not log_file.exists():
            warning(f"No log file yet. Run any {LOG_APP_NAME} command first.")
            return

        recent = _tail(log_file, lines, level)
        if not recent:
            info("No log entries found matching the criteria.")
            return
        console.print(Syntax("".join(recent), "log", theme="monokai"))

        if follow:
            _follow(log_file, level)
    except OSError as e:
        logger.error(f"Failed to show logs: {e}")
        error(f"Failed to show logs: {e}")
        raise typer.Exit(1)


@app.command("info")
def log_info() -> None:
    """Where logs are kept and how long"""
    setup_logging()
    logger = get_logger("ghkit.commands.logs")

    try:
        config = LogConfig()
        log_file = get_log_file_path(config)
        log_dir = get_log_directory()

        rows = [
            ("Log Directory", str(log_dir)),
            ("Log File", str(log_file)),
            ("Rotation", "Daily at midnight"),
            ("Retention Days", str(config.log_retention_days)),
        ]
        if log_file.exists():
            stat = log_file.stat()
            modified = datetime.fromtimestamp(stat.st_mtime)
            rows.append(("Current Size", f"{stat.st_size / 1024:.1f} KB"))
            rows.append(("Last Modified", modified.strftime("%Y-%m-%d %H:%M:%S")))
        else:
            rows.append(("Current Size", "File not found"))
            rows.append(("Last Modified", "N/A"))
        rotated = list(log_dir.glob(f"{LOG_FILE_NAME}.log.*"))
        rows.append(("Rotated Files", str(len(rotated))))

        table = create_table(f"{LOG_APP_NAME} Log Information", ["Setting", "Value"])
        for name, value in rows:
            table.add_row(name, value)
        console.print(table)
        logger.info("Displayed log information")
    except OSError as e:
        logger.error(f"Failed to show log info: {e}")
        error(f"Failed to show log info: {e}")
        raise typer.Exit(1)
