"""Unified logging for lampfm with rotating file and console output."""
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

# Log file configuration
LOG_FILE = Path("/var/log/lampfm.log")
FALLBACK_LOG_FILE = Path("/tmp/lampfm.log")
MAX_LOG_BYTES = 5 * 1024 * 1024

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER = "lampfm"


class ConsoleFilter(logging.Filter):
    """Drop records the CLI already printed itself (logged with extra={"quiet": True})."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not getattr(record, "quiet", False)


def _file_handler(path: Path, max_bytes: int, backups: int) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")


def setup_logging(
    log_file: Optional[str] = None,
    verbose: bool = False,
    max_bytes: int = MAX_LOG_BYTES,
    backups: int = 1,
) -> Path:
    """Configure the lampfm logger for one invocation.

    Args:
        log_file: Path to log file (defaults to /var/log/lampfm.log)
        verbose: Echo INFO lines to the terminal and log DEBUG to the file
        max_bytes: Size at which the log is renamed aside to ``<log>.1``
        backups: Number of rotated files kept

    Returns:
        Path of the log file actually in use

    Note:
        Replaces handlers from a previous call, so it is safe to call once
        per command. Falls back to /tmp if the target is not writable.
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    target_log_file = Path(log_file) if log_file else LOG_FILE
    try:
        file_handler = _file_handler(target_log_file, max_bytes, max(backups, 1))
    except PermissionError:
        target_log_file = FALLBACK_LOG_FILE
        file_handler = _file_handler(target_log_file, max_bytes, max(backups, 1))

    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(file_handler)

    # Errors always reach the operator; INFO only with --verbose
    console_handler = RichHandler(console=console, show_path=False, show_time=False)
    console_handler.setLevel(logging.INFO if verbose else logging.ERROR)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler.addFilter(ConsoleFilter())
    root_logger.addHandler(console_handler)

    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    root_logger.debug(f"lampfm logging initialized: {target_log_file}")
    return target_log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the lampfm namespace.

    Args:
        name: Logger name (typically __name__)

    Note:
        Handlers live on the ``lampfm`` root logger; call setup_logging()
        before running a workflow.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
