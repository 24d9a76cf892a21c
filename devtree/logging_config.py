"""Logging configuration for devtree"""
import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "dev.log"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
BRIEF_FORMAT = "[%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when stderr is a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None or not sys.stderr.isatty():
            return super().format(record)

        # Color a copy so file handlers sharing the record see the plain name
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _level_for(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def _file_handler(log_dir: Path) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_dir / LOG_FILE_NAME, mode="w")  # One run per file
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _console_handler(level: int, debug: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if debug:
        handler.setFormatter(ColoredFormatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(ColoredFormatter(fmt=BRIEF_FORMAT))
    return handler


def setup_logging(verbose: bool = False, debug: bool = False, log_dir: Optional[Path] = None) -> None:
    """
    Configure logging for the dev command.

    Console output goes to stderr so it never mixes with completion scripts
    or other stdout output.

    Args:
        verbose: Show INFO messages (git commands that changed something)
        debug: Show DEBUG messages (every git probe) with timestamps
        log_dir: Where ``dev.log`` is written in debug mode
    """
    level = _level_for(verbose, debug)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if debug and log_dir is not None:
        root_logger.addHandler(_file_handler(log_dir))
    root_logger.addHandler(_console_handler(level, debug))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a devtree module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger named without the ``devtree.`` and ``services.`` prefixes,
        e.g. ``git.worktrees`` for ``devtree.services.git.worktrees``
    """
    for prefix in ("devtree.", "services."):
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
