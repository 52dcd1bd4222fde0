import logging
import os
from pathlib import Path
from typing import Optional

from tornelo_ranking.config import LOG_FILE, LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL, log_file: Optional[str] = LOG_FILE):
    """
    Configure the root logger with a console handler and, optionally, a file handler.

    Args:
        level (str): Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file (str, optional): Append-mode UTF-8 log file. None logs to the console only.
    """
    # Clear any existing handlers to avoid duplicates
    root = logging.getLogger()
    root.handlers = []
    root.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        "[%(asctime)s] [%(levelname)-7s] %(funcName)-25s : %(message)s",
        datefmt="%b %d %a %H:%M:%S",
    ))
    root.addHandler(console_handler)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8", mode="a")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            "[%(asctime)s] %(levelname)-8s %(filename)-20.20s%(lineno)-5d%(funcName)-25.25s: %(message)s",
            datefmt="%b %d %a %H:%M:%S",
        ))
        root.addHandler(file_handler)

    logging.info(f"Logging configured at level {level}" + (f" to {log_file}" if log_file else ""))


def debug_text_path(directory: str, section_id: str) -> Path:
    """Where the raw page text of a section is saved for inspection."""
    return Path(directory) / f"debug-text-{section_id}.txt"
