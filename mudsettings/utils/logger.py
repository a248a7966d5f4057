"""
Diagnostic logging for mudsettings.

The shell writes the MUD transcript to stdout, so diagnostics use
stderr and only show warnings there. Full DEBUG output goes to a
per-run file in the cache directory.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import IO, Optional

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    log_level: str = "INFO",
    log_file: bool = True,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Install the console and (optionally) file handlers on the root logger.

    Args:
        log_level: Root level name; unknown names fall back to INFO
        log_file: Also write a timestamped file under get_log_dir()
        stream: Console stream, stderr by default

    Returns:
        Root logger instance
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root.handlers.clear()

    root.addHandler(_console_handler(stream or sys.stderr))

    if log_file:
        handler = _file_handler(get_log_dir())
        root.addHandler(handler)
        root.info(f"Diagnostics written to {handler.baseFilename}")

    return root


def _console_handler(stream: IO[str]) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(logging.WARNING)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(log_dir: Path) -> logging.FileHandler:
    log_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    handler = logging.FileHandler(log_dir / f"mudsettings_{stamp}.log", encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def get_log_dir() -> Path:
    """Directory for diagnostic and session logs (XDG cache or LOCALAPPDATA)."""
    if os.name == 'nt':
        base = os.environ.get('LOCALAPPDATA', os.path.expanduser('~'))
    else:
        base = os.environ.get('XDG_CACHE_HOME', os.path.expanduser('~/.cache'))
    return Path(base) / 'mudsettings' / 'logs'
