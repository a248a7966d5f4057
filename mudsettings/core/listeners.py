"""
Client subsystems that act on settings.

Each one holds the shared SettingsStore and reads it at the moment it
needs a value. None of them keeps a private copy of a live setting.
"""

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import IO, List, Optional

from ..config.settings import SettingsStore
from ..utils.logger import get_log_dir

logger = logging.getLogger(__name__)


class SessionLogger:
    """
    Writes the session transcript to a log file.

    `logging_enabled` is checked on every line, so toggling it takes
    effect on the next line. The file is opened lazily and closed as
    soon as logging is switched off. The change signal may arrive on
    another thread, so the file handle is only touched under _lock.
    """

    SETTING = "logging_enabled"

    def __init__(self, store: SettingsStore, log_dir: Optional[Path] = None):
        self.store = store
        self.log_dir = Path(log_dir) if log_dir else get_log_dir()
        self.log_path: Optional[Path] = None
        self._file: Optional[IO[str]] = None
        self._lock = threading.RLock()

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def write(self, line: str) -> bool:
        """
        Append a line to the session log if logging is enabled.

        Returns:
            True if the line was written
        """
        with self._lock:
            if not self.store.get(self.SETTING):
                self.close()
                return False

            if self._file is None and not self._open():
                return False

            try:
                self._file.write(line + "\n")
                self._file.flush()
            except (OSError, ValueError) as e:
                logger.error(f"Failed to write session log: {e}")
                self.close()
                return False
            return True

    def on_setting_changed(self, setting_id: str, value: bool):
        """Close the log right away when logging is switched off."""
        if setting_id == self.SETTING and not value:
            self.close()

    def close(self):
        with self._lock:
            if self._file is None:
                return
            try:
                self._file.close()
            except OSError as e:
                logger.error(f"Failed to close session log: {e}")
            finally:
                self._file = None
                logger.info(f"Closed session log {self.log_path}")

    def _open(self) -> bool:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = self.log_dir / f"session_{timestamp}.log"
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._file = open(path, 'a', encoding='utf-8')
        except OSError as e:
            logger.error(f"Failed to open session log {path}: {e}")
            return False
        self.log_path = path
        logger.info(f"Session logging to {path}")
        return True


class MouseSupport:
    """
    Mouse-wheel scrollback.

    `mouse_enabled` requires a restart, so it is read once here and
    later toggles are ignored until the next launch.
    """

    SETTING = "mouse_enabled"
    LINES_PER_NOTCH = 3

    def __init__(self, store: SettingsStore):
        self.enabled = store.get(self.SETTING)
        self.scroll_offset = 0
        logger.debug(f"Mouse support {'enabled' if self.enabled else 'disabled'}")

    def on_wheel(self, notches: int) -> bool:
        """
        Scroll the buffer; positive notches scroll back in time.

        Returns:
            True if the event was handled
        """
        if not self.enabled:
            return False
        self.scroll_offset = max(0, self.scroll_offset + notches * self.LINES_PER_NOTCH)
        return True

    def reset(self):
        """Jump back to the live end of the buffer."""
        self.scroll_offset = 0


class CommandHistory:
    """
    Input history, optionally kept between sessions.

    `save_history` is consulted when loading at startup and again when
    saving at shutdown.
    """

    SETTING = "save_history"

    def __init__(self, store: SettingsStore, history_file: Path, max_entries: int = 500):
        self.store = store
        self.history_file = Path(history_file)
        self.max_entries = max_entries
        self.entries: List[str] = []

    def load(self):
        """Load saved history when save_history is on."""
        if not self.store.get(self.SETTING) or not self.history_file.exists():
            return
        try:
            lines = self.history_file.read_text().splitlines()
        except OSError as e:
            logger.error(f"Failed to load history: {e}")
            return
        self.entries = lines[-self.max_entries:]
        logger.info(f"Loaded {len(self.entries)} history entries")

    def add(self, line: str):
        """Record a line of input, skipping blanks and repeats."""
        if not line.strip():
            return
        if self.entries and self.entries[-1] == line:
            return
        self.entries.append(line)
        del self.entries[:-self.max_entries]

    def save(self):
        """Write history to disk when save_history is on."""
        if not self.store.get(self.SETTING):
            return
        try:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)
            self.history_file.write_text("".join(f"{entry}\n" for entry in self.entries))
        except OSError as e:
            logger.error(f"Failed to save history: {e}")
            return
        logger.info(f"Saved {len(self.entries)} history entries")
