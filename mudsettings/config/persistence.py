"""
Persistence for mudsettings.

Settings are stored as a flat JSON object mapping setting id to bool.
Writes happen on a background thread so a slow disk never stalls
command processing.

Path:
    Linux/macOS: ~/.config/mudsettings/settings.json
    Windows: %APPDATA%\\mudsettings\\settings.json
"""

import json
import logging
import os
import queue
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .errors import PersistenceError

logger = logging.getLogger(__name__)


class JsonSettingsFile:
    """
    Key-value settings file backed by JSON.

    Provides the load(id) / save(id, value) pair the settings store
    consumes. Keys that the running client does not know about are kept
    untouched, so a file written by a newer version survives a round
    trip through an older one.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else self._get_config_dir()
        self.config_file = self.config_dir / "settings.json"
        self._data: Dict[str, Any] = {}
        # Values saved since the file was last read successfully
        self._pending: Dict[str, bool] = {}
        self._loaded = False

    @staticmethod
    def _get_config_dir() -> Path:
        """
        Get platform-specific configuration directory.

        Returns:
            Path to configuration directory
        """
        if os.name == 'nt':  # Windows
            base = os.environ.get('APPDATA', os.path.expanduser('~'))
        else:  # Linux/macOS
            base = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(base) / 'mudsettings'

    def load_all(self) -> Dict[str, Any]:
        """
        Read the settings file into memory.

        A missing file is not an error and yields an empty record. A file
        that cannot be read stays unloaded, so the next access retries
        instead of overwriting it. A file that is read but cannot be
        decoded is treated as empty and replaced on the next save.

        Returns:
            Raw decoded record

        Raises:
            PersistenceError: If the file exists but cannot be read or decoded
        """
        if not self.config_file.exists():
            logger.info("No settings file found, using defaults")
            self._set_loaded({})
            return {}

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except OSError as e:
            raise PersistenceError(f"Failed to read {self.config_file}: {e}") from e
        except (ValueError, RecursionError) as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            self._set_loaded({})
            raise PersistenceError(f"Failed to decode {self.config_file}: {e}") from e

        if not isinstance(loaded, dict):
            self._set_loaded({})
            raise PersistenceError(
                f"Failed to load {self.config_file}: expected a JSON object"
            )

        self._set_loaded(loaded)
        logger.info(f"Loaded settings from {self.config_file}")
        return dict(self._data)

    def _set_loaded(self, data: Dict[str, Any]):
        self._data = data
        self._data.update(self._pending)
        self._loaded = True

    def load(self, setting_id: str) -> Optional[bool]:
        """
        Get the persisted value for a setting.

        Args:
            setting_id: Setting identifier

        Returns:
            Stored bool, or None if missing or not a bool
        """
        if not self._loaded:
            self.load_all()

        if setting_id not in self._data:
            return None

        value = self._data[setting_id]
        if not isinstance(value, bool):
            logger.warning(f"Ignoring invalid stored value for {setting_id}: {value!r}")
            return None
        return value

    def save(self, setting_id: str, value: bool):
        """
        Persist a single setting value.

        The whole record is rewritten atomically via a temp file. If the
        existing file has not been read yet it is read first; when that
        read fails nothing is written and the value is kept for the next
        save.

        Raises:
            PersistenceError: If the file cannot be read or written
        """
        self._pending[setting_id] = value

        if not self._loaded:
            try:
                self.load_all()
            except PersistenceError:
                if not self._loaded:
                    raise

        self._data[setting_id] = value

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.config_dir, prefix=".settings-", suffix=".json"
            )
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(self._data, f, indent=2)
                os.replace(tmp_path, self.config_file)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise PersistenceError(f"Failed to save {self.config_file}: {e}") from e

        self._pending.clear()
        logger.debug(f"Saved {setting_id}={value} to {self.config_file}")


class PersistenceWriter:
    """
    Fire-and-forget writer for setting changes.

    Writes are queued and applied in submission order by a single daemon
    thread. Failures are logged and kept in last_error; they never reach
    the caller that submitted the write.
    """

    def __init__(self, backend):
        self.backend = backend
        self.last_error: Optional[PersistenceError] = None
        self._queue: "queue.Queue[Optional[Tuple[str, bool]]]" = queue.Queue()
        self._closed = False
        self._thread = threading.Thread(
            target=self._run, name="settings-writer", daemon=True
        )
        self._thread.start()

    def submit(self, setting_id: str, value: bool):
        """Queue a write of setting_id=value."""
        if self._closed:
            logger.warning(f"Writer closed, saving {setting_id} synchronously")
            self._write(setting_id, value)
            return
        self._queue.put((setting_id, value))

    def flush(self):
        """Block until every queued write has been attempted."""
        self._queue.join()

    def close(self, timeout: float = 5.0):
        """Flush pending writes and stop the writer thread."""
        if self._closed:
            return
        self._closed = True
        self._queue.put(None)
        self._thread.join(timeout=timeout)

    def _run(self):
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    break
                self._write(*item)
            finally:
                self._queue.task_done()

    def _write(self, setting_id: str, value: bool):
        try:
            self.backend.save(setting_id, value)
        except PersistenceError as e:
            self._record_failure(setting_id, e)
        except Exception as e:
            # Keep the writer thread alive whatever the backend raises
            error = PersistenceError(f"Failed to save {setting_id}: {e}")
            error.__cause__ = e
            self._record_failure(setting_id, error)

    def _record_failure(self, setting_id: str, error: PersistenceError):
        self.last_error = error
        logger.error(f"Failed to persist {setting_id}: {error}")
