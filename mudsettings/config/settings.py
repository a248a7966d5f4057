"""
Settings store for mudsettings.

Holds the current value of every known setting for the lifetime of
the process.
"""

import logging
import threading
from typing import Dict, Iterable, List, NamedTuple, Optional

from PySide6.QtCore import QObject, Signal

from .defaults import SETTING_DESCRIPTORS, SettingDescriptor, build_descriptor_index
from .errors import PersistenceError, UnknownSetting
from .persistence import PersistenceWriter

logger = logging.getLogger(__name__)


class SettingEntry(NamedTuple):
    """One row of a settings listing."""
    id: str
    value: bool
    help_text: str
    requires_restart: bool


class SettingsStore(QObject):
    """
    Process-wide settings registry.

    There is one store per running client. It is created by the runtime
    at startup and handed by reference to every component that needs a
    setting, so a toggle is seen by everybody at once.

    Reads are lock-free. Writes take a lock per setting, so two writers
    to the same setting never interleave while writes to different
    settings never contend. Every write is handed to a background
    PersistenceWriter when a backend is configured.

    The backend only needs load(id) -> Optional[bool] and save(id, bool).
    """

    # Emitted after set() changes a value: (setting_id, new_value)
    setting_changed = Signal(str, bool)

    def __init__(
        self,
        backend=None,
        descriptors: Iterable[SettingDescriptor] = SETTING_DESCRIPTORS,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._descriptors = build_descriptor_index(descriptors)
        self._locks = {setting_id: threading.RLock() for setting_id in self._descriptors}
        self._values: Dict[str, bool] = {}
        self.backend = backend
        self._writer: Optional[PersistenceWriter] = None

        self._load()

        if backend is not None:
            self._writer = PersistenceWriter(backend)

    def _load(self):
        """Populate values from the backend, defaulting anything unusable."""
        for setting_id, descriptor in self._descriptors.items():
            stored = None
            if self.backend is not None:
                try:
                    stored = self.backend.load(setting_id)
                except (PersistenceError, OSError, ValueError) as e:
                    logger.error(f"Failed to load {setting_id}: {e}, using default")
            self._values[setting_id] = (
                descriptor.default_value if stored is None else stored
            )

    def descriptor(self, setting_id: str) -> SettingDescriptor:
        """
        Look up the descriptor for a setting.

        Raises:
            UnknownSetting: If setting_id is not a known setting
        """
        try:
            return self._descriptors[setting_id]
        except KeyError:
            raise UnknownSetting(setting_id) from None

    def ids(self) -> List[str]:
        """Get all setting identifiers in declaration order."""
        return list(self._descriptors)

    def get(self, setting_id: str) -> bool:
        """
        Get the current value of a setting.

        Args:
            setting_id: Exact, case-sensitive identifier

        Returns:
            Current value (the default if never set)

        Raises:
            UnknownSetting: If setting_id is not a known setting
        """
        self.descriptor(setting_id)
        return self._values[setting_id]

    def set(self, setting_id: str, value: bool):
        """
        Set a setting and queue it for persistence.

        Setting a value equal to the current one is allowed and leaves
        the store as it was. A failed save does not undo the change.

        Args:
            setting_id: Exact, case-sensitive identifier
            value: New value

        Raises:
            UnknownSetting: If setting_id is not a known setting
            TypeError: If value is not a bool
        """
        descriptor = self.descriptor(setting_id)
        if not isinstance(value, bool):
            raise TypeError(f"Setting {setting_id} expects a bool, got {value!r}")

        with self._locks[setting_id]:
            changed = self._values[setting_id] != value
            self._values[setting_id] = value
            if self._writer is not None:
                self._writer.submit(setting_id, value)

            # Emitted under the lock so listeners see changes in store order
            if changed:
                logger.info(f"Setting {setting_id} changed to {value}")
                if descriptor.requires_restart:
                    logger.info(f"{setting_id} will take effect after restart")
                self.setting_changed.emit(setting_id, value)

    def list(self) -> List[SettingEntry]:
        """
        Snapshot every setting in declaration order.

        Returns:
            List of SettingEntry; call again for fresh values
        """
        return [
            SettingEntry(
                id=setting_id,
                value=self._values[setting_id],
                help_text=descriptor.help_text,
                requires_restart=descriptor.requires_restart,
            )
            for setting_id, descriptor in self._descriptors.items()
        ]

    @property
    def last_persistence_error(self) -> Optional[PersistenceError]:
        """Most recent save failure, if any."""
        if self._writer is None:
            return None
        return self._writer.last_error

    def flush(self):
        """Wait for queued persistence writes to finish."""
        if self._writer is not None:
            self._writer.flush()

    def close(self):
        """Flush pending writes and stop the persistence writer."""
        if self._writer is not None:
            self._writer.close()
