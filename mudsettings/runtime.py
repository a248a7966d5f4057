"""
Process-wide client runtime.

Owns the single SettingsStore and hands it to every subsystem.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import JsonSettingsFile, SettingsStore
from .core import CommandHistory, CommandResult, MouseSupport, SessionLogger, SetCommand

logger = logging.getLogger(__name__)


class ClientRuntime:
    """
    Top-level runtime context created once at startup.

    Can be used as a context manager; shutdown() flushes settings and
    history and closes the session log.
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        log_dir: Optional[Path] = None,
        backend=None,
    ):
        self.settings_file = JsonSettingsFile(config_dir)
        self.settings = SettingsStore(backend if backend is not None else self.settings_file)

        self.set_command = SetCommand(self.settings)
        self.session_log = SessionLogger(self.settings, log_dir)
        self.mouse = MouseSupport(self.settings)
        self.history = CommandHistory(
            self.settings, self.settings_file.config_dir / "history"
        )

        self.settings.setting_changed.connect(self.session_log.on_setting_changed)
        self.history.load()
        self._shut_down = False

    def handle_line(self, line: str) -> Optional[CommandResult]:
        """
        Process one line of user input.

        /set lines go to the command handler. Everything else would be
        sent to the MUD and is recorded in the session log.

        Returns:
            CommandResult for client commands, None otherwise
        """
        self.history.add(line)
        result = self.set_command.execute(line)
        if result is not None:
            return result
        self.session_log.write(line)
        return None

    def shutdown(self):
        if self._shut_down:
            return
        self._shut_down = True
        self.history.save()
        self.session_log.close()
        self.settings.close()
        logger.info("Client runtime shut down")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False
