"""
The /set command.

Parses `/set [<setting> [on|off]]` and turns it into settings store
calls. Produces text for the caller to display; never prints.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..config.errors import ParseError, UnknownSetting
from ..config.settings import SettingEntry, SettingsStore
from ..utils.validators import format_toggle, parse_toggle

USAGE = "usage: /set [<setting> [on|off]]"
RESTART_NOTICE = "(takes effect after restart)"


@dataclass
class CommandResult:
    """Result of a client command."""
    success: bool
    output: str
    command: str  # command name (e.g. "set")


class SetCommand:
    """
    Handler for the /set command.

    Forms:
        /set                    list every setting
        /set <setting>          show one setting
        /set <setting> on|off   change a setting

    User mistakes (unknown setting, bad value, wrong arity) come back as
    an unsuccessful CommandResult with a message, never as an exception.
    """

    name = "set"
    prefix = "/set"

    def __init__(self, store: SettingsStore):
        self.store = store

    def matches(self, line: str) -> bool:
        """Check whether a line of input is a /set command."""
        tokens = line.split()
        return bool(tokens) and tokens[0] == self.prefix

    def execute(self, line: str) -> Optional[CommandResult]:
        """
        Run a raw input line.

        Returns:
            CommandResult, or None if the line is not a /set command
        """
        if not self.matches(line):
            return None
        return self.run(line.split()[1:])

    def run(self, args: List[str]) -> CommandResult:
        """Run /set with already tokenized arguments."""
        if not args:
            return self._list_all()
        if len(args) == 1:
            return self._show(args[0])
        if len(args) == 2:
            return self._toggle(args[0], args[1])
        return self._result(False, USAGE)

    def _list_all(self) -> CommandResult:
        lines = [self._format_entry(entry) for entry in self.store.list()]
        return self._result(True, "\n".join(lines))

    def _show(self, setting_id: str) -> CommandResult:
        try:
            value = self.store.get(setting_id)
            descriptor = self.store.descriptor(setting_id)
        except UnknownSetting as e:
            return self._result(False, str(e))

        return self._result(True, self._format_entry(SettingEntry(
            id=setting_id,
            value=value,
            help_text=descriptor.help_text,
            requires_restart=descriptor.requires_restart,
        )))

    def _toggle(self, setting_id: str, token: str) -> CommandResult:
        try:
            value = parse_toggle(token)
        except ParseError as e:
            return self._result(False, f"{e}\n{USAGE}")

        try:
            descriptor = self.store.descriptor(setting_id)
            self.store.set(setting_id, value)
        except UnknownSetting as e:
            return self._result(False, str(e))

        output = f"{setting_id} = {format_toggle(value)}"
        if descriptor.requires_restart:
            output = f"{output} {RESTART_NOTICE}"
        return self._result(True, output)

    def _result(self, success: bool, output: str) -> CommandResult:
        return CommandResult(success=success, output=output, command=self.name)

    @staticmethod
    def _format_entry(entry: SettingEntry) -> str:
        return f"{entry.id} = {format_toggle(entry.value)}  ({entry.help_text})"
