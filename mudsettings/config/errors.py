"""
Exceptions raised by the settings registry.
"""


class SettingsError(Exception):
    """Base class for settings registry errors."""


class UnknownSetting(SettingsError):
    """Raised when an identifier is not in the descriptor table."""

    def __init__(self, setting_id: str):
        super().__init__(f"no such setting: {setting_id}")
        self.setting_id = setting_id


class ParseError(SettingsError):
    """Raised when a toggle value is not 'on' or 'off'."""

    def __init__(self, token: str):
        super().__init__(f"invalid value '{token}', expected 'on' or 'off'")
        self.token = token


class PersistenceError(SettingsError):
    """Raised when persisted settings cannot be read or written."""
