"""
Configuration management for mudsettings.

This module holds the setting descriptors, the runtime settings store,
and its persistence.
"""

from .defaults import SETTING_DESCRIPTORS, SettingDescriptor
from .errors import PersistenceError, ParseError, SettingsError, UnknownSetting
from .persistence import JsonSettingsFile, PersistenceWriter
from .settings import SettingEntry, SettingsStore

__all__ = [
    "SETTING_DESCRIPTORS",
    "SettingDescriptor",
    "SettingsError",
    "UnknownSetting",
    "ParseError",
    "PersistenceError",
    "JsonSettingsFile",
    "PersistenceWriter",
    "SettingEntry",
    "SettingsStore",
]
