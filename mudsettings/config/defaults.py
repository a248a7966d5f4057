"""
Compiled-in setting descriptors for mudsettings.

These are the only settings the client knows about. Adding a setting
means adding a row to SETTING_DESCRIPTORS.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple


@dataclass(frozen=True)
class SettingDescriptor:
    """Metadata for a single boolean setting."""
    id: str
    default_value: bool
    help_text: str
    requires_restart: bool = False


SETTING_DESCRIPTORS: Tuple[SettingDescriptor, ...] = (
    SettingDescriptor(
        id="logging_enabled",
        default_value=False,
        help_text="enables/disables session logging",
    ),
    SettingDescriptor(
        id="mouse_enabled",
        default_value=False,
        help_text="experimental mouse-driven scrollback",
        requires_restart=True,
    ),
    SettingDescriptor(
        id="save_history",
        default_value=False,
        help_text="save command history between sessions",
    ),
    SettingDescriptor(
        id="confirm_quit",
        default_value=True,
        help_text="ask for confirmation before quitting",
    ),
)


def build_descriptor_index(
    descriptors: Iterable[SettingDescriptor],
) -> Mapping[str, SettingDescriptor]:
    """
    Index descriptors by identifier, keeping declaration order.

    Args:
        descriptors: Descriptors in declaration order

    Returns:
        Read-only mapping of id to descriptor

    Raises:
        ValueError: If two descriptors share an identifier
    """
    index = {}
    for descriptor in descriptors:
        if descriptor.id in index:
            raise ValueError(f"Duplicate setting identifier: {descriptor.id}")
        index[descriptor.id] = descriptor
    return MappingProxyType(index)


DESCRIPTOR_INDEX = build_descriptor_index(SETTING_DESCRIPTORS)
