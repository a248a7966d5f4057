"""
Validation utilities for mudsettings.
"""

from ..config.errors import ParseError

_TOGGLE_VALUES = {
    "on": True,
    "off": False,
}


def parse_toggle(token: str) -> bool:
    """
    Parse an on/off command token.

    Args:
        token: Raw token from the command line

    Returns:
        True for "on", False for "off"

    Raises:
        ParseError: For any other token
    """
    try:
        return _TOGGLE_VALUES[token]
    except KeyError:
        raise ParseError(token) from None


def format_toggle(value: bool) -> str:
    """Render a bool the way the /set command spells it."""
    return "on" if value else "off"
