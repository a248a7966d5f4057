"""
Core client functionality for mudsettings.

This module provides the pieces of the client that use settings:
- The /set command
- Session logging
- Mouse scrollback
- Command history
"""

from .listeners import CommandHistory, MouseSupport, SessionLogger
from .set_command import CommandResult, SetCommand

__all__ = [
    "CommandResult",
    "SetCommand",
    "SessionLogger",
    "MouseSupport",
    "CommandHistory",
]
