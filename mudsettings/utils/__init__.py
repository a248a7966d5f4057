"""
Utility functions for mudsettings.
"""

from .logger import get_log_dir, setup_logging
from .validators import format_toggle, parse_toggle

__all__ = ["setup_logging", "get_log_dir", "parse_toggle", "format_toggle"]
