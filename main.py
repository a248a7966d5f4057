#!/usr/bin/env python3
"""
mudsettings - Main entry point.

Launches the client shell.
"""

import sys

from mudsettings.main import main


if __name__ == "__main__":
    sys.exit(main())
