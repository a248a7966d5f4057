"""
mudsettings - Main entry point.

Runs a line-oriented client shell around the settings registry.
"""

import logging
import sys
from typing import IO, Optional

from . import __version__
from .runtime import ClientRuntime
from .utils import setup_logging

QUIT_COMMAND = "/quit"
QUIT_PROMPT = "Really quit? (y/n) "


def run_shell(runtime: ClientRuntime, stdin: IO[str], stdout: IO[str]) -> int:
    """
    Read input lines until /quit or end of input.

    Returns:
        Process exit code
    """
    for raw in stdin:
        line = raw.rstrip("\n")

        if line.strip() == QUIT_COMMAND:
            if not runtime.settings.get("confirm_quit"):
                break
            stdout.write(QUIT_PROMPT)
            stdout.flush()
            answer = stdin.readline()
            if not answer or answer.strip().lower().startswith("y"):
                break
            continue

        result = runtime.handle_line(line)
        if result is not None:
            stdout.write(result.output + "\n")
            stdout.flush()

    return 0


def main(stdin: Optional[IO[str]] = None, stdout: Optional[IO[str]] = None) -> int:
    """Main entry point for mudsettings."""
    setup_logging(log_level="INFO", log_file=True)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info(f"mudsettings v{__version__} starting...")
    logger.info("=" * 60)

    with ClientRuntime() as runtime:
        exit_code = run_shell(runtime, stdin or sys.stdin, stdout or sys.stdout)

    logger.info("mudsettings exiting")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
