"""Debug logging functions
"""

import argparse
import logging
import os
import shlex
import sys
from typing import Optional


def calling_program() -> str:
    "Return the name of the program that started us"
    return os.path.basename(sys.argv[0])


def logging_level_to_syslog(level: int) -> int:
    "Converts a logging level into a syslog-compatible one"
    if level <= logging.DEBUG:
        return 7  # KERN_DEBUG
    if level <= logging.INFO:
        return 6  # KERN_INFO
    if level <= logging.WARN:
        return 4  # KERN_WARNING
    if level <= logging.ERROR:
        return 3  # KERN_ERR
    return 2      # KERN_CRIT


class SyslogFormatter(logging.Formatter):
    "Formats log messages with a syslog-style level prefix"

    def __init__(self, fmt: str):
        super().__init__()
        self.base_format = fmt

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        self._style._fmt = f'<{logging_level_to_syslog(record.levelno)}>' + self.base_format
        return super().format(record)


def level_and_format(args: argparse.Namespace, program: str) -> tuple[int, str]:
    "Return the logging level and message format selected by the arguments"
    if args.debug:
        return logging.DEBUG, program + ' %(levelno)s %(filename)s: %(message)s'
    if args.verbose:
        return logging.INFO, program + ' %(filename)s: %(message)s'
    return logging.WARNING, '%(filename)s: %(message)s'


def setup(args: argparse.Namespace, program: Optional[str] = None):
    """Set up the logging subsystem in a consistent way.

    program defaults to the program invoking this run.
    """
    if not program:
        program = shlex.quote(calling_program())
    # Escape percents to pass through format()
    program = program.replace('%', '%%')
    level, fmt = level_and_format(args, program)
    logging.basicConfig(level=level, format=fmt)
    if args.level_prefix:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(SyslogFormatter(fmt))
