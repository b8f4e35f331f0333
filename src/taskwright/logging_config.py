"""Logging configuration for taskwright.

Only the ``taskwright`` logger hierarchy is configured; the root logger
and third-party loggers are left alone.  Diagnostics go to stderr so
they never mix with task output on stdout.

Usage:
    >>> setup_logging(verbose=True)
    >>> logger = logging.getLogger(__name__)
    >>> logger.debug("Parsed arguments")
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "taskwright"

_HANDLER_NAME = "taskwright-console"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``taskwright`` logger.

    Args:
        verbose: If True, log at DEBUG; otherwise only warnings and errors.

    Returns:
        The configured package logger.

    Calling this again replaces the handler installed by the previous
    call instead of adding a second one.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(level)

    for handler in package_logger.handlers[:]:
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    package_logger.addHandler(console_handler)
    return package_logger
