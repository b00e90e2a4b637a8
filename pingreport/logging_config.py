"""Logging setup for a single pingreport run."""

import logging
import os
import sys

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging() -> None:
    """Send log records to stderr, keeping stdout for the report alone.

    The level comes from PINGREPORT_LOG_LEVEL (case-insensitive, unknown
    names mean WARNING). What each level adds to a run:

        WARNING  order or result files that were skipped, with their path
        INFO     how many orders were loaded and how many had a result
        DEBUG    directories in use and the number of rendered lines

    Examples:
        # Report on stdout, skipped records on stderr
        $ pingreport > report.txt

        # Check how many orders and results were picked up
        $ PINGREPORT_LOG_LEVEL=info pingreport
    """
    name = os.environ.get("PINGREPORT_LOG_LEVEL", "WARNING").upper()
    level = LOG_LEVELS.get(name, logging.WARNING)

    # One run, one configuration; replaces handlers left by earlier calls
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )
