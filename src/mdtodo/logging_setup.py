"""Logging configuration for the mdtodo command line."""

import logging
import sys


def setup_logging(verbose: bool = False) -> None:
    """Send mdtodo logs to stderr; DEBUG when verbose, WARNING otherwise.

    Task output goes to stdout through print(), so logs never mix into it.
    Safe to call more than once: earlier handlers are replaced.
    """
    log = logging.getLogger("mdtodo")

    for h in list(log.handlers):
        log.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    log.addHandler(handler)
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)
