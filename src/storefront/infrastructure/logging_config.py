"""Logging setup for the command-line entry point.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers and levels are configured once, here.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Send storefront logs to stderr, INFO by default and DEBUG if *verbose*."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )
