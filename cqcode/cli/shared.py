"""Shared utilities for cqcode CLI commands."""

import logging

from rich.console import Console

console = Console()

_log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(debug: bool = False):
    """Log to stderr; DEBUG for the cqcode loggers when requested."""
    logging.basicConfig(level=logging.WARNING, format=_log_format)
    logging.getLogger("cqcode").setLevel(logging.DEBUG if debug else logging.INFO)
