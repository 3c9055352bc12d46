"""Simple logging configuration.

Use func:`setup_logging` at the start of the CLI or the dashboard page to
configure a consistent logging format across the project.
"""

import logging
from typing import Union


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    logging.basicConfig(level=level, format=fmt)
