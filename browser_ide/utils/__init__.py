"""Utility functions for Browser IDE."""

from browser_ide.utils.logging import configure_logging, get_logger
from browser_ide.utils.url import url_join

__all__ = [
    "configure_logging",
    "get_logger",
    "url_join",
]
