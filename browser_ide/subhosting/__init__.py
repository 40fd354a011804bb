"""Deno Subhosting API integration."""

from browser_ide.subhosting.client import ClientConfig, SubhostingClient

__all__ = [
    "ClientConfig",
    "SubhostingClient",
]
