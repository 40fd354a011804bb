"""Custom exceptions for Browser IDE."""

from typing import Any


class BrowserIDEError(Exception):
    """Base exception for Browser IDE."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(BrowserIDEError):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str, setting: str | None = None):
        details = {}
        if setting is not None:
            details["setting"] = setting
        super().__init__(message, details)


class UpstreamResponseError(BrowserIDEError):
    """The Subhosting API answered with a body that is not JSON."""

    status_code = 502

    def __init__(self, url: str, upstream_status: int, body: str):
        super().__init__(
            f"Unexpected response from Subhosting API ({upstream_status})",
            {
                "url": url,
                "upstream_status": upstream_status,
                "body": body[:500],
            },
        )
        self.upstream_status = upstream_status
