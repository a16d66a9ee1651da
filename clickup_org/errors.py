"""Exception hierarchy shared by the client, the sync engine and the CLI."""

from __future__ import annotations

from typing import Optional


class ClickUpSyncError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(ClickUpSyncError):
    """Missing credential, empty list mapping set or malformed config file."""


class TransportError(ClickUpSyncError):
    """Connectivity or HTTP failure talking to the ClickUp API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthError(TransportError):
    """The API rejected the configured credential (HTTP 401/403)."""
