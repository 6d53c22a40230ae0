"""
Typed error classes for the ARK client.

Discovery only lets three of these escape (`UnsupportedNetworkError`,
`InvalidVersionError`, `NoApiPeerFoundError`); transport failures raised while
probing peers are absorbed there. Resource calls made through a connected
client propagate `TransportError` / `HttpStatusError` to the caller. Every
class derives from `ArkClientError` so callers can catch the whole family.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

__all__ = [
    "ArkClientError",
    "UnsupportedNetworkError",
    "InvalidVersionError",
    "NoApiPeerFoundError",
    "ResourceNotFoundError",
    "TransportError",
    "HttpStatusError",
]


class ArkClientError(Exception):
    """Base class for all client errors."""


@dataclass
class UnsupportedNetworkError(ArkClientError):
    """Raised when a network has no seed table and no peer override was given."""

    network: str

    def __str__(self) -> str:
        return f'Network "{self.network}" is not supported'


@dataclass
class InvalidVersionError(ArkClientError, ValueError):
    """Raised when a zero or missing API version is supplied."""

    version: Any = None

    def __str__(self) -> str:
        return f"A valid API version is required (got {self.version!r})"


@dataclass
class NoApiPeerFoundError(ArkClientError):
    """
    Raised by `ArkClient.connect` when no discovered peer exposes an enabled
    core-api plugin.

    Fields:
      - network: network name passed to connect (None with a bare override)
      - plugin: plugin name that was looked up
      - peers_checked: how many peers were asked for their configuration
    """

    network: Optional[str] = None
    plugin: str = "@arkecosystem/core-api"
    peers_checked: int = 0

    def __str__(self) -> str:
        where = f" on {self.network!r}" if self.network else ""
        return (
            f"No peer with `{self.plugin}` enabled has been found{where} "
            f"({self.peers_checked} checked)"
        )


@dataclass
class ResourceNotFoundError(ArkClientError, LookupError):
    """Raised when no resource named `name` exists for API `version`."""

    version: Any
    name: str

    def __str__(self) -> str:
        return f"Unknown resource {self.name!r} for API version {self.version!r}"


@dataclass
class TransportError(ArkClientError):
    """
    Raised by the HTTP transport for connection failures, timeouts, requests
    without a bound host, and bodies that are not valid JSON.
    """

    message: str
    url: Optional[str] = None
    cause: Optional[BaseException] = None

    def __str__(self) -> str:
        where = f" [{self.url}]" if self.url else ""
        return f"{self.message}{where}"


@dataclass
class HttpStatusError(TransportError):
    """Raised for non-2xx responses. Keeps the decoded body when there is one."""

    status_code: int = 0
    body: Optional[Any] = None

    def __str__(self) -> str:
        where = f" [{self.url}]" if self.url else ""
        return f"HTTP {self.status_code}: {self.message}{where}"
