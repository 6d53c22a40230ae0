"""Shared plumbing for versioned REST resources."""

from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import quote

from ..http import ApiResponse, HttpClient

Query = Optional[Mapping[str, Any]]


class Resource:
    """
    A group of endpoints bound to one transport.

    Subclasses only describe paths; every call returns the transport's
    :class:`~ark_client.http.ApiResponse` untouched.
    """

    prefix = "api"

    def __init__(self, connection: HttpClient) -> None:
        self.connection = connection

    def _path(self, *parts: Any) -> str:
        return "/".join([self.prefix, *(quote(str(p), safe="") for p in parts)])

    async def _get(self, *parts: Any, query: Query = None) -> ApiResponse:
        return await self.connection.get(self._path(*parts), params=query)

    async def _post(self, *parts: Any, payload: Any = None) -> ApiResponse:
        return await self.connection.post(self._path(*parts), payload)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(host={self.connection.host!r}, version={self.connection.version})"
