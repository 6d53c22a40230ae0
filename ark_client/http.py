"""
Async HTTP transport for ARK node REST APIs.

- Built on ``httpx.AsyncClient``; one pool is shared by every view derived
  with :meth:`HttpClient.bind`, so rebinding to another peer never carries a
  stale host, version or header over.
- Sends ``API-Version: <n>`` on every request; the node uses it to select the
  response format.
- Raises :class:`~ark_client.errors.TransportError` for connection problems,
  timeouts and undecodable bodies and :class:`~ark_client.errors.HttpStatusError`
  for non-2xx responses. Malformed URLs (an IPv6 literal without brackets, a
  missing port) surface as ``TransportError`` too.
- Retries only when a :class:`~ark_client.utils.retry.RetryPolicy` with
  ``retries > 0`` is configured, and only for transient failures.

Example:
    async with HttpClient("http://127.0.0.1:4003", version=2) as http:
        resp = await http.get("api/node/status")
        print(resp.data["data"]["synced"])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from .constants import DEFAULT_API_VERSION, REQUEST_TIMEOUT, RETRIABLE_HTTP_STATUSES
from .errors import HttpStatusError, InvalidVersionError, TransportError
from .utils.retry import RetryPolicy, aretry_call
from .version import user_agent as _default_user_agent

logger = logging.getLogger(__name__)

Params = Optional[Mapping[str, Any]]


@dataclass(frozen=True)
class ApiResponse:
    """Decoded response: ``data`` is the JSON body, or None when the body is empty."""

    status_code: int
    data: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, HttpStatusError):
        return exc.status_code in RETRIABLE_HTTP_STATUSES
    if isinstance(exc, TransportError):
        return isinstance(exc.cause, (httpx.TimeoutException, httpx.NetworkError))
    return False


def _join(host: str, path: Optional[str]) -> str:
    if not path:
        return host
    return f"{host.rstrip('/')}/{path.lstrip('/')}"


class HttpClient:
    """
    REST transport bound to (at most) one host and one API version.

    Parameters
    ----------
    host : str | None
        Base URL such as ``"http://1.2.3.4:4003"``. A client without a host can
        only be used through :meth:`bind`.
    version : int
        API version announced in the ``API-Version`` header.
    timeout : float
        Default per-request timeout in seconds.
    retry : RetryPolicy | None
        Retry policy for transient failures. Defaults to a single attempt.
    headers : Mapping[str, str] | None
        Extra default headers.
    client : httpx.AsyncClient | None
        Optional pre-built client (for tests or custom transports). Not closed
        by :meth:`aclose` when supplied.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        version: int = DEFAULT_API_VERSION,
        *,
        timeout: float = REQUEST_TIMEOUT,
        retry: Optional[RetryPolicy] = None,
        headers: Optional[Mapping[str, str]] = None,
        user_agent: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.host = host
        self.version = DEFAULT_API_VERSION
        self.set_version(version)
        self.timeout = float(timeout)
        self.retry = retry or RetryPolicy()
        self.user_agent = user_agent or _default_user_agent()
        self._extra_headers: Dict[str, str] = dict(headers or {})
        self._own_client = client is None
        self._client = client or httpx.AsyncClient(follow_redirects=True)

    # --- context manager -------------------------------------------------

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        if self._own_client:
            await self._client.aclose()

    # --- configuration ---------------------------------------------------

    def set_timeout(self, timeout: float) -> "HttpClient":
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.timeout = float(timeout)
        return self

    def set_version(self, version: int) -> "HttpClient":
        if not version:
            raise InvalidVersionError(version)
        self.version = int(version)
        return self

    def bind(
        self,
        host: str,
        version: Optional[int] = None,
        *,
        timeout: Optional[float] = None,
        retry: Optional[RetryPolicy] = None,
    ) -> "HttpClient":
        """
        Return a new view targeting ``host``, sharing this client's connection pool.

        The view starts from this client's defaults; nothing set on a previous
        view is inherited. ``retry`` replaces the inherited retry policy.
        Closing a view never closes the shared pool.
        """
        return HttpClient(
            host,
            self.version if version is None else version,
            timeout=self.timeout if timeout is None else timeout,
            retry=self.retry if retry is None else retry,
            headers=self._extra_headers,
            user_agent=self.user_agent,
            client=self._client,
        )

    def headers(self) -> Dict[str, str]:
        merged = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
            "API-Version": str(self.version),
        }
        merged.update(self._extra_headers)
        return merged

    # --- public API ------------------------------------------------------

    async def send_request(
        self,
        method: str,
        path: Optional[str] = None,
        *,
        params: Params = None,
        json: Any = None,
        timeout: Optional[float] = None,
    ) -> ApiResponse:
        """Send ``method`` to ``host/path`` and return the decoded response."""
        if not self.host:
            raise TransportError("No host bound to this client", url=path)
        url = _join(self.host, path)
        return await aretry_call(
            self._send_once,
            method.upper(),
            url,
            params,
            json,
            self.timeout if timeout is None else float(timeout),
            policy=self.retry,
            retry_if=_is_transient,
            on_retry=lambda attempt, exc, delay: logger.debug(
                "Retrying %s %s after attempt %d (%s); sleeping %.2fs",
                method.upper(), url, attempt, exc, delay,
            ),
        )

    async def get(self, path: Optional[str] = None, params: Params = None, **kw: Any) -> ApiResponse:
        return await self.send_request("GET", path, params=params, **kw)

    async def post(self, path: Optional[str] = None, payload: Any = None, **kw: Any) -> ApiResponse:
        return await self.send_request("POST", path, json=payload, **kw)

    async def put(self, path: Optional[str] = None, payload: Any = None, **kw: Any) -> ApiResponse:
        return await self.send_request("PUT", path, json=payload, **kw)

    async def patch(self, path: Optional[str] = None, payload: Any = None, **kw: Any) -> ApiResponse:
        return await self.send_request("PATCH", path, json=payload, **kw)

    async def delete(self, path: Optional[str] = None, params: Params = None, **kw: Any) -> ApiResponse:
        return await self.send_request("DELETE", path, params=params, **kw)

    # --- internals -------------------------------------------------------

    async def _send_once(
        self,
        method: str,
        url: str,
        params: Params,
        payload: Any,
        timeout: float,
    ) -> ApiResponse:
        try:
            r = await self._client.request(
                method,
                url,
                params=dict(params) if params else None,
                json=payload,
                headers=self.headers(),
                timeout=timeout,
            )
        except httpx.InvalidURL as e:
            raise TransportError(f"Invalid URL: {e}", url=url, cause=e) from e
        except httpx.HTTPError as e:
            raise TransportError("Network error", url=url, cause=e) from e

        data: Any = None
        if r.content:
            try:
                data = r.json()
            except ValueError as e:
                if r.is_success:
                    raise TransportError(
                        f"Non-JSON response (HTTP {r.status_code}): {r.text[:256]}",
                        url=url,
                        cause=e,
                    ) from e
                data = r.text[:256]

        if not r.is_success:
            raise HttpStatusError(
                r.reason_phrase or "request failed",
                url=url,
                status_code=r.status_code,
                body=data,
            )
        return ApiResponse(status_code=r.status_code, data=data, headers=dict(r.headers))


__all__ = ["ApiResponse", "HttpClient"]
