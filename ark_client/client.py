"""
ark_client.client
=================

High-level entry point: discover a network's peers, pick one, and talk to its
REST API.

Typical usage
-------------
    from ark_client import ArkClient

    client = await ArkClient.connect("devnet", version=2)
    async with client:
        resp = await client.resource("blocks").all({"limit": 10})
        print(resp.data["data"][0]["height"])

    # Or bind to a known node directly:
    client = ArkClient("http://127.0.0.1:4003", version=2)

Design notes
------------
* ``connect`` runs :class:`~ark_client.peers.PeerProber` over the network's
  seeds (or ``peers_override``). v1 binds to the best-ranked peer; v2 asks
  :class:`~ark_client.peers.ApiPeerResolver` for the first peer with core-api
  enabled and binds to that plugin's port.
* Discovery uses a throw-away scratch transport with the short probe timeout;
  the returned client gets its own transport configured from ``ClientConfig``.
* Pass ``http=`` to reuse an existing :class:`~ark_client.http.HttpClient`
  pool (its owner stays responsible for closing it).
"""

from __future__ import annotations

import logging
import random
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Sequence

from .config import ClientConfig
from .constants import API_VERSION_1, DEFAULT_API_VERSION
from .errors import InvalidVersionError, NoApiPeerFoundError
from .http import HttpClient
from .peers.prober import PeerProber, Shuffle, base_url
from .peers.resolver import ApiPeerResolver
from .resources import Resource, get_resource
from .seeds import SeedTable

logger = logging.getLogger(__name__)

Peer = Dict[str, Any]


@asynccontextmanager
async def _scratch(config: ClientConfig, http: Optional[HttpClient]) -> AsyncIterator[HttpClient]:
    """Host-less transport for probing; closed on exit unless supplied by the caller."""
    if http is not None:
        yield http
        return
    scratch = HttpClient(timeout=config.probe_timeout, user_agent=config.user_agent)
    try:
        yield scratch
    finally:
        await scratch.aclose()


class ArkClient:
    """
    REST client bound to one peer and one API version.

    Parameters
    ----------
    host : str
        Base URL of the node, e.g. ``"http://1.2.3.4:4003"``.
    version : int | None
        API version; ``None``/``0`` fall back to 1 here (use ``set_version`` to
        validate explicitly).
    config : ClientConfig | None
        Timeouts and retry policy for resource calls.
    http : HttpClient | None
        Shared transport pool to bind into instead of creating one.
    """

    def __init__(
        self,
        host: str,
        version: Optional[int] = None,
        *,
        config: Optional[ClientConfig] = None,
        http: Optional[HttpClient] = None,
    ) -> None:
        self.config = config or ClientConfig.from_env()
        self.version = DEFAULT_API_VERSION
        self._owns_pool = http is None
        self._pool = http or HttpClient(
            timeout=self.config.request_timeout,
            retry=self.config.retry_policy(),
            user_agent=self.config.user_agent,
        )
        self.http: HttpClient
        self.set_connection(host)
        self.set_version(version or DEFAULT_API_VERSION)

    def __repr__(self) -> str:
        return f"ArkClient(host={self.http.host!r}, version={self.version})"

    # --- context manager -------------------------------------------------

    async def __aenter__(self) -> "ArkClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_pool:
            await self._pool.aclose()

    # --- connection ------------------------------------------------------

    def set_connection(self, host: str) -> None:
        """Point the client at ``host``; the connection pool is kept."""
        self.http = self._pool.bind(host, self.version)

    def get_connection(self) -> HttpClient:
        return self.http

    def set_version(self, version: int) -> "ArkClient":
        """Set the API version; raises InvalidVersionError for 0/None."""
        if not version:
            raise InvalidVersionError(version)
        self.version = int(version)
        self.http.set_version(self.version)
        return self

    def resource(self, name: str) -> Resource:
        """Version-specific resource ``name`` bound to this client's connection."""
        return get_resource(self.version, name, self.http)

    # --- discovery -------------------------------------------------------

    @classmethod
    async def find_peers(
        cls,
        network: str,
        version: int = API_VERSION_1,
        peers_override: Optional[Sequence[Mapping[str, Any]]] = None,
        *,
        config: Optional[ClientConfig] = None,
        seeds: Optional[SeedTable] = None,
        http: Optional[HttpClient] = None,
        shuffle: Shuffle = random.shuffle,
    ) -> List[Peer]:
        """
        All available peers of ``network``, sorted by block height and delay.

        ``peers_override`` replaces the network's seeds. Raises
        UnsupportedNetworkError for an unknown network without an override.
        """
        config = config or ClientConfig.from_env()
        async with _scratch(config, http) as scratch:
            prober = PeerProber(scratch, seeds=seeds, config=config, shuffle=shuffle)
            return await prober.find_peers(network, version, peers_override)

    @classmethod
    async def fetch_peer_config(
        cls,
        host: str,
        *,
        config: Optional[ClientConfig] = None,
        http: Optional[HttpClient] = None,
    ) -> Optional[Dict[str, Any]]:
        """v2 only: configuration document of the node at ``host`` (p2p URL), or None."""
        config = config or ClientConfig.from_env()
        async with _scratch(config, http) as scratch:
            return await ApiPeerResolver(scratch, config=config).fetch_peer_config(host)

    @classmethod
    async def select_api_peer(
        cls,
        peers: Sequence[Mapping[str, Any]],
        *,
        config: Optional[ClientConfig] = None,
        http: Optional[HttpClient] = None,
    ) -> Optional[Peer]:
        """
        v2 only: first peer with core-api enabled, with ``port`` set to the
        plugin's port; None if there is none.
        """
        config = config or ClientConfig.from_env()
        async with _scratch(config, http) as scratch:
            return await ApiPeerResolver(scratch, config=config).select_api_peer(peers)

    @classmethod
    async def connect(
        cls,
        network: str,
        version: int = API_VERSION_1,
        peers_override: Optional[Sequence[Mapping[str, Any]]] = None,
        *,
        config: Optional[ClientConfig] = None,
        seeds: Optional[SeedTable] = None,
        http: Optional[HttpClient] = None,
        shuffle: Shuffle = random.shuffle,
    ) -> "ArkClient":
        """
        Connect to a peer of ``network``: the best-ranked one for v1, the first
        one with core-api enabled for v2.

        Raises InvalidVersionError, UnsupportedNetworkError or NoApiPeerFoundError.
        """
        if not version:
            raise InvalidVersionError(version)
        config = config or ClientConfig.from_env()

        async with _scratch(config, http) as scratch:
            prober = PeerProber(scratch, seeds=seeds, config=config, shuffle=shuffle)
            peers = await prober.find_peers(network, version, peers_override)

            if version == API_VERSION_1:
                peer = peers[0] if peers else None
            else:
                peer = await ApiPeerResolver(scratch, config=config).select_api_peer(peers)

        if peer is None:
            raise NoApiPeerFoundError(network=network, plugin=config.api_plugin, peers_checked=len(peers))

        host = base_url(peer.get("ip"), peer.get("port"))
        logger.info("Connected to %s peer %s (v%d)", network, host, version)
        return cls(host, version, config=config, http=http)


__all__ = ["ArkClient"]
