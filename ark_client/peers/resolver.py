"""
Locate a v2 peer that exposes the core-api plugin.

A v2 node's p2p port does not serve the public REST API; the API runs as the
``@arkecosystem/core-api`` plugin on its own port, which the node advertises in
its configuration document. Older nodes only publish that document through
core-wallet-api on port 4040, hence the fallback attempts below.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..config import ClientConfig
from ..constants import API_VERSION_2, CONFIG_ENDPOINT
from ..errors import TransportError
from ..http import HttpClient
from ..utils.retry import RetryPolicy
from .prober import base_url

logger = logging.getLogger(__name__)

Peer = Dict[str, Any]

# Port of the authority part only; IPv6 literals are bracketed.
_PORT_RE = re.compile(r"^(?P<authority>(?:[A-Za-z][A-Za-z0-9+.-]*://)?(?:\[[^\]]*\]|[^:/\[\]]*)):\d+")


@dataclass(frozen=True)
class ConfigAttempt:
    host: str
    endpoint: Optional[str]

    @property
    def url(self) -> str:
        return self.host + (self.endpoint or "")


def companion_host(host: str, port: int) -> str:
    """``host`` with the port of its authority replaced by ``port``; unchanged without one."""
    return _PORT_RE.sub(lambda m: f"{m.group('authority')}:{port}", host, count=1)


class ApiPeerResolver:
    """Find peers with an enabled core-api plugin and rewrite their port."""

    def __init__(self, http: HttpClient, *, config: Optional[ClientConfig] = None) -> None:
        self.http = http
        self.config = config or ClientConfig.from_env()

    def attempts(self, host: str) -> List[ConfigAttempt]:
        wallet_api_host = companion_host(host, self.config.wallet_api_port)
        return [
            ConfigAttempt(host, CONFIG_ENDPOINT),
            ConfigAttempt(wallet_api_host, CONFIG_ENDPOINT),
            ConfigAttempt(wallet_api_host, None),
        ]

    async def fetch_peer_config(self, host: str) -> Optional[Dict[str, Any]]:
        """
        Configuration document of the node at ``host`` (its p2p URL), or None.

        The attempts are tried strictly in order and the first one returning a
        non-empty ``data`` payload wins.
        """
        for attempt in self.attempts(host):
            connection = self.http.bind(
                attempt.host, API_VERSION_2, timeout=self.config.config_timeout, retry=RetryPolicy()
            )
            try:
                response = await connection.get(attempt.endpoint)
            except TransportError as e:
                logger.debug("Error on `%s`: %s", attempt.url, e)
                continue
            body = response.data
            payload = body.get("data") if isinstance(body, Mapping) else None
            if payload:
                return payload
            logger.debug("Empty configuration from `%s`", attempt.url)
        return None

    def api_port(self, config: Any) -> Optional[int]:
        """Port of the enabled core-api plugin declared in ``config``, if any."""
        if not isinstance(config, Mapping):
            return None
        plugins = config.get("plugins")
        if not isinstance(plugins, Mapping):
            return None
        plugin = plugins.get(self.config.api_plugin)
        if not isinstance(plugin, Mapping) or not plugin.get("enabled"):
            return None
        return plugin.get("port")

    async def select_api_peer(self, peers: Sequence[Mapping[str, Any]]) -> Optional[Peer]:
        """
        First peer (in the given order) with core-api enabled, its ``port``
        replaced by the plugin's port. None when no peer qualifies.
        """
        for peer in peers:
            host = base_url(peer.get("ip"), peer.get("port"))
            port = self.api_port(await self.fetch_peer_config(host))
            if port is not None:
                logger.info("Selected API peer %s (core-api port %s)", peer.get("ip"), port)
                return {**peer, "port": port}
        return None


__all__ = ["ApiPeerResolver", "ConfigAttempt", "companion_host"]
