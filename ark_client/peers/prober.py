"""
ARK client — peer discovery by probing seed peers
=================================================

Starting from a seed table (or a caller-supplied override list), ask peers one
at a time for *their* peer lists and merge the answers until a quorum of
useful responses has been collected.

Probe loop
----------
1. Copy and shuffle the candidates so repeated calls do not all hit the first
   seeds.
2. For each candidate, GET ``api/peers`` through a fresh view of one scratch
   transport (short timeout, no retries).
3. Interpret the body by API version:
     v1: ``{"success": true, "peers": [...]}``
     v2: ``{"data": [...]}``
4. Drop self addresses, v1 peers without an OK status, and peers of the other
   protocol generation.
5. Merge what is left into the running result. A non-empty filtered list is
   one successful check; stop at ``quorum`` checks.

Any failure while probing a single candidate (timeout, refused connection,
HTTP error, garbage body) only disqualifies that candidate. If nothing useful
came back, the candidates themselves are returned, so discovery never yields an
empty list for a non-empty input.
"""

from __future__ import annotations

import copy
import ipaddress
import logging
import random
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, MutableSequence, Optional, Sequence

from ..config import ClientConfig
from ..constants import API_VERSION_1, API_VERSION_2
from ..errors import TransportError, UnsupportedNetworkError
from ..http import HttpClient
from ..resources import get_resource
from ..seeds import SeedTable, default_seed_table
from ..utils.retry import RetryPolicy
from ..utils.sort import sort_peers
from .merge import merge_peers
from .version import peer_version

logger = logging.getLogger(__name__)

Peer = Dict[str, Any]
Shuffle = Callable[[MutableSequence[Any]], None]


# ----------------------------
# Address helpers
# ----------------------------

def normalize_ip(ip: Any) -> str:
    """
    Canonical text form of an IP: IPv4-mapped IPv6 collapses to IPv4 and IPv6
    is compressed. Non-IP strings (hostnames) are returned stripped, lowercased.
    """
    text = str(ip).strip().strip("[]")
    try:
        addr = ipaddress.ip_address(text)
    except ValueError:
        return text.lower()
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return str(addr.ipv4_mapped)
    return str(addr)


def self_address_set(addresses: Iterable[str]) -> FrozenSet[str]:
    return frozenset(normalize_ip(a) for a in addresses)


def base_url(ip: Any, port: Any, scheme: str = "http") -> str:
    """``scheme://ip:port`` with IPv6 literals wrapped in brackets."""
    host = str(ip).strip().strip("[]")
    try:
        if isinstance(ipaddress.ip_address(host), ipaddress.IPv6Address):
            host = f"[{host}]"
    except ValueError:
        pass
    return f"{scheme}://{host}:{port}"


def peer_url(peer: Mapping[str, Any]) -> str:
    scheme = "https" if peer.get("isHttps") else "http"
    return base_url(peer.get("ip"), peer.get("port"), scheme)


# ----------------------------
# Prober
# ----------------------------

class PeerProber:
    """
    Discover live peers of a network.

    Parameters
    ----------
    http : HttpClient
        Scratch transport. Each probe uses ``http.bind(peer_url, version)``
        with ``config.probe_timeout`` and no retries; the scratch client keeps no
        per-peer state.
    seeds : SeedTable | None
        Static seed table; defaults to :func:`ark_client.seeds.default_seed_table`.
    config : ClientConfig | None
        Quorum, probe timeout, self addresses and OK statuses.
    shuffle : callable
        In-place uniform shuffle; ``random.shuffle`` by default. Tests pass a
        deterministic one.
    """

    def __init__(
        self,
        http: HttpClient,
        *,
        seeds: Optional[SeedTable] = None,
        config: Optional[ClientConfig] = None,
        shuffle: Shuffle = random.shuffle,
    ) -> None:
        self.config = config or ClientConfig.from_env()
        self.http = http
        self.seeds = seeds if seeds is not None else default_seed_table(self.config.seeds_file)
        self._shuffle = shuffle
        self._self_ips = self_address_set(self.config.self_addresses)

    def candidates(self, network: str, peers_override: Optional[Sequence[Mapping[str, Any]]] = None) -> List[Peer]:
        """Deep copy of the peers discovery starts from."""
        if peers_override is not None:
            return copy.deepcopy([dict(p) for p in peers_override])
        if network not in self.seeds:
            raise UnsupportedNetworkError(network)
        return self.seeds.peers(network)

    async def find_peers(
        self,
        network: str,
        version: int = API_VERSION_1,
        peers_override: Optional[Sequence[Mapping[str, Any]]] = None,
    ) -> List[Peer]:
        """
        Find the available peers of ``network``, sorted by block height and delay.

        Raises UnsupportedNetworkError when ``network`` has no seeds and no
        override is given.
        """
        network_peers = self.candidates(network, peers_override)
        order = list(network_peers)
        self._shuffle(order)

        checks = 0
        peers: List[Peer] = []
        for candidate in order:
            host = peer_url(candidate)
            found = await self.probe(host, version)
            if not found:
                continue
            peers = merge_peers(peers, found)
            checks += 1
            logger.debug("Peer %s returned %d usable peers (%d/%d)", host, len(found), checks, self.config.quorum)
            if checks >= self.config.quorum:
                break

        if peers:
            logger.info("Discovered %d %s peers (v%d) after %d checks", len(peers), network, version, checks)
            return copy.deepcopy(sort_peers(peers))

        logger.warning(
            "No usable peer lists for %s (v%d); falling back to %d candidates",
            network, version, len(network_peers),
        )
        return copy.deepcopy(sort_peers(network_peers))

    async def probe(self, host: str, version: int) -> List[Peer]:
        """
        Ask ``host`` for its peers and return the usable ones.

        Never raises for transport or payload problems; those yield ``[]``.
        """
        connection = self.http.bind(host, version, timeout=self.config.probe_timeout, retry=RetryPolicy())
        try:
            response = await get_resource(version, "peers", connection).all()
            listed = self._response_peers(response.data, version)
        except (TransportError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.debug("Cannot find peers of `%s`: %s", host, e)
            return []
        if not listed:
            return []
        return [p for p in listed if self.is_usable(p, version)]

    def is_usable(self, peer: Any, version: int) -> bool:
        if not isinstance(peer, Mapping):
            return False
        if version == API_VERSION_1 and peer.get("status") not in self.config.ok_statuses:
            return False
        if normalize_ip(peer.get("ip")) in self._self_ips:
            return False
        return peer_version(peer) == version

    @staticmethod
    def _response_peers(body: Any, version: int) -> List[Any]:
        if not isinstance(body, Mapping):
            return []
        if version == API_VERSION_1:
            listed = body.get("peers") if body.get("success") else None
        elif version == API_VERSION_2:
            listed = body.get("data")
        else:
            listed = None
        return list(listed) if isinstance(listed, list) else []


__all__ = ["PeerProber", "base_url", "normalize_ip", "peer_url", "self_address_set"]
