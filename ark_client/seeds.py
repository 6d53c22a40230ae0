"""
ARK client — static seed peers per network
==========================================

Discovery starts from a seed table: ``{network name: [peer, ...]}``. The table
shipped with the package lives in ``ark_client/data/peers.json``; callers may
point ``ARK_CLIENT_SEEDS_FILE`` (or :attr:`ClientConfig.seeds_file`) at another
JSON document of the same shape, or build a :class:`SeedTable` directly.

JSON schema
-----------
{
  "mainnet": [{"ip": "5.39.9.240", "port": 4001}, ...],
  "devnet":  [{"ip": "167.114.29.51", "port": 4002, "isHttps": false}, ...]
}

The table is immutable once loaded and every lookup hands out deep copies, so
discovery can reorder or annotate peers without touching the shared data.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from functools import lru_cache
from importlib import resources as _resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

Peer = Dict[str, Any]

_PACKAGED = "peers.json"


def _validate_peer(network: str, peer: Any) -> Peer:
    if not isinstance(peer, Mapping):
        raise ValueError(f"seed for {network!r} must be an object, got {type(peer).__name__}")
    ip = peer.get("ip")
    port = peer.get("port")
    if not isinstance(ip, str) or not ip:
        raise ValueError(f"seed for {network!r} is missing an 'ip': {dict(peer)!r}")
    if isinstance(port, bool) or not isinstance(port, int):
        raise ValueError(f"seed {ip!r} for {network!r} needs an integer 'port'")
    return dict(peer)


class SeedTable(Mapping[str, Tuple[Peer, ...]]):
    """Read-only mapping of network name to its ordered seed peers."""

    def __init__(self, networks: Mapping[str, Sequence[Mapping[str, Any]]]) -> None:
        frozen: Dict[str, Tuple[Peer, ...]] = {}
        for name, peers in networks.items():
            if isinstance(peers, (str, bytes)) or not isinstance(peers, Sequence):
                raise ValueError(f"seeds for {name!r} must be a list")
            frozen[str(name)] = tuple(_validate_peer(name, p) for p in peers)
        self._networks = MappingProxyType(frozen)

    def __getitem__(self, network: str) -> Tuple[Peer, ...]:
        return self._networks[network]

    def __iter__(self) -> Iterator[str]:
        return iter(self._networks)

    def __len__(self) -> int:
        return len(self._networks)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{k}={len(v)}" for k, v in self._networks.items())
        return f"SeedTable({sizes})"

    def peers(self, network: str) -> List[Peer]:
        """Deep copy of the seeds for ``network``; raises KeyError when unknown."""
        return copy.deepcopy(list(self._networks[network]))


def load_seed_table(path: Optional[Union[str, os.PathLike]] = None) -> SeedTable:
    """
    Load a seed table from ``path`` or, without one, from the packaged data.
    Raises ValueError on malformed documents.
    """
    if path is None:
        raw = _resources.files("ark_client.data").joinpath(_PACKAGED).read_text(encoding="utf-8")
        source = f"package:{_PACKAGED}"
    else:
        raw = Path(path).read_text(encoding="utf-8")
        source = str(path)
    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"seed table {source} is not valid JSON: {e}") from e
    if not isinstance(obj, Mapping):
        raise ValueError(f"seed table {source} must be a JSON object")
    table = SeedTable(obj)
    logger.debug("Loaded seed table from %s: %r", source, table)
    return table


@lru_cache(maxsize=None)
def _cached_table(path: Optional[str]) -> SeedTable:
    return load_seed_table(path)


def default_seed_table(path: Optional[str] = None) -> SeedTable:
    """
    Cached seed table: ``path`` if given, else ``ARK_CLIENT_SEEDS_FILE``, else
    the packaged defaults.
    """
    return _cached_table(path or os.getenv("ARK_CLIENT_SEEDS_FILE") or None)


__all__ = ["Peer", "SeedTable", "load_seed_table", "default_seed_table"]
