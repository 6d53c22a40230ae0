"""
ark_client.peers
----------------

Peer discovery and selection:

- peer_version:    classify a peer record as protocol generation 1 or 2
- merge_peers:     fold a newer peer-list observation into an older one
- PeerProber:      probe seed peers until a quorum of peer lists is merged
- ApiPeerResolver: find a v2 peer exposing the core-api plugin
"""

from .merge import merge_peers  # noqa: F401
from .prober import PeerProber, base_url, normalize_ip, peer_url  # noqa: F401
from .resolver import ApiPeerResolver, companion_host  # noqa: F401
from .version import peer_version  # noqa: F401

__all__ = [
    "merge_peers",
    "peer_version",
    "PeerProber",
    "ApiPeerResolver",
    "base_url",
    "normalize_ip",
    "peer_url",
    "companion_host",
]
