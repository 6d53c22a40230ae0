"""
ARK client — Python
Discover peers of an ARK network and call their versioned REST APIs.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import ClientConfig  # noqa: F401
from .errors import (  # noqa: F401
    ArkClientError,
    HttpStatusError,
    InvalidVersionError,
    NoApiPeerFoundError,
    ResourceNotFoundError,
    TransportError,
    UnsupportedNetworkError,
)

# Transport & resources
from .http import ApiResponse, HttpClient  # noqa: F401
from .resources import get_resource  # noqa: F401

# Discovery
from .peers import ApiPeerResolver, PeerProber, merge_peers, peer_version  # noqa: F401
from .seeds import SeedTable, default_seed_table, load_seed_table  # noqa: F401
from .utils.sort import sort_peers  # noqa: F401

# Facade
from .client import ArkClient  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "ClientConfig",
    "ArkClientError", "UnsupportedNetworkError", "InvalidVersionError",
    "NoApiPeerFoundError", "ResourceNotFoundError", "TransportError", "HttpStatusError",
    # Transport
    "HttpClient", "ApiResponse", "get_resource",
    # Discovery
    "PeerProber", "ApiPeerResolver", "merge_peers", "peer_version", "sort_peers",
    "SeedTable", "load_seed_table", "default_seed_table",
    # Facade
    "ArkClient",
]
