"""
Discovery-wide constants for the ARK client.

These values are centralized so the prober, the API peer resolver and the
configuration layer share one set of defaults. Most of them can be overridden
per client through :class:`ark_client.config.ClientConfig`.
"""
from __future__ import annotations

from typing import Final, Tuple, Union

__all__ = [
    # Protocol versions
    "API_VERSION_1",
    "API_VERSION_2",
    "DEFAULT_API_VERSION",
    # Discovery heuristics
    "PEER_QUORUM",
    "SELF_ADDRESSES",
    "OK_STATUSES",
    # Sub-service lookup
    "CORE_API_PLUGIN",
    "WALLET_API_PORT",
    "CONFIG_ENDPOINT",
    # Timeouts (seconds)
    "REQUEST_TIMEOUT",
    "PROBE_TIMEOUT",
    "CONFIG_TIMEOUT",
    # Retry
    "MAX_RETRIES",
    "BACKOFF_BASE",
    "RETRIABLE_HTTP_STATUSES",
]


# ---- protocol versions --------------------------------------------------------

API_VERSION_1: Final[int] = 1
API_VERSION_2: Final[int] = 2
DEFAULT_API_VERSION: Final[int] = API_VERSION_1


# ---- discovery heuristics -----------------------------------------------------

# Successful peer-list responses after which discovery stops early.
PEER_QUORUM: Final[int] = 2

# Addresses a node may report for itself. Compared after IPv4/IPv6 normalisation.
SELF_ADDRESSES: Final[Tuple[str, ...]] = ("127.0.0.1", "::ffff:127.0.0.1", "::1")

# v1 peers only count as alive with one of these statuses (exact match).
OK_STATUSES: Final[Tuple[Union[str, int], ...]] = ("OK", 200)


# ---- sub-service lookup (v2) ----------------------------------------------------

CORE_API_PLUGIN: Final[str] = "@arkecosystem/core-api"

# core-wallet-api listens here and proxies /config for nodes that hide it.
WALLET_API_PORT: Final[int] = 4040

CONFIG_ENDPOINT: Final[str] = "/config"


# ---- timeouts (seconds) ---------------------------------------------------------

REQUEST_TIMEOUT: Final[float] = 10.0
PROBE_TIMEOUT: Final[float] = 5.0
CONFIG_TIMEOUT: Final[float] = 3.0


# ---- retry --------------------------------------------------------------------

# Resource calls are not retried unless the caller opts in.
MAX_RETRIES: Final[int] = 0
BACKOFF_BASE: Final[float] = 0.25

# Typical transient HTTP statuses: 429/502/503/504
RETRIABLE_HTTP_STATUSES: Final[frozenset] = frozenset({429, 502, 503, 504})
