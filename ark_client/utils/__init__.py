"""
ark_client.utils
----------------

Small helpers shared by the transport and the discovery code:

- retry: backoff policy and async retry loop for transient transport errors
- sort:  peer ordering by block height, then latency
"""

from .retry import RetryPolicy, aretry_call, backoff_delay  # noqa: F401
from .sort import sort_peers  # noqa: F401

__all__ = ["RetryPolicy", "aretry_call", "backoff_delay", "sort_peers"]
