"""
Version helpers for the ARK Python client.

We keep a static ``__version__`` (PEP 440); it is also used to build the
default ``User-Agent`` header sent to peers.
"""

from __future__ import annotations

# Bump this when publishing
__version__ = "0.1.0"


def user_agent(product: str = "ark-client-py") -> str:
    """Default ``User-Agent`` value, e.g. ``'ark-client-py/0.1.0'``."""
    return f"{product}/{__version__}"


__all__ = ["__version__", "user_agent"]
