"""Classify a peer's protocol generation from its advertised version string."""

from __future__ import annotations

import re
from typing import Any, Mapping

_V1_RE = re.compile(r"^1\.")


def peer_version(peer: Any) -> int:
    """
    Return 1 for legacy peers (no version, or a ``1.x`` version) and 2 otherwise.

    ``peer`` may be a mapping or any object with an optional ``version`` attribute.
    """
    if isinstance(peer, Mapping):
        version = peer.get("version")
    else:
        version = getattr(peer, "version", None)
    if not version or _V1_RE.match(str(version)):
        return 1
    return 2


__all__ = ["peer_version"]
