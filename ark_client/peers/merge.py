"""Fold successive peer-list observations into one list keyed by ``ip``."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

Peer = Dict[str, Any]


def merge_peers(base: Sequence[Mapping[str, Any]], incoming: Sequence[Mapping[str, Any]]) -> List[Peer]:
    """
    Overlay ``incoming`` onto ``base``.

    Every peer of ``base`` keeps its position and is updated with the first
    ``incoming`` record sharing its ``ip`` (incoming fields win). Peers only
    seen in ``incoming`` follow, in their incoming order. Neither input is
    mutated.
    """
    merged: List[Peer] = []
    for old in base:
        new = next((p for p in incoming if p.get("ip") == old.get("ip")), {})
        merged.append({**old, **new})

    placed = {p.get("ip") for p in merged}
    for new in incoming:
        ip = new.get("ip")
        if ip not in placed:
            merged.append(dict(new))
            placed.add(ip)
    return merged


__all__ = ["merge_peers"]
