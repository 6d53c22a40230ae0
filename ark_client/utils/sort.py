"""Peer ordering: best block height first, then lowest delay."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Tuple


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _rank(peer: Mapping[str, Any]) -> Tuple[int, float, int, float]:
    height = _number(peer.get("height"))
    delay = _number(peer.get("delay"))
    # Missing values sort after present ones.
    return (
        0 if height is not None else 1,
        -height if height is not None else 0.0,
        0 if delay is not None else 1,
        delay if delay is not None else 0.0,
    )


def sort_peers(peers: Iterable[Mapping[str, Any]]) -> List[Any]:
    """
    Return a new list ordered by descending ``height`` then ascending ``delay``.

    The sort is stable, so peers with equal metrics keep their input order.
    """
    return sorted(peers, key=_rank)


__all__ = ["sort_peers"]
