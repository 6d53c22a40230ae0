"""
ark_client.resources
--------------------

Versioned REST resource registry.

    from ark_client.resources import get_resource
    peers = get_resource(2, "peers", http)
    resp = await peers.all()

Lookups are keyed by (API version, resource name); an unknown pair raises
:class:`~ark_client.errors.ResourceNotFoundError`.
"""

from __future__ import annotations

from typing import Dict, Type

from ..errors import ResourceNotFoundError
from ..http import HttpClient
from . import v1, v2
from .base import Resource

RESOURCES: Dict[int, Dict[str, Type[Resource]]] = {
    1: dict(v1.RESOURCES),
    2: dict(v2.RESOURCES),
}


def resource_class(version: int, name: str) -> Type[Resource]:
    try:
        return RESOURCES[version][name]
    except (KeyError, TypeError):
        raise ResourceNotFoundError(version, name) from None


def get_resource(version: int, name: str, connection: HttpClient) -> Resource:
    """Instantiate the ``name`` resource of API ``version`` over ``connection``."""
    return resource_class(version, name)(connection)


__all__ = ["RESOURCES", "Resource", "get_resource", "resource_class"]
