"""
API v1 resources (core 1.x).

v1 endpoints are query-string driven: lookups pass identifiers as query
parameters rather than path segments.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..http import ApiResponse
from .base import Query, Resource


def _q(query: Query, **extra: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = dict(query or {})
    out.update({k: v for k, v in extra.items() if v is not None})
    return out


class Accounts(Resource):
    async def all(self, query: Query = None) -> ApiResponse:
        return await self._get("accounts", "getAllAccounts", query=query)

    async def get(self, address: str) -> ApiResponse:
        return await self._get("accounts", query={"address": address})

    async def balance(self, address: str) -> ApiResponse:
        return await self._get("accounts", "getBalance", query={"address": address})

    async def public_key(self, address: str) -> ApiResponse:
        return await self._get("accounts", "getPublicKey", query={"address": address})

    async def delegates(self, address: str, query: Query = None) -> ApiResponse:
        return await self._get("accounts", "delegates", query=_q(query, address=address))

    async def delegates_fee(self) -> ApiResponse:
        return await self._get("accounts", "delegates", "fee")

    async def top(self, query: Query = None) -> ApiResponse:
        return await self._get("accounts", "top", query=query)

    async def count(self) -> ApiResponse:
        return await self._get("accounts", "count")


class Blocks(Resource):
    async def all(self, query: Query = None) -> ApiResponse:
        return await self._get("blocks", query=query)

    async def get(self, block_id: str) -> ApiResponse:
        return await self._get("blocks", "get", query={"id": block_id})

    async def epoch(self) -> ApiResponse:
        return await self._get("blocks", "getEpoch")

    async def fee(self) -> ApiResponse:
        return await self._get("blocks", "getFee")

    async def fees(self) -> ApiResponse:
        return await self._get("blocks", "getFees")

    async def height(self) -> ApiResponse:
        return await self._get("blocks", "getHeight")

    async def milestone(self) -> ApiResponse:
        return await self._get("blocks", "getMilestone")

    async def nethash(self) -> ApiResponse:
        return await self._get("blocks", "getNethash")

    async def reward(self) -> ApiResponse:
        return await self._get("blocks", "getReward")

    async def status(self) -> ApiResponse:
        return await self._get("blocks", "getStatus")

    async def supply(self) -> ApiResponse:
        return await self._get("blocks", "getSupply")


class Delegates(Resource):
    async def all(self, query: Query = None) -> ApiResponse:
        return await self._get("delegates", query=query)

    async def get(self, query: Query) -> ApiResponse:
        return await self._get("delegates", "get", query=query)

    async def count(self) -> ApiResponse:
        return await self._get("delegates", "count")

    async def fee(self) -> ApiResponse:
        return await self._get("delegates", "fee")

    async def forged_by_account(self, generator_public_key: str) -> ApiResponse:
        return await self._get(
            "delegates", "forging", "getForgedByAccount",
            query={"generatorPublicKey": generator_public_key},
        )

    async def search(self, q: str, query: Query = None) -> ApiResponse:
        return await self._get("delegates", "search", query=_q(query, q=q))

    async def voters(self, public_key: str, query: Query = None) -> ApiResponse:
        return await self._get("delegates", "voters", query=_q(query, publicKey=public_key))

    async def next_forgers(self) -> ApiResponse:
        return await self._get("delegates", "getNextForgers")


class Loader(Resource):
    async def status(self) -> ApiResponse:
        return await self._get("loader", "status")

    async def sync_status(self) -> ApiResponse:
        return await self._get("loader", "status", "sync")

    async def autoconfigure(self) -> ApiResponse:
        return await self._get("loader", "autoconfigure")


class Peers(Resource):
    async def all(self, query: Query = None) -> ApiResponse:
        return await self._get("peers", query=query)

    async def get(self, ip: str, port: Optional[int] = None) -> ApiResponse:
        return await self._get("peers", "get", query=_q(None, ip=ip, port=port))

    async def version(self) -> ApiResponse:
        return await self._get("peers", "version")


class Signatures(Resource):
    async def fee(self) -> ApiResponse:
        return await self._get("signatures", "fee")


class Transactions(Resource):
    async def all(self, query: Query = None) -> ApiResponse:
        return await self._get("transactions", query=query)

    async def get(self, transaction_id: str) -> ApiResponse:
        return await self._get("transactions", "get", query={"id": transaction_id})

    async def create(self, payload: Any) -> ApiResponse:
        return await self._post("transactions", payload=payload)

    async def all_unconfirmed(self, query: Query = None) -> ApiResponse:
        return await self._get("transactions", "unconfirmed", query=query)

    async def get_unconfirmed(self, transaction_id: str) -> ApiResponse:
        return await self._get("transactions", "unconfirmed", "get", query={"id": transaction_id})


RESOURCES = {
    "accounts": Accounts,
    "blocks": Blocks,
    "delegates": Delegates,
    "loader": Loader,
    "peers": Peers,
    "signatures": Signatures,
    "transactions": Transactions,
}
