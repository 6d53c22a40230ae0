"""API v2 resources (core 2.x): identifiers are path segments, searches are POSTs."""

from __future__ import annotations

from typing import Any

from ..http import ApiResponse
from .base import Query, Resource


class Blocks(Resource):
    async def all(self, query: Query = None) -> ApiResponse:
        return await self._get("blocks", query=query)

    async def get(self, block_id: str) -> ApiResponse:
        return await self._get("blocks", block_id)

    async def transactions(self, block_id: str, query: Query = None) -> ApiResponse:
        return await self._get("blocks", block_id, "transactions", query=query)

    async def search(self, payload: Any) -> ApiResponse:
        return await self._post("blocks", "search", payload=payload)


class Delegates(Resource):
    async def all(self, query: Query = None) -> ApiResponse:
        return await self._get("delegates", query=query)

    async def get(self, delegate_id: str) -> ApiResponse:
        return await self._get("delegates", delegate_id)

    async def blocks(self, delegate_id: str, query: Query = None) -> ApiResponse:
        return await self._get("delegates", delegate_id, "blocks", query=query)

    async def voters(self, delegate_id: str, query: Query = None) -> ApiResponse:
        return await self._get("delegates", delegate_id, "voters", query=query)

    async def voter_balances(self, delegate_id: str) -> ApiResponse:
        return await self._get("delegates", delegate_id, "voters", "balances")


class Node(Resource):
    async def status(self) -> ApiResponse:
        return await self._get("node", "status")

    async def syncing(self) -> ApiResponse:
        return await self._get("node", "syncing")

    async def configuration(self) -> ApiResponse:
        return await self._get("node", "configuration")


class Peers(Resource):
    async def all(self, query: Query = None) -> ApiResponse:
        return await self._get("peers", query=query)

    async def get(self, ip: str) -> ApiResponse:
        return await self._get("peers", ip)


class Transactions(Resource):
    async def all(self, query: Query = None) -> ApiResponse:
        return await self._get("transactions", query=query)

    async def get(self, transaction_id: str) -> ApiResponse:
        return await self._get("transactions", transaction_id)

    async def create(self, payload: Any) -> ApiResponse:
        return await self._post("transactions", payload=payload)

    async def all_unconfirmed(self, query: Query = None) -> ApiResponse:
        return await self._get("transactions", "unconfirmed", query=query)

    async def get_unconfirmed(self, transaction_id: str) -> ApiResponse:
        return await self._get("transactions", "unconfirmed", transaction_id)

    async def search(self, payload: Any) -> ApiResponse:
        return await self._post("transactions", "search", payload=payload)

    async def types(self) -> ApiResponse:
        return await self._get("transactions", "types")

    async def fees(self) -> ApiResponse:
        return await self._get("transactions", "fees")


class Votes(Resource):
    async def all(self, query: Query = None) -> ApiResponse:
        return await self._get("votes", query=query)

    async def get(self, vote_id: str) -> ApiResponse:
        return await self._get("votes", vote_id)


class Wallets(Resource):
    async def all(self, query: Query = None) -> ApiResponse:
        return await self._get("wallets", query=query)

    async def top(self, query: Query = None) -> ApiResponse:
        return await self._get("wallets", "top", query=query)

    async def get(self, wallet_id: str) -> ApiResponse:
        return await self._get("wallets", wallet_id)

    async def transactions(self, wallet_id: str, query: Query = None) -> ApiResponse:
        return await self._get("wallets", wallet_id, "transactions", query=query)

    async def transactions_sent(self, wallet_id: str, query: Query = None) -> ApiResponse:
        return await self._get("wallets", wallet_id, "transactions", "sent", query=query)

    async def transactions_received(self, wallet_id: str, query: Query = None) -> ApiResponse:
        return await self._get("wallets", wallet_id, "transactions", "received", query=query)

    async def votes(self, wallet_id: str, query: Query = None) -> ApiResponse:
        return await self._get("wallets", wallet_id, "votes", query=query)

    async def search(self, payload: Any) -> ApiResponse:
        return await self._post("wallets", "search", payload=payload)


RESOURCES = {
    "blocks": Blocks,
    "delegates": Delegates,
    "node": Node,
    "peers": Peers,
    "transactions": Transactions,
    "votes": Votes,
    "wallets": Wallets,
}
