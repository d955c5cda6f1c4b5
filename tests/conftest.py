"""Shared fakes for the NFT service tests"""

import asyncio
from typing import Any, Dict, List, Optional, Union

import pytest

from nft_indexer.config import Config
from nft_indexer.errors import EnrichmentError
from nft_indexer.models import NFT, CompleteNFT, NFTConnection
from nft_indexer.queries import GraphQLQuery
from nft_indexer.service import NFTService


ALICE = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"


def make_node(nft_id: str, **overrides: Any) -> Dict[str, Any]:
    """An indexer node with the wire field names"""
    node = {
        "id": nft_id,
        "owner": ALICE,
        "creator": ALICE,
        "listed": 0,
        "timestampList": None,
        "uri": None,
        "price": "0",
        "priceTiime": "0",
        "serieId": "0",
        "marketplaceId": None,
    }
    node.update(overrides)
    return node


def make_connection(nodes: List[Dict[str, Any]], total_count: Optional[int] = None,
                    has_next: Optional[bool] = None, has_previous: Optional[bool] = None) -> Dict[str, Any]:
    connection: Dict[str, Any] = {
        "totalCount": len(nodes) if total_count is None else total_count,
        "nodes": nodes,
    }
    if has_next is not None or has_previous is not None:
        connection["pageInfo"] = {
            "hasNextPage": bool(has_next),
            "hasPreviousPage": bool(has_previous),
        }
    return connection


class FakeIndexer:
    """Stands in for IndexerClient; answers every query with the same connection"""

    def __init__(self, response: Union[Dict[str, Any], Exception, None] = None):
        self.response = response if response is not None else make_connection([])
        self.queries: List[GraphQLQuery] = []

    async def fetch_nft_entities(self, query: GraphQLQuery) -> NFTConnection:
        self.queries.append(query)
        if isinstance(self.response, Exception):
            raise self.response
        return NFTConnection.model_validate(self.response)


class FakeEnricher:
    """Copies nodes into CompleteNFT, failing or stalling on chosen ids"""

    def __init__(self, fail_on: Optional[set] = None, stall_on: Optional[set] = None):
        self.fail_on = fail_on or set()
        self.stall_on = stall_on or set()
        self.populated: List[str] = []
        self.cancelled: List[str] = []

    async def populate_nft(self, nft: NFT, series=None) -> CompleteNFT:
        if nft.id in self.stall_on:
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                self.cancelled.append(nft.id)
                raise
        if nft.id in self.fail_on:
            raise EnrichmentError(nft.id, "Couldn't get metadata")
        self.populated.append(nft.id)
        return CompleteNFT(**nft.model_dump(), name=f"NFT #{nft.id}")


@pytest.fixture
def test_config() -> Config:
    return Config(indexer_url="http://indexer.test/", max_workers=10, enrich_series=False)


@pytest.fixture
def make_service(test_config):
    def factory(indexer: FakeIndexer, enricher: Optional[FakeEnricher] = None) -> NFTService:
        return NFTService(
            config_instance=test_config,
            indexer=indexer,
            enricher=enricher or FakeEnricher(),
        )
    return factory
