"""
Enrichment of raw indexer nodes

`NFTEnricher.populate_nft` attaches metadata (name, media links), owner and
creator profiles, categories and series statistics to one NFT. The lookups
for a node run concurrently; the first one that fails cancels the rest and
surfaces as `EnrichmentError`.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple
import aiohttp
from loguru import logger

from .clients.indexer import IndexerClient
from .clients.ipfs import IPFSClient
from .clients.ternoa import TernoaAPIClient
from .config import Config
from .errors import EnrichmentError, IndexerError
from .models import NFT, Category, CompleteNFT, NFTConnection, UserProfile
from .normalizer import NFTMetadata, Normalizer
from .queries import QueriesBuilder
from .utils import gather_or_cancel


NO_SERIE = "0"

LOOKUP_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, IndexerError, ValueError)


class SeriesCache:
    """Series fetched while answering one request, so NFTs of the same series share a query"""

    def __init__(self):
        self._series: Dict[str, NFTConnection] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    async def get(self, serie_id: str, fetch: Callable[[], Awaitable[NFTConnection]]) -> NFTConnection:
        lock = self._locks.setdefault(serie_id, asyncio.Lock())
        async with lock:
            if serie_id not in self._series:
                self._series[serie_id] = await fetch()
            return self._series[serie_id]


class NFTEnricher:
    """Populates NFTs with their off-chain data"""

    def __init__(
        self,
        indexer: IndexerClient,
        ipfs: Optional[IPFSClient] = None,
        ternoa_api: Optional[TernoaAPIClient] = None,
        enrich_series: bool = True,
    ):
        self.indexer = indexer
        self.ipfs = ipfs
        self.ternoa_api = ternoa_api
        self.enrich_series = enrich_series

    @classmethod
    def from_config(cls, config: Config, indexer: IndexerClient) -> "NFTEnricher":
        ipfs = IPFSClient(config.ipfs_gateway, timeout=config.timeout, max_retries=config.max_retries)
        ternoa_api = None
        if config.ternoa_api_url:
            ternoa_api = TernoaAPIClient(config.ternoa_api_url, timeout=config.timeout, max_retries=config.max_retries)
        else:
            logger.info("TERNOA_API_URL not set, profiles and categories will not be populated")
        return cls(indexer, ipfs=ipfs, ternoa_api=ternoa_api, enrich_series=config.enrich_series)

    async def _lookup(self, nft: NFT, what: str, aw: Awaitable[Any]) -> Any:
        try:
            return await aw
        except LOOKUP_ERRORS as e:
            raise EnrichmentError(nft.id, f"Couldn't get {what}: {e!r}") from e

    async def _populate_metadata(self, nft: NFT) -> NFTMetadata:
        if not nft.uri or self.ipfs is None:
            return NFTMetadata()
        document = await self._lookup(nft, "metadata", self.ipfs.fetch_metadata(nft.uri))
        if document is None:
            return NFTMetadata()
        return Normalizer.normalize_metadata(document, self.ipfs.gateway)

    async def _populate_user(self, nft: NFT, wallet_id: Optional[str], role: str) -> Optional[UserProfile]:
        if not wallet_id or self.ternoa_api is None:
            return None
        return await self._lookup(nft, f"{role} profile", self.ternoa_api.get_user(wallet_id))

    async def _populate_categories(self, nft: NFT) -> Optional[List[Category]]:
        if self.ternoa_api is None:
            return None
        return await self._lookup(nft, "categories", self.ternoa_api.get_nft_categories(nft.id))

    async def _populate_serie(
        self, nft: NFT, series: Optional[SeriesCache] = None
    ) -> Tuple[Optional[int], Optional[int], Optional[List[NFT]]]:
        if not self.enrich_series or not nft.serie_id or nft.serie_id == NO_SERIE:
            return nft.total_nft, nft.total_listed_nft, nft.serie_data

        def fetch() -> Awaitable[NFTConnection]:
            return self.indexer.fetch_nft_entities(QueriesBuilder.nfts_from_serie(nft.serie_id))

        lookup = fetch() if series is None else series.get(nft.serie_id, fetch)
        serie = await self._lookup(nft, "series", lookup)
        total = serie.total_count if serie.total_count is not None else len(serie.nodes)
        listed = sum(1 for node in serie.nodes if node.listed == 1)
        return total, listed, serie.nodes

    async def populate_nft(self, nft: NFT, series: Optional[SeriesCache] = None) -> CompleteNFT:
        """
        Return `nft` with its metadata, profiles, categories and series filled in

        Pass the same `series` cache for every NFT of one response to query
        each series once.
        """
        metadata, owner_data, creator_data, categories, serie = await gather_or_cancel([
            self._populate_metadata(nft),
            self._populate_user(nft, nft.owner, "owner"),
            self._populate_user(nft, nft.creator, "creator"),
            self._populate_categories(nft),
            self._populate_serie(nft, series),
        ])
        total_nft, total_listed_nft, serie_data = serie

        data = nft.model_dump()
        data.update(
            name=metadata.name,
            description=metadata.description,
            media=metadata.media,
            crypted_media=metadata.crypted_media,
            owner_data=owner_data,
            creator_data=creator_data,
            categories=categories,
            total_nft=total_nft,
            total_listed_nft=total_listed_nft,
            serie_data=serie_data,
        )
        return CompleteNFT(**data)
