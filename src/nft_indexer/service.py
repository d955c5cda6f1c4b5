"""
NFT query facade
"""

import asyncio
from typing import List, Optional, Type
import aiohttp
from pydantic import ValidationError
from loguru import logger

from .clients.indexer import IndexerClient
from .config import Config, config
from .enrichment import NFTEnricher, SeriesCache
from .errors import (
    EnrichmentError,
    FailureKind,
    IndexerResponseError,
    IndexerTransportError,
    NFTNotFoundError,
    NFTRetrievalError,
    NFTServiceError,
    NFTsRetrievalError,
    OwnerNFTsRetrievalError,
)
from .models import NFT, CompleteNFT, NFTConnection, PaginatedResponse
from .queries import GraphQLQuery, QueriesBuilder, page_to_offset
from .utils import gather_or_cancel


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def classify_failure(exc: BaseException) -> FailureKind:
    """Map an underlying exception to the kind reported to callers"""
    if isinstance(exc, NFTNotFoundError):
        return FailureKind.NOT_FOUND
    if isinstance(exc, EnrichmentError):
        return FailureKind.ENRICHMENT
    if isinstance(exc, (IndexerTransportError, aiohttp.ClientError, asyncio.TimeoutError)):
        return FailureKind.TRANSPORT
    if isinstance(exc, (IndexerResponseError, ValidationError, KeyError, TypeError)):
        return FailureKind.MALFORMED_RESPONSE
    return FailureKind.UNKNOWN


class NFTService:
    """Read-only NFT queries against the indexer, with enrichment"""

    def __init__(
        self,
        config_instance: Optional[Config] = None,
        indexer: Optional[IndexerClient] = None,
        enricher: Optional[NFTEnricher] = None,
    ):
        self.config = config_instance or config
        self.indexer = indexer or IndexerClient(
            self.config.indexer_url,
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
        )
        self.enricher = enricher or NFTEnricher.from_config(self.config, self.indexer)
        logger.info(f"NFT service initialized for indexer {self.config.indexer_url}")

    def _failure(self, error_cls: Type[NFTServiceError], exc: Exception) -> NFTServiceError:
        kind = classify_failure(exc)
        logger.warning(f"{error_cls.default_message} [{kind.value}]: {exc!r}")
        return error_cls(kind)

    async def _populate_all(self, nodes: List[NFT]) -> List[CompleteNFT]:
        """Enrich every node concurrently, at most max_workers at a time"""
        semaphore = asyncio.Semaphore(self.config.max_workers)
        series = SeriesCache()

        async def populate(nft: NFT) -> CompleteNFT:
            async with semaphore:
                return await self.enricher.populate_nft(nft, series)

        return await gather_or_cancel([populate(nft) for nft in nodes])

    async def _list(self, query: GraphQLQuery) -> List[CompleteNFT]:
        entities = await self.indexer.fetch_nft_entities(query)
        nfts = await self._populate_all(entities.nodes)
        logger.info(f"Fetched {len(nfts)} NFTs ({query.operation_name})")
        return nfts

    async def _paginate(self, query: GraphQLQuery) -> PaginatedResponse[CompleteNFT]:
        entities: NFTConnection = await self.indexer.fetch_nft_entities(query)
        if entities.page_info is None:
            raise IndexerResponseError("Paginated response has no pageInfo")
        nfts = await self._populate_all(entities.nodes)
        logger.info(f"Fetched {len(nfts)} of {entities.total_count} NFTs ({query.operation_name})")
        return PaginatedResponse[CompleteNFT](
            data=nfts,
            total_count=entities.total_count,
            has_next_page=entities.page_info.has_next_page,
            has_previous_page=entities.page_info.has_previous_page,
        )

    async def get_all_nfts(self) -> List[CompleteNFT]:
        """
        Requests all NFTs from the indexer

        Raises:
            NFTsRetrievalError: if the indexer or an enrichment lookup fails
        """
        try:
            return await self._list(QueriesBuilder.all_nfts())
        except Exception as e:
            raise self._failure(NFTsRetrievalError, e) from e

    async def get_paginated_nfts(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> PaginatedResponse[CompleteNFT]:
        """
        Returns one page of all NFTs

        Args:
            page: Page number, starting at 1
            limit: Number of elements per page

        Raises:
            NFTsRetrievalError: if the indexer or an enrichment lookup fails
        """
        try:
            query = QueriesBuilder.all_nfts_paginated(limit, page_to_offset(page, limit))
            return await self._paginate(query)
        except Exception as e:
            raise self._failure(NFTsRetrievalError, e) from e

    async def get_nft(self, nft_id: str) -> CompleteNFT:
        """
        Requests a single NFT

        Raises:
            NFTRetrievalError: if the NFT does not exist or can't be fetched;
                `kind` is NOT_FOUND for a missing NFT
        """
        try:
            entities = await self.indexer.fetch_nft_entities(QueriesBuilder.nft_from_id(nft_id))
            if not entities.nodes:
                raise NFTNotFoundError(nft_id)
            return await self.enricher.populate_nft(entities.nodes[0])
        except Exception as e:
            raise self._failure(NFTRetrievalError, e) from e

    async def get_nfts_from_owner(self, owner_id: str) -> List[CompleteNFT]:
        """
        Gets all NFTs owned by a wallet

        Raises:
            OwnerNFTsRetrievalError: if the indexer or an enrichment lookup fails
        """
        try:
            return await self._list(QueriesBuilder.nfts_from_owner_id(owner_id))
        except Exception as e:
            raise self._failure(OwnerNFTsRetrievalError, e) from e

    async def get_paginated_nfts_from_owner(
        self,
        owner_id: str,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> PaginatedResponse[CompleteNFT]:
        """
        Returns one page of a wallet's NFTs

        Raises:
            OwnerNFTsRetrievalError: if the indexer or an enrichment lookup fails
        """
        try:
            query = QueriesBuilder.nfts_from_owner_id_paginated(owner_id, limit, page_to_offset(page, limit))
            return await self._paginate(query)
        except Exception as e:
            raise self._failure(OwnerNFTsRetrievalError, e) from e
