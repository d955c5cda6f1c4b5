"""GraphQL client for the NFT indexer"""

import asyncio
from typing import Any, Dict
import aiohttp
from pydantic import ValidationError
from loguru import logger

from .base import BaseAPIClient
from ..errors import IndexerResponseError, IndexerTransportError
from ..models import NFTConnection, NFTListResponse
from ..queries import GraphQLQuery


class IndexerClient(BaseAPIClient):
    """Sends GraphQL queries to a SubQuery indexer"""

    def __init__(self, endpoint: str, timeout: int = 30, max_retries: int = 0):
        super().__init__(endpoint, timeout=timeout, max_retries=max_retries)

    async def execute(self, query: GraphQLQuery) -> Dict[str, Any]:
        """Run a query and return its `data` object"""
        logger.debug(f"Indexer query {query.operation_name} variables={query.variables}")
        try:
            payload = await self._request("POST", "", json_data=query.to_payload())
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise IndexerTransportError(f"Indexer request failed: {e!r}") from e
        except ValueError as e:
            raise IndexerResponseError(f"Indexer returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise IndexerResponseError(f"Unexpected indexer payload type: {type(payload).__name__}")

        errors = payload.get("errors")
        if errors:
            logger.error(f"GraphQL errors from {self.base_url}: {errors}")
            first = errors[0] if isinstance(errors, list) else errors
            message = first.get("message") if isinstance(first, dict) else str(first)
            raise IndexerResponseError(f"GraphQL error: {message}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise IndexerResponseError("Indexer response has no data")
        return data

    async def fetch_nft_entities(self, query: GraphQLQuery) -> NFTConnection:
        """Run an NFT list query and validate the `nftEntities` envelope"""
        data = await self.execute(query)
        try:
            return NFTListResponse.model_validate(data).nft_entities
        except ValidationError as e:
            raise IndexerResponseError(f"Malformed nftEntities response: {e}") from e
