"""
Ternoa API client

Provides the off-chain data attached to NFTs: user profiles and NFT
categories.
"""

from typing import List, Optional
import aiohttp
from loguru import logger

from .base import BaseAPIClient
from ..models import Category, UserProfile


class TernoaAPIClient(BaseAPIClient):
    """Client for the Ternoa off-chain API"""

    def __init__(self, base_url: str, timeout: int = 30, max_retries: int = 0):
        super().__init__(base_url, timeout=timeout, max_retries=max_retries)
        logger.info(f"Ternoa API client initialized for {base_url}")

    async def get_user(self, wallet_id: str) -> Optional[UserProfile]:
        """
        Get the public profile of a wallet

        Returns:
            The profile, or None when the wallet has none
        """
        try:
            response = await self._request("GET", f"/api/users/{wallet_id}")
        except aiohttp.ClientResponseError as e:
            if e.status == 404:
                return None
            raise
        if not response or not isinstance(response, dict):
            return None
        response.setdefault("walletId", wallet_id)
        return UserProfile.model_validate(response)

    async def get_nft_categories(self, nft_id: str) -> List[Category]:
        """Get the categories an NFT is tagged with"""
        try:
            response = await self._request("GET", f"/api/NFTs/category/{nft_id}")
        except aiohttp.ClientResponseError as e:
            if e.status == 404:
                return []
            raise
        if not response:
            return []
        # Some deployments wrap the list as {"data": [...]}
        if isinstance(response, dict):
            response = response.get("data") or []
        return [Category.model_validate(item) for item in response]
