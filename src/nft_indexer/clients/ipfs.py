"""IPFS gateway client for NFT metadata documents"""

import asyncio
from typing import Any, Dict, Optional
from loguru import logger

from .base import BaseAPIClient
from ..config import DEFAULT_IPFS_GATEWAY
from ..normalizer import convert_ipfs_to_http
from ..security import validate_url_safe


class IPFSClient(BaseAPIClient):
    """Fetches JSON metadata referenced by an NFT's `uri`"""

    def __init__(self, gateway: str = DEFAULT_IPFS_GATEWAY, timeout: int = 30, max_retries: int = 0, check_urls: bool = True):
        super().__init__(gateway, timeout=timeout, max_retries=max_retries)
        self.gateway = gateway
        self.check_urls = check_urls

    def resolve(self, uri: str) -> Optional[str]:
        """HTTP URL for an NFT uri, or None if it cannot be resolved"""
        return convert_ipfs_to_http(uri, self.gateway)

    async def fetch_metadata(self, uri: str) -> Optional[Dict[str, Any]]:
        """
        Fetch the metadata document of an NFT

        Returns:
            The JSON document, or None when the uri is unusable or unsafe
        """
        url = self.resolve(uri)
        if not url:
            logger.debug(f"Unresolvable NFT uri: {uri}")
            return None

        # Gateway URLs are trusted, anything else comes straight from chain data
        untrusted = self.check_urls and not url.startswith(self.gateway.rstrip("/") + "/")
        if untrusted:
            is_safe, reason = await asyncio.to_thread(validate_url_safe, url)
            if not is_safe:
                logger.warning(f"Skipping unsafe metadata URL {url}: {reason}")
                return None

        # A redirect could lead an untrusted URL past the check above
        response = await self._request("GET", url, allow_redirects=not untrusted)
        if not isinstance(response, dict):
            logger.debug(f"Metadata at {url} is not a JSON object")
            return None
        return response
