"""Base client with common functionality"""

import asyncio
from typing import Dict, Any, Optional
import aiohttp
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
)
from loguru import logger


RETRYABLE_STATUSES = {429, 500, 502, 503, 504}


def is_retryable(exc: BaseException) -> bool:
    """Connection errors, timeouts, throttling and 5xx are worth another attempt"""
    if isinstance(exc, aiohttp.ClientResponseError):
        return exc.status in RETRYABLE_STATUSES
    return isinstance(exc, (aiohttp.ClientError, asyncio.TimeoutError))


class BaseAPIClient:
    """Base class for JSON API clients with optional retries"""

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        max_retries: int = 0,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries

    def _build_url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        if not endpoint:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        allow_redirects: bool = True,
    ) -> Any:
        """
        Make HTTP request, retrying transient failures up to max_retries times

        With allow_redirects=False a 3xx answer is not followed and yields None.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception(is_retryable),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.info(f"Retrying {method} {endpoint or self.base_url} (attempt {attempt.retry_state.attempt_number})")
                return await self._send(method, endpoint, params, json_data, headers, allow_redirects)

    async def _send(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]],
        json_data: Optional[Dict[str, Any]],
        headers: Optional[Dict[str, str]],
        allow_redirects: bool = True,
    ) -> Any:
        url = self._build_url(endpoint)

        default_headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if headers:
            default_headers.update(headers)

        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
            try:
                async with session.request(
                    method=method,
                    url=url,
                    params=params,
                    json=json_data,
                    headers=default_headers,
                    allow_redirects=allow_redirects,
                ) as response:
                    response.raise_for_status()
                    if 300 <= response.status < 400:
                        logger.warning(f"Not following redirect from {url} to {response.headers.get('Location')}")
                        return None
                    # Gateways do not always label JSON correctly
                    return await response.json(content_type=None)
            except aiohttp.ClientResponseError as e:
                if e.status == 404:
                    logger.debug(f"Not found: {url}")
                else:
                    logger.error(f"Request to {url} failed: {e}")
                raise
            except aiohttp.ClientError as e:
                logger.error(f"Request to {url} failed: {e}")
                raise
