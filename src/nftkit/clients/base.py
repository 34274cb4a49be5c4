"""Base HTTP client with common functionality"""

import asyncio
import time
from typing import Dict, Any, Optional
import aiohttp
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from loguru import logger

RETRYABLE_STATUSES = {408, 429, 500, 502, 503, 504}


def is_transient_error(exc: BaseException) -> bool:
    """Network hiccups and throttling are retried, client errors like 404 are not"""
    if isinstance(exc, aiohttp.ClientResponseError):
        return exc.status in RETRYABLE_STATUSES
    return isinstance(
        exc,
        (aiohttp.ClientConnectionError, aiohttp.ClientPayloadError, asyncio.TimeoutError, TimeoutError),
    )


class BaseHTTPClient:
    """Base class for HTTP clients with retry logic and rate limiting"""

    def __init__(
        self,
        base_url: str,
        rate_limit: int = 100,
        timeout: int = 30,
        max_retries: int = 3,
        retry_wait_min: float = 2,
        retry_wait_max: float = 10,
    ):
        self.base_url = base_url
        self.rate_limit = rate_limit
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_wait_min = retry_wait_min
        self.retry_wait_max = retry_wait_max
        self._rate_limiter_semaphore = asyncio.Semaphore(rate_limit)
        self._last_request_time = 0.0
        self._min_request_interval = 1.0 / rate_limit

    async def _apply_rate_limit(self):
        """Rate limiting"""
        async with self._rate_limiter_semaphore:
            current_time = time.time()
            time_since_last = current_time - self._last_request_time
            if time_since_last < self._min_request_interval:
                await asyncio.sleep(self._min_request_interval - time_since_last)
            self._last_request_time = time.time()

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make HTTP request with retry logic on transient errors"""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=self.retry_wait_min, max=self.retry_wait_max),
            retry=retry_if_exception(is_transient_error),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._send(method, url, params=params, headers=headers)

    async def _send(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Single HTTP round-trip returning the decoded JSON body"""
        await self._apply_rate_limit()

        default_headers = {"Accept": "application/json"}
        if headers:
            default_headers.update(headers)

        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
            try:
                async with session.request(
                    method=method,
                    url=url,
                    params=params,
                    headers=default_headers,
                ) as response:
                    if response.status == 429:  # Rate limited
                        logger.warning(f"Rate limited by {url}")
                    response.raise_for_status()
                    # Gateways often serve JSON as text/plain
                    return await response.json(content_type=None)
            except aiohttp.ClientError as e:
                logger.error(f"Request to {url} failed: {e}")
                raise
