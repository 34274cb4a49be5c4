"""IPFS gateway client resolving content URIs to metadata documents"""

import asyncio
import base64
import copy
import json
from typing import Any, Dict, Optional
from urllib.parse import unquote

import aiohttp
from loguru import logger

from .base import BaseHTTPClient
from ..config import DEFAULT_IPFS_GATEWAY
from ..exceptions import MetadataUnavailableError
from ..storage import StorageAdapter
from ..utils import convert_ipfs_to_http

# Document fields that may hold content-addressed links
LINK_FIELDS = ("image", "animation_url", "external_url")


class IpfsGateway(BaseHTTPClient):
    """Fetches metadata JSON through an HTTP gateway, with optional caching.

    Documents are immutable per URI so they are cached by resolved URL.
    Every failure is raised as MetadataUnavailableError; the reason tells
    not-found, network and malformed-document failures apart.
    """

    def __init__(
        self,
        gateway_url: str = DEFAULT_IPFS_GATEWAY,
        storage: Optional[StorageAdapter] = None,
        timeout: int = 30,
        max_retries: int = 3,
        rate_limit: int = 100,
        **kwargs: Any,
    ):
        super().__init__(
            base_url=gateway_url.rstrip("/") + "/",
            rate_limit=rate_limit,
            timeout=timeout,
            max_retries=max_retries,
            **kwargs,
        )
        self.storage = storage

    def resolve_url(self, uri: str) -> str:
        """Map a content URI to a fetchable HTTP(S) URL on this gateway"""
        url = convert_ipfs_to_http(uri, self.base_url)
        if not url or not url.startswith(("http://", "https://")):
            raise MetadataUnavailableError(str(uri), "unsupported URI scheme")
        return url

    async def fetch(self, uri: str) -> Dict[str, Any]:
        """Resolve a content URI to its metadata document"""
        if isinstance(uri, str) and uri.startswith("data:"):
            return self._rewrite_links(self._decode_data_uri(uri))

        url = self.resolve_url(uri)
        cache_key = f"metadata:{url}"
        if self.storage:
            cached = await self.storage.get_cache(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for {cache_key}")
                return copy.deepcopy(cached)

        try:
            document = await self._request("GET", url)
        except aiohttp.ClientResponseError as e:
            reason = "not found" if e.status == 404 else f"HTTP {e.status}"
            raise MetadataUnavailableError(uri, reason) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise MetadataUnavailableError(uri, f"network error: {e}") from e
        except ValueError as e:
            raise MetadataUnavailableError(uri, f"malformed document: {e}") from e

        if not isinstance(document, dict):
            raise MetadataUnavailableError(uri, "malformed document: expected a JSON object")

        document = self._rewrite_links(document)
        if self.storage:
            await self.storage.set_cache(cache_key, copy.deepcopy(document))
        return document

    def _rewrite_links(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Point ipfs:// links inside a document at this gateway"""
        rewritten = dict(document)
        for key in LINK_FIELDS:
            value = rewritten.get(key)
            if isinstance(value, str) and value:
                rewritten[key] = convert_ipfs_to_http(value, self.base_url)
        return rewritten

    @staticmethod
    def _decode_data_uri(uri: str) -> Dict[str, Any]:
        """Decode an inline data:application/json URI"""
        header, sep, payload = uri.partition(",")
        if not sep:
            raise MetadataUnavailableError(uri[:64], "malformed document: bad data URI")
        try:
            if header.endswith(";base64"):
                raw = base64.b64decode(payload).decode("utf-8")
            else:
                raw = unquote(payload)
            document = json.loads(raw)
        except ValueError as e:
            raise MetadataUnavailableError(uri[:64], f"malformed document: {e}") from e
        if not isinstance(document, dict):
            raise MetadataUnavailableError(uri[:64], "malformed document: expected a JSON object")
        return document
