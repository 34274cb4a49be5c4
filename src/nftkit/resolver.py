"""
Token metadata resolution: one token at a time, or a batch fanned out concurrently.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Generic, Iterable, List, Optional, Protocol, TypeVar

from loguru import logger
from pydantic import ValidationError

from .exceptions import MetadataUnavailableError, NotFoundError
from .models import BatchOutcome, BatchResult, NFTMetadata
from .utils import format_token_uri, to_uint256

T = TypeVar("T")


class ChainReader(Protocol):
    async def call(self, method: str, *args: Any) -> Any:
        ...


class MetadataStore(Protocol):
    async def fetch(self, uri: str) -> Dict[str, Any]:
        ...


class TokenMetadataResolver:
    """Reads a token's content URI from the chain and dereferences it.

    Any failure of the URI read means the token does not exist
    (NotFoundError). Failures after that are MetadataUnavailableError, so
    callers can tell a missing token from one whose metadata is unreachable.
    No retries happen here.
    """

    def __init__(self, contract: ChainReader, store: MetadataStore, uri_method: str = "uri"):
        self.contract = contract
        self.store = store
        self.uri_method = uri_method

    async def resolve(self, token_id: int) -> NFTMetadata:
        token_id = to_uint256(token_id)
        try:
            uri = await self.contract.call(self.uri_method, token_id)
        except Exception as e:
            raise NotFoundError(token_id) from e

        uri = format_token_uri(uri, token_id)
        try:
            document = await self.store.fetch(uri)
        except MetadataUnavailableError as e:
            raise MetadataUnavailableError(e.uri, e.reason, token_id=token_id) from e
        except Exception as e:
            raise MetadataUnavailableError(uri, str(e), token_id=token_id) from e

        try:
            return NFTMetadata.from_document(token_id, uri, document)
        except ValidationError as e:
            raise MetadataUnavailableError(uri, f"malformed document: {e}", token_id=token_id) from e


class BatchResolver(Generic[T]):
    """Resolves many token ids concurrently and returns them sorted by id.

    Every id runs as its own unit of work, at most ``max_workers`` at a time.
    A failing unit is logged and dropped without affecting its siblings.
    With ``timeout`` unset a hung unit hangs the whole batch; cancelling the
    awaiting task cancels every unit.
    """

    def __init__(
        self,
        resolve_one: Callable[[int], Awaitable[T]],
        key: Callable[[T], int],
        max_workers: int = 10,
        timeout: Optional[float] = None,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.resolve_one = resolve_one
        self.key = key
        self.max_workers = max_workers
        self.timeout = timeout

    async def _run_unit(self, semaphore: asyncio.Semaphore, token_id: int) -> BatchResult[T]:
        async with semaphore:
            try:
                if self.timeout is None:
                    value = await self.resolve_one(token_id)
                else:
                    value = await asyncio.wait_for(self.resolve_one(token_id), self.timeout)
            except Exception as e:
                logger.warning(f"Failed to resolve token {token_id}: {e!r}")
                return BatchResult(token_id=token_id, error=e)
        return BatchResult(token_id=token_id, value=value)

    async def collect(self, token_ids: Iterable[int]) -> List[BatchResult[T]]:
        """Fan out one unit per id and wait until every unit has reported"""
        ids = list(token_ids)
        if not ids:
            return []
        semaphore = asyncio.Semaphore(self.max_workers)
        return list(await asyncio.gather(*(self._run_unit(semaphore, token_id) for token_id in ids)))

    async def resolve_batch(self, token_ids: Iterable[int]) -> List[T]:
        """Resolved values sorted ascending by id; failed ids are silently left out"""
        results = await self.collect(token_ids)
        return sorted((r.value for r in results if r.ok), key=self.key)

    async def resolve_batch_detailed(self, token_ids: Iterable[int]) -> BatchOutcome[T]:
        """Like resolve_batch, but also reports which ids failed and why"""
        results = await self.collect(token_ids)
        succeeded = sorted((r.value for r in results if r.ok), key=self.key)
        failed = sorted(
            ((r.token_id, r.error) for r in results if not r.ok),
            key=lambda item: item[0],
        )
        if failed:
            logger.info(f"Batch resolved {len(succeeded)} of {len(results)} tokens")
        return BatchOutcome(succeeded=succeeded, failed=failed)
