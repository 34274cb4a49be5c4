"""Shared plumbing for the token contract facades"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from eth_typing import ChecksumAddress

from .clients.chain import ContractWrapper
from .models import BatchOutcome, TransactionResult
from .resolver import BatchResolver, MetadataStore, TokenMetadataResolver
from .utils import parse_address

T = TypeVar("T")


class BaseTokenModule(ABC, Generic[T]):
    """Common operations of ERC-1155 and ERC-721 contracts

    Subclasses set ``URI_METHOD`` and implement ``get`` for one token; the
    batch operations are built on top of it.
    """

    URI_METHOD = "uri"

    def __init__(
        self,
        contract: ContractWrapper,
        store: MetadataStore,
        max_workers: int = 10,
        batch_timeout: Optional[float] = None,
    ):
        self.contract = contract
        self.store = store
        self.max_workers = max_workers
        self.metadata_resolver = TokenMetadataResolver(contract, store, uri_method=self.URI_METHOD)
        self.batch_resolver: BatchResolver[T] = BatchResolver(
            self.get,
            key=lambda item: item.token_id,
            max_workers=max_workers,
            timeout=batch_timeout,
        )

    @property
    def address(self) -> ChecksumAddress:
        return self.contract.address

    @abstractmethod
    async def get(self, token_id: int) -> T:
        """One token with its contract-specific extras"""

    def _owner_or_signer(self, address: Optional[str]) -> ChecksumAddress:
        """Parse an explicit address, or fall back to the signer's"""
        if address:
            return parse_address(address)
        return self.contract.signer_address

    async def get_total_count(self) -> int:
        """Number of token ids minted so far (ids run from 0 to count - 1)"""
        return int(await self.contract.call("nextTokenIdToMint"))

    async def get_all(self) -> List[T]:
        """Every token in the contract, ascending by id; unresolvable ids are left out"""
        total = await self.get_total_count()
        return await self.batch_resolver.resolve_batch(range(total))

    async def get_all_detailed(self) -> BatchOutcome[T]:
        """Every token in the contract plus the ids that failed to resolve"""
        total = await self.get_total_count()
        return await self.batch_resolver.resolve_batch_detailed(range(total))

    async def is_approved(self, address: str, operator: str) -> bool:
        return bool(await self.contract.call(
            "isApprovedForAll",
            parse_address(address),
            parse_address(operator),
        ))

    async def set_approval_for_all(self, operator: str, approved: bool) -> TransactionResult:
        self.contract.require_signer()
        return await self.contract.send("setApprovalForAll", parse_address(operator), bool(approved))
