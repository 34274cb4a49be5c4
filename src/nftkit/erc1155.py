"""ERC-1155 edition contract facade"""

from typing import List, Optional

from loguru import logger

from .base import BaseTokenModule
from .exceptions import CallFailedError
from .models import EditionMetadata, EditionMetadataOwner, TransactionResult
from .utils import parse_address, to_uint256


class Edition(BaseTokenModule[EditionMetadata]):
    """Multi-edition (ERC-1155) token contract"""

    URI_METHOD = "uri"

    async def get(self, token_id: int) -> EditionMetadata:
        """Metadata and current supply of one edition"""
        token_id = to_uint256(token_id)
        supply = 0
        try:
            supply = int(await self.contract.call("totalSupply", token_id))
        except CallFailedError as e:
            logger.debug(f"Supply of token {token_id} unavailable, using 0: {e}")

        metadata = await self.metadata_resolver.resolve(token_id)
        return EditionMetadata(metadata=metadata, supply=supply)

    async def get_owned(
        self,
        address: Optional[str] = None,
        skip_empty: bool = False,
    ) -> List[EditionMetadataOwner]:
        """Editions held by ``address`` (the signer by default), in balance-query order.

        Every id below ``nextTokenIdToMint`` is included, zero balances too,
        unless ``skip_empty`` is set. Ids whose metadata cannot be resolved
        are skipped.
        """
        owner = self._owner_or_signer(address)
        max_id = await self.get_total_count()
        if max_id == 0:
            return []

        ids = list(range(max_id))
        balances = await self.contract.call("balanceOfBatch", [owner] * max_id, ids)

        owned: List[EditionMetadataOwner] = []
        for token_id, balance in zip(ids, balances):
            if skip_empty and int(balance) == 0:
                continue
            try:
                edition = await self.get(token_id)
            except Exception as e:
                logger.warning(f"Skipping token {token_id} owned by {owner}: {e!r}")
                continue
            owned.append(EditionMetadataOwner(
                metadata=edition.metadata,
                supply=edition.supply,
                owner=owner,
                quantity_owned=int(balance),
            ))
        return owned

    async def get_total_supply(self, token_id: int) -> int:
        return int(await self.contract.call("totalSupply", to_uint256(token_id)))

    async def balance(self, token_id: int) -> int:
        """Signer's balance of one edition"""
        return await self.balance_of(self.contract.signer_address, token_id)

    async def balance_of(self, address: str, token_id: int) -> int:
        return int(await self.contract.call(
            "balanceOf",
            parse_address(address),
            to_uint256(token_id),
        ))

    async def transfer(
        self,
        to: str,
        token_id: int,
        amount: int,
        data: bytes = b"",
    ) -> TransactionResult:
        """Send ``amount`` copies of an edition from the signer to ``to``"""
        sender = self.contract.signer_address
        return await self.contract.send(
            "safeTransferFrom",
            sender,
            parse_address(to),
            to_uint256(token_id),
            to_uint256(amount),
            bytes(data),
        )

    async def burn(self, token_id: int, amount: int) -> TransactionResult:
        """Destroy ``amount`` of the signer's copies of an edition"""
        holder = self.contract.signer_address
        return await self.contract.send(
            "burn",
            holder,
            to_uint256(token_id),
            to_uint256(amount),
        )
