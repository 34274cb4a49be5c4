"""ERC-721 NFT collection facade"""

import asyncio
from typing import List, Optional

from loguru import logger

from .base import BaseTokenModule
from .exceptions import CallFailedError
from .models import NFTMetadataOwner, TransactionResult
from .utils import ZERO_ADDRESS, parse_address, to_uint256


class NFTCollection(BaseTokenModule[NFTMetadataOwner]):
    """Unique-token (ERC-721) contract"""

    URI_METHOD = "tokenURI"

    async def get(self, token_id: int) -> NFTMetadataOwner:
        """Metadata and current owner of one token"""
        token_id = to_uint256(token_id)
        owner = ZERO_ADDRESS
        try:
            owner = await self.owner_of(token_id)
        except CallFailedError as e:
            logger.debug(f"Owner of token {token_id} unavailable: {e}")

        metadata = await self.metadata_resolver.resolve(token_id)
        return NFTMetadataOwner(metadata=metadata, owner=owner)

    async def get_owned_token_ids(self, address: Optional[str] = None) -> List[int]:
        """Token ids held by ``address`` (the signer by default), via the enumerable extension"""
        owner = self._owner_or_signer(address)
        balance = await self.balance_of(owner)
        semaphore = asyncio.Semaphore(self.max_workers)

        async def token_at(index: int) -> int:
            async with semaphore:
                return await self.contract.call("tokenOfOwnerByIndex", owner, index)

        ids = await asyncio.gather(*[token_at(index) for index in range(balance)])
        return [int(token_id) for token_id in ids]

    async def get_owned(self, address: Optional[str] = None) -> List[NFTMetadataOwner]:
        """Tokens held by ``address``, ascending by id; unresolvable ids are left out"""
        token_ids = await self.get_owned_token_ids(address)
        return await self.batch_resolver.resolve_batch(token_ids)

    async def owner_of(self, token_id: int) -> str:
        owner = await self.contract.call("ownerOf", to_uint256(token_id))
        return parse_address(owner)

    async def total_supply(self) -> int:
        return int(await self.contract.call("totalSupply"))

    async def balance(self) -> int:
        """Number of tokens the signer holds"""
        return await self.balance_of(self.contract.signer_address)

    async def balance_of(self, address: str) -> int:
        return int(await self.contract.call("balanceOf", parse_address(address)))

    async def transfer(self, to: str, token_id: int) -> TransactionResult:
        """Send one token from the signer to ``to``"""
        sender = self.contract.signer_address
        return await self.contract.send(
            "safeTransferFrom",
            sender,
            parse_address(to),
            to_uint256(token_id),
        )

    async def burn(self, token_id: int) -> TransactionResult:
        self.contract.require_signer()
        return await self.contract.send("burn", to_uint256(token_id))
