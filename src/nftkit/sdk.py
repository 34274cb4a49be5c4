"""
Main nftkit entrypoint
"""

from typing import Optional

from loguru import logger
from web3 import AsyncWeb3

from .abi import ERC1155_ABI, ERC721_ABI
from .clients.chain import ContractWrapper, create_web3
from .clients.gateway import IpfsGateway
from .config import Config, config
from .erc1155 import Edition
from .erc721 import NFTCollection
from .signer import Signer
from .storage import StorageAdapter, get_storage_adapter


class NFTKit:
    """Builds the chain and metadata clients once and hands out contract facades.

    The signer is bound to this instance. Use ``with_signer`` to act as a
    different identity while sharing the same connections and cache.
    """

    def __init__(
        self,
        config_instance: Optional[Config] = None,
        signer: Optional[Signer] = None,
        web3: Optional[AsyncWeb3] = None,
        storage: Optional[StorageAdapter] = None,
        gateway: Optional[IpfsGateway] = None,
    ):
        self.config = config_instance or config
        self.signer = signer if signer is not None else self.config.get_signer()
        self.web3 = web3 or create_web3(self.config.get_rpc_url(), timeout=self.config.timeout)
        self.storage = storage if storage is not None else get_storage_adapter(self.config)
        self.gateway = gateway or IpfsGateway(
            gateway_url=self.config.ipfs_gateway_url,
            storage=self.storage,
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
        )

        if self.signer:
            logger.info(f"nftkit initialized with signer {self.signer.address}")
        else:
            logger.info("nftkit initialized in read-only mode")

    def with_signer(self, signer: Optional[Signer]) -> "NFTKit":
        """Same connections and cache, different signing identity"""
        return NFTKit(
            self.config,
            signer=signer,
            web3=self.web3,
            storage=self.storage,
            gateway=self.gateway,
        )

    def _contract(self, address: str, abi) -> ContractWrapper:
        return ContractWrapper(
            self.web3,
            address,
            abi,
            signer=self.signer,
            confirmation_timeout=self.config.confirmation_timeout,
            poll_latency=self.config.poll_latency,
        )

    def get_edition(self, address: str) -> Edition:
        """Facade for an ERC-1155 contract"""
        return Edition(
            self._contract(address, ERC1155_ABI),
            self.gateway,
            max_workers=self.config.max_workers,
            batch_timeout=self.config.batch_timeout,
        )

    def get_nft_collection(self, address: str) -> NFTCollection:
        """Facade for an ERC-721 contract"""
        return NFTCollection(
            self._contract(address, ERC721_ABI),
            self.gateway,
            max_workers=self.config.max_workers,
            batch_timeout=self.config.batch_timeout,
        )

    async def close(self):
        """Close cache connections"""
        if self.storage:
            await self.storage.close()
