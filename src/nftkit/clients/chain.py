"""Contract reader/writer over web3.py"""

from typing import Any, Dict, Iterable, Optional

import aiohttp
from eth_typing import ChecksumAddress
from loguru import logger
from web3 import AsyncWeb3

from ..exceptions import (
    CallFailedError,
    ConfirmationFailedError,
    SignerMissingError,
    SubmitFailedError,
)
from ..models import TransactionResult
from ..signer import Signer
from ..utils import parse_address


def create_web3(rpc_url: str, timeout: int = 30) -> AsyncWeb3:
    """Create an async web3 instance for an HTTP RPC endpoint"""
    provider = AsyncWeb3.AsyncHTTPProvider(
        rpc_url,
        request_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout)},
    )
    return AsyncWeb3(provider)


class ContractWrapper:
    """Executes read calls and signed transactions against one contract.

    Reads need no signer. Writes require one and fail with
    SignerMissingError before touching the network when it is absent.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        address: str,
        abi: Iterable[Dict[str, Any]],
        signer: Optional[Signer] = None,
        confirmation_timeout: int = 120,
        poll_latency: float = 2.0,
    ):
        self.web3 = web3
        self.address = parse_address(address)
        self.contract = web3.eth.contract(address=self.address, abi=list(abi))
        self.signer = signer
        self.confirmation_timeout = confirmation_timeout
        self.poll_latency = poll_latency

    def require_signer(self) -> Signer:
        if self.signer is None:
            raise SignerMissingError()
        return self.signer

    @property
    def signer_address(self) -> ChecksumAddress:
        return self.require_signer().address

    def _function(self, method: str, args: tuple):
        return getattr(self.contract.functions, method)(*args)

    async def call(self, method: str, *args: Any) -> Any:
        """Run a read-only contract call"""
        try:
            return await self._function(method, args).call()
        except Exception as e:
            logger.debug(f"Call {method}{args} on {self.address} failed: {e}")
            raise CallFailedError(method, args, str(e)) from e

    async def submit(self, method: str, *args: Any) -> str:
        """Build, sign and broadcast a transaction, returning its hash"""
        signer = self.require_signer()
        try:
            tx_params: Dict[str, Any] = {
                "from": signer.address,
                "nonce": await self.web3.eth.get_transaction_count(signer.address, "pending"),
                "chainId": signer.chain_id or await self.web3.eth.chain_id,
            }
            tx = await self._function(method, args).build_transaction(tx_params)
            raw_tx = signer.sign_transaction(tx)
            tx_hash = await self.web3.eth.send_raw_transaction(raw_tx)
        except Exception as e:
            logger.error(f"Submitting {method}{args} to {self.address} failed: {e}")
            raise SubmitFailedError(method, args, str(e)) from e

        tx_hash_hex = self.web3.to_hex(tx_hash)
        logger.info(f"Submitted {method} to {self.address}: {tx_hash_hex}")
        return tx_hash_hex

    async def await_confirmation(self, tx_hash: str) -> TransactionResult:
        """Block until the transaction is mined and succeeded"""
        try:
            receipt = await self.web3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.confirmation_timeout,
                poll_latency=self.poll_latency,
            )
        except Exception as e:
            logger.error(f"Waiting for {tx_hash} failed: {e}")
            raise ConfirmationFailedError(tx_hash, str(e)) from e

        if receipt.get("status") == 0:
            raise ConfirmationFailedError(tx_hash, "transaction reverted")

        result = TransactionResult.from_receipt(receipt)
        logger.info(f"Transaction {result.transaction_hash} confirmed in block {result.block_number}")
        return result

    async def send(self, method: str, *args: Any) -> TransactionResult:
        """Submit a transaction and wait for its confirmation"""
        tx_hash = await self.submit(method, *args)
        return await self.await_confirmation(tx_hash)
