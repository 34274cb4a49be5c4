"""Tests for the web3 contract wrapper."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from hexbytes import HexBytes
from web3 import Web3

from nftkit.abi import ERC1155_ABI
from nftkit.clients.chain import ContractWrapper
from nftkit.exceptions import (
    CallFailedError,
    ConfirmationFailedError,
    InvalidAddressError,
    SignerMissingError,
    SubmitFailedError,
)
from nftkit.models import TransactionResult
from tests.fakes import CONTRACT_ADDRESS, OTHER_ADDRESS

TX_HASH = HexBytes("0x" + "cd" * 32)


@pytest.fixture
def web3():
    """Async web3 double with a contract whose functions are MagicMocks"""
    w3 = MagicMock()
    w3.to_hex = Web3.to_hex
    w3.eth.get_transaction_count = AsyncMock(return_value=7)
    w3.eth.send_raw_transaction = AsyncMock(return_value=TX_HASH)
    w3.eth.wait_for_transaction_receipt = AsyncMock(return_value={
        "transactionHash": TX_HASH,
        "blockNumber": 123,
        "status": 1,
        "gasUsed": 51000,
        "from": OTHER_ADDRESS,
        "to": CONTRACT_ADDRESS,
    })
    return w3


def contract_function(w3, name, call_result=None, call_error=None, tx=None):
    fn = MagicMock()
    fn.call = AsyncMock(return_value=call_result, side_effect=call_error)
    fn.build_transaction = AsyncMock(return_value=tx)
    factory = MagicMock(return_value=fn)
    setattr(w3.eth.contract.return_value.functions, name, factory)
    return factory, fn


def signable_tx(tx_params):
    return {
        **tx_params,
        "to": CONTRACT_ADDRESS,
        "value": 0,
        "gas": 90000,
        "maxFeePerGas": 2_000_000_000,
        "maxPriorityFeePerGas": 1_000_000_000,
        "data": "0x",
    }


class TestContractWrapperReads:
    """Tests for read-only calls."""

    def test_builds_contract_at_checksum_address(self, web3):
        wrapper = ContractWrapper(web3, CONTRACT_ADDRESS.lower(), ERC1155_ABI)

        assert wrapper.address == CONTRACT_ADDRESS
        web3.eth.contract.assert_called_once_with(address=CONTRACT_ADDRESS, abi=ERC1155_ABI)

    def test_rejects_bad_contract_address(self, web3):
        with pytest.raises(InvalidAddressError):
            ContractWrapper(web3, "0xnothex", ERC1155_ABI)

    async def test_call_returns_result(self, web3):
        factory, fn = contract_function(web3, "uri", call_result="ipfs://QmX/1")
        wrapper = ContractWrapper(web3, CONTRACT_ADDRESS, ERC1155_ABI)

        assert await wrapper.call("uri", 1) == "ipfs://QmX/1"
        factory.assert_called_once_with(1)

    async def test_call_failure_is_wrapped(self, web3):
        contract_function(web3, "uri", call_error=RuntimeError("execution reverted"))
        wrapper = ContractWrapper(web3, CONTRACT_ADDRESS, ERC1155_ABI)

        with pytest.raises(CallFailedError) as exc_info:
            await wrapper.call("uri", 99)

        assert exc_info.value.method == "uri"
        assert exc_info.value.call_args == (99,)
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestContractWrapperWrites:
    """Tests for signing, submission and confirmation."""

    async def test_submit_without_signer_touches_nothing(self, web3):
        factory, _ = contract_function(web3, "burn")
        wrapper = ContractWrapper(web3, CONTRACT_ADDRESS, ERC1155_ABI)

        with pytest.raises(SignerMissingError):
            await wrapper.send("burn", OTHER_ADDRESS, 1, 1)

        factory.assert_not_called()
        web3.eth.get_transaction_count.assert_not_awaited()
        web3.eth.send_raw_transaction.assert_not_awaited()

    async def test_submit_signs_and_broadcasts(self, web3, signer):
        factory, fn = contract_function(web3, "setApprovalForAll")
        fn.build_transaction.side_effect = signable_tx
        wrapper = ContractWrapper(web3, CONTRACT_ADDRESS, ERC1155_ABI, signer=signer)

        tx_hash = await wrapper.submit("setApprovalForAll", OTHER_ADDRESS, True)

        assert tx_hash == "0x" + "cd" * 32
        factory.assert_called_once_with(OTHER_ADDRESS, True)
        tx_params = fn.build_transaction.await_args.args[0]
        assert tx_params == {"from": signer.address, "nonce": 7, "chainId": 1}
        web3.eth.get_transaction_count.assert_awaited_once_with(signer.address, "pending")
        raw_tx = web3.eth.send_raw_transaction.await_args.args[0]
        assert isinstance(raw_tx, (bytes, bytearray))
        assert len(raw_tx) > 0

    async def test_submit_failure_is_wrapped(self, web3, signer):
        _, fn = contract_function(web3, "burn")
        fn.build_transaction.side_effect = ValueError("gas estimation failed")
        wrapper = ContractWrapper(web3, CONTRACT_ADDRESS, ERC1155_ABI, signer=signer)

        with pytest.raises(SubmitFailedError) as exc_info:
            await wrapper.submit("burn", OTHER_ADDRESS, 1, 1)

        assert exc_info.value.method == "burn"
        web3.eth.send_raw_transaction.assert_not_awaited()

    async def test_send_waits_for_confirmation(self, web3, signer):
        _, fn = contract_function(web3, "burn")
        fn.build_transaction.side_effect = signable_tx
        wrapper = ContractWrapper(
            web3, CONTRACT_ADDRESS, ERC1155_ABI, signer=signer,
            confirmation_timeout=30, poll_latency=0.5,
        )

        result = await wrapper.send("burn", signer.address, 1, 1)

        assert isinstance(result, TransactionResult)
        assert result.transaction_hash == "0x" + "cd" * 32
        assert result.block_number == 123
        assert result.gas_used == 51000
        web3.eth.wait_for_transaction_receipt.assert_awaited_once_with(
            "0x" + "cd" * 32, timeout=30, poll_latency=0.5,
        )

    async def test_reverted_transaction_fails_confirmation(self, web3):
        web3.eth.wait_for_transaction_receipt.return_value = {"transactionHash": TX_HASH, "status": 0}
        wrapper = ContractWrapper(web3, CONTRACT_ADDRESS, ERC1155_ABI)

        with pytest.raises(ConfirmationFailedError) as exc_info:
            await wrapper.await_confirmation("0x" + "cd" * 32)

        assert "reverted" in exc_info.value.message

    async def test_confirmation_timeout(self, web3):
        web3.eth.wait_for_transaction_receipt.side_effect = TimeoutError("not mined")
        wrapper = ContractWrapper(web3, CONTRACT_ADDRESS, ERC1155_ABI)

        with pytest.raises(ConfirmationFailedError) as exc_info:
            await wrapper.await_confirmation("0xabc")

        assert exc_info.value.tx_hash == "0xabc"
