"""Tests for the signing capability."""

import pytest
from eth_account import Account

from nftkit.exceptions import SignerMissingError
from nftkit.signer import Signer
from tests.fakes import CONTRACT_ADDRESS, TEST_PRIVATE_KEY


def unsigned_tx(**overrides):
    tx = {
        "to": CONTRACT_ADDRESS,
        "value": 0,
        "gas": 21000,
        "gasPrice": 1_000_000_000,
        "nonce": 0,
        "data": "0x",
    }
    tx.update(overrides)
    return tx


class TestSigner:
    """Tests for Signer."""

    def test_address_matches_key(self, signer):
        assert signer.address == Account.from_key(TEST_PRIVATE_KEY).address

    def test_invalid_key(self):
        with pytest.raises(SignerMissingError):
            Signer.from_private_key("not-a-key")

    def test_fills_chain_id(self, signer):
        raw = signer.sign_transaction(unsigned_tx())
        decoded = Account.recover_transaction(raw)

        assert decoded == signer.address

    def test_explicit_chain_id_wins(self):
        signer = Signer.from_private_key(TEST_PRIVATE_KEY, chain_id=1)

        raw_a = signer.sign_transaction(unsigned_tx(chainId=5))
        raw_b = Signer.from_private_key(TEST_PRIVATE_KEY, chain_id=5).sign_transaction(unsigned_tx())

        assert bytes(raw_a) == bytes(raw_b)

    def test_independent_identities(self):
        first = Signer.from_private_key(TEST_PRIVATE_KEY)
        second = Signer.from_private_key("0x" + "22" * 32)

        assert first.address != second.address
