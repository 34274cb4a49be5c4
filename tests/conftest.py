"""Shared fixtures."""

from typing import Any, Callable, Dict

import pytest
from eth_account import Account

from nftkit.signer import Signer
from tests.fakes import TEST_PRIVATE_KEY, FakeStore, document_for, uri_for


@pytest.fixture
def signer() -> Signer:
    return Signer.from_private_key(TEST_PRIVATE_KEY, chain_id=1)


@pytest.fixture
def signer_address() -> str:
    return Account.from_key(TEST_PRIVATE_KEY).address


@pytest.fixture
def store_for() -> Callable[..., FakeStore]:
    """Build a store holding documents for the given ids"""

    def build(token_ids, failing=(), delays=None) -> FakeStore:
        documents: Dict[str, Any] = {}
        for token_id in token_ids:
            if token_id in failing:
                documents[uri_for(token_id)] = ConnectionError("gateway unreachable")
            else:
                documents[uri_for(token_id)] = document_for(token_id)
        return FakeStore(documents, delays={uri_for(k): v for k, v in (delays or {}).items()})

    return build
