"""Tests for metadata and transaction models."""

import pytest
from hexbytes import HexBytes
from pydantic import ValidationError

from nftkit.models import (
    BatchOutcome,
    BatchResult,
    EditionMetadataOwner,
    NFTMetadata,
    TransactionResult,
)


class TestNFTMetadata:
    """Tests for building metadata from documents."""

    def test_from_document(self):
        metadata = NFTMetadata.from_document(4, "ipfs://QmX/4", {
            "name": "Four",
            "description": "The fourth",
            "image": "https://gw.test/ipfs/QmImg",
            "background_color": "ffffff",
            "properties": {"rarity": "rare"},
            "attributes": [
                {"trait_type": "Speed", "value": 9, "display_type": "number"},
                "not-a-trait",
            ],
        })

        assert metadata.id == 4
        assert metadata.name == "Four"
        assert metadata.properties == {"rarity": "rare"}
        assert len(metadata.attributes) == 1
        assert metadata.attributes[0].display_type == "number"

    def test_sparse_document(self):
        metadata = NFTMetadata.from_document(0, "ipfs://QmX/0", {"attributes": None, "properties": []})

        assert metadata.name is None
        assert metadata.attributes == []
        assert metadata.properties == {}

    def test_non_string_fields_are_coerced(self):
        metadata = NFTMetadata.from_document(1, "u", {"name": 1234})

        assert metadata.name == "1234"

    def test_structured_trait_values(self):
        metadata = NFTMetadata.from_document(2, "u", {
            "attributes": [
                {"trait_type": "Tags", "value": ["a", "b"]},
                {"trait_type": "Stats", "value": {"hp": 10}, "display_type": 7},
            ],
        })

        assert metadata.attributes[0].value == ["a", "b"]
        assert metadata.attributes[1].value == {"hp": 10}
        assert metadata.attributes[1].display_type == "7"

    def test_null_trait_type_is_empty(self):
        metadata = NFTMetadata.from_document(3, "u", {"attributes": [{"trait_type": None, "value": 1}]})

        assert metadata.attributes[0].trait_type == ""

    def test_metadata_is_frozen(self):
        metadata = NFTMetadata(id=1, uri="u")

        with pytest.raises(ValidationError):
            metadata.name = "changed"

    def test_negative_id_rejected(self):
        with pytest.raises(ValidationError):
            NFTMetadata(id=-1, uri="u")


class TestEditionModels:
    """Tests for edition models."""

    def test_owner_view(self):
        owned = EditionMetadataOwner(
            metadata=NFTMetadata(id=3, uri="u"),
            supply=10,
            owner="0x" + "00" * 20,
            quantity_owned=2,
        )

        assert owned.token_id == 3
        assert owned.model_dump()["quantity_owned"] == 2

    def test_negative_supply_rejected(self):
        with pytest.raises(ValidationError):
            EditionMetadataOwner(metadata=NFTMetadata(id=3, uri="u"), supply=-1, owner="x")


class TestTransactionResult:
    """Tests for receipt conversion."""

    def test_from_receipt_with_bytes_hash(self):
        result = TransactionResult.from_receipt({
            "transactionHash": HexBytes("0x" + "12" * 32),
            "blockNumber": 5,
            "status": 1,
            "gasUsed": 21000,
        })

        assert result.transaction_hash == "0x" + "12" * 32
        assert result.block_number == 5
        assert result.gas_used == 21000

    def test_from_receipt_with_string_hash(self):
        result = TransactionResult.from_receipt({"transactionHash": "0xabc"})

        assert result.transaction_hash == "0xabc"
        assert result.status == 1


class TestBatchTypes:
    """Tests for batch result containers."""

    def test_batch_result_ok(self):
        assert BatchResult(token_id=1, value="x").ok
        assert not BatchResult(token_id=1, error=RuntimeError()).ok

    def test_outcome_failed_ids(self):
        outcome = BatchOutcome(succeeded=["a"], failed=[(2, RuntimeError()), (5, RuntimeError())])

        assert outcome.failed_ids == [2, 5]
