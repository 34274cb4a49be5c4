"""
Pydantic models for token metadata and transaction results
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Trait(BaseModel):
    """NFT trait/attribute"""
    trait_type: str = ""
    value: Any = None
    display_type: Optional[str] = None

    class Config:
        frozen = True


class NFTMetadata(BaseModel):
    """Metadata document for one token, keyed by its on-chain id"""

    id: int = Field(ge=0)
    uri: str
    name: Optional[str] = None
    description: Optional[str] = None

    # Media (gateway URLs once resolved)
    image: Optional[str] = None
    external_url: Optional[str] = None
    animation_url: Optional[str] = None
    background_color: Optional[str] = None

    properties: Dict[str, Any] = Field(default_factory=dict)
    attributes: List[Trait] = Field(default_factory=list)

    class Config:
        frozen = True

    @classmethod
    def from_document(cls, token_id: int, uri: str, document: Dict[str, Any]) -> "NFTMetadata":
        """Build metadata from a fetched JSON document; id and uri always come from the chain"""
        attributes = []
        for attr in document.get("attributes") or []:
            if isinstance(attr, dict):
                attributes.append(Trait(
                    trait_type=str(attr.get("trait_type") or ""),
                    value=attr.get("value"),
                    display_type=_as_text(attr.get("display_type")),
                ))

        properties = document.get("properties")
        return cls(
            id=token_id,
            uri=uri,
            name=_as_text(document.get("name")),
            description=_as_text(document.get("description")),
            image=_as_text(document.get("image")),
            external_url=_as_text(document.get("external_url")),
            animation_url=_as_text(document.get("animation_url")),
            background_color=_as_text(document.get("background_color")),
            properties=properties if isinstance(properties, dict) else {},
            attributes=attributes,
        )


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


class EditionMetadata(BaseModel):
    """ERC-1155 token with its live supply"""
    metadata: NFTMetadata
    supply: int = Field(default=0, ge=0)

    @property
    def token_id(self) -> int:
        return self.metadata.id


class EditionMetadataOwner(EditionMetadata):
    """ERC-1155 token as seen by one holder at query time"""
    owner: str
    quantity_owned: int = Field(default=0, ge=0)


class NFTMetadataOwner(BaseModel):
    """ERC-721 token with its current owner"""
    metadata: NFTMetadata
    owner: str

    @property
    def token_id(self) -> int:
        return self.metadata.id


class TransactionResult(BaseModel):
    """Confirmed transaction record"""
    transaction_hash: str
    block_number: Optional[int] = None
    status: int = 1
    gas_used: Optional[int] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None

    @classmethod
    def from_receipt(cls, receipt: Any) -> "TransactionResult":
        """Build from a web3 receipt (AttributeDict or plain dict)"""
        get = receipt.get
        tx_hash = get("transactionHash")
        if isinstance(tx_hash, (bytes, bytearray)):
            tx_hash = "0x" + bytes(tx_hash).hex()
        return cls(
            transaction_hash=str(tx_hash),
            block_number=get("blockNumber"),
            status=get("status", 1),
            gas_used=get("gasUsed"),
            from_address=get("from"),
            to_address=get("to"),
        )


@dataclass
class BatchResult(Generic[T]):
    """Outcome of resolving one id inside a batch"""
    token_id: int
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchOutcome(Generic[T]):
    """Explicit result of a batch: resolved values and per-id failures"""
    succeeded: List[T] = field(default_factory=list)
    failed: List[Tuple[int, BaseException]] = field(default_factory=list)

    @property
    def failed_ids(self) -> List[int]:
        return [token_id for token_id, _ in self.failed]
