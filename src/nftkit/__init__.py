"""
nftkit - async SDK for ERC-1155 edition and ERC-721 NFT contracts
"""

__version__ = "0.1.0"

from .sdk import NFTKit
from .config import Config
from .signer import Signer
from .erc1155 import Edition
from .erc721 import NFTCollection
from .models import (
    BatchOutcome,
    EditionMetadata,
    EditionMetadataOwner,
    NFTMetadata,
    NFTMetadataOwner,
    Trait,
    TransactionResult,
)
from .exceptions import (
    CallFailedError,
    ConfirmationFailedError,
    InvalidAddressError,
    MetadataUnavailableError,
    NftkitError,
    NotFoundError,
    SignerMissingError,
    SubmitFailedError,
)

__all__ = [
    "NFTKit",
    "Config",
    "Signer",
    "Edition",
    "NFTCollection",
    "BatchOutcome",
    "EditionMetadata",
    "EditionMetadataOwner",
    "NFTMetadata",
    "NFTMetadataOwner",
    "Trait",
    "TransactionResult",
    "CallFailedError",
    "ConfirmationFailedError",
    "InvalidAddressError",
    "MetadataUnavailableError",
    "NftkitError",
    "NotFoundError",
    "SignerMissingError",
    "SubmitFailedError",
]
