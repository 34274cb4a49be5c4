"""Exception hierarchy for nftkit"""

from typing import Any, Dict, Optional, Sequence


class NftkitError(Exception):
    """Base exception for all nftkit errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(NftkitError):
    """Token URI could not be read from the chain, so the token is treated as missing"""

    def __init__(self, token_id: int):
        super().__init__(f"Token {token_id} not found", {"token_id": token_id})
        self.token_id = token_id


class MetadataUnavailableError(NftkitError):
    """Metadata store failed to return a document for a token that exists"""

    def __init__(self, uri: str, reason: str, token_id: Optional[int] = None):
        super().__init__(
            f"Metadata unavailable for {uri}: {reason}",
            {"uri": uri, "token_id": token_id},
        )
        self.uri = uri
        self.reason = reason
        self.token_id = token_id


class SignerMissingError(NftkitError):
    """State-changing call attempted without a usable signer"""

    def __init__(self, message: str = "No signer configured for this client"):
        super().__init__(message)


class InvalidAddressError(NftkitError, ValueError):
    """Address string is not a valid Ethereum address"""

    def __init__(self, address: Any):
        super().__init__(f"Invalid address: {address!r}", {"address": address})
        self.address = address


class CallFailedError(NftkitError):
    """Read-only contract call failed"""

    def __init__(self, method: str, args: Sequence[Any], reason: str):
        super().__init__(
            f"Call {method}{tuple(args)} failed: {reason}",
            {"method": method, "args": list(args)},
        )
        self.method = method
        self.call_args = tuple(args)


class SubmitFailedError(NftkitError):
    """Transaction could not be built, signed or broadcast"""

    def __init__(self, method: str, args: Sequence[Any], reason: str):
        super().__init__(
            f"Submitting {method}{tuple(args)} failed: {reason}",
            {"method": method, "args": list(args)},
        )
        self.method = method
        self.call_args = tuple(args)


class ConfirmationFailedError(NftkitError):
    """Transaction was not confirmed (timeout or reverted)"""

    def __init__(self, tx_hash: str, reason: str):
        super().__init__(f"Transaction {tx_hash} not confirmed: {reason}", {"tx_hash": tx_hash})
        self.tx_hash = tx_hash
