"""Signing capability bound to a private key and chain id"""

from typing import Any, Dict, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from loguru import logger

from .exceptions import SignerMissingError


class Signer:
    """Holds a local account and signs transactions for one chain.

    Passed explicitly to each client instance. Nothing here talks to the
    network; if no chain id is given the caller fills it in before signing.
    """

    def __init__(self, account: LocalAccount, chain_id: Optional[int] = None):
        self.account = account
        self.chain_id = chain_id

    @classmethod
    def from_private_key(cls, private_key: str, chain_id: Optional[int] = None) -> "Signer":
        """Create a signer from a hex private key"""
        try:
            account = Account.from_key(private_key)
        except Exception as e:
            logger.error(f"Invalid private key: {e}")
            raise SignerMissingError(f"Invalid private key: {e}") from e
        return cls(account, chain_id=chain_id)

    @property
    def address(self) -> ChecksumAddress:
        return self.account.address

    def sign_transaction(self, tx: Dict[str, Any]) -> bytes:
        """Sign a fully built transaction and return the raw bytes"""
        if "chainId" not in tx and self.chain_id is not None:
            tx = {**tx, "chainId": self.chain_id}
        signed = self.account.sign_transaction(tx)
        return signed.raw_transaction

    def __repr__(self) -> str:
        return f"Signer(address={self.address}, chain_id={self.chain_id})"
