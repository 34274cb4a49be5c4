"""Utility functions for address validation and argument encoding"""

import re
from typing import Any, Optional, Tuple

from eth_typing import ChecksumAddress
from eth_utils import is_address, to_checksum_address
from loguru import logger

from .exceptions import InvalidAddressError

UINT256_MAX = 2 ** 256 - 1
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

_ETH_ADDRESS_RE = re.compile(r'^0x[a-fA-F0-9]{40}$')
_CID_V0_RE = re.compile(r'^Qm[1-9A-HJ-NP-Za-km-z]{44}')
_CID_V1_RE = re.compile(r'^baf[a-z2-7]{50,}')


def validate_ethereum_address(address: Any) -> Tuple[bool, Optional[str]]:
    """
    Validate Ethereum address format

    Returns:
        (is_valid, checksum_address or None)
    """
    if not address or not isinstance(address, str):
        return False, None

    address = address.strip()

    # Check basic format
    if not _ETH_ADDRESS_RE.match(address):
        return False, None

    try:
        # Mixed-case input must carry a valid EIP-55 checksum
        if is_address(address):
            return True, to_checksum_address(address)
    except Exception as e:
        logger.debug(f"Address validation error: {e}")

    return False, None


def parse_address(address: Any) -> ChecksumAddress:
    """Parse an address string into checksum form, raising on bad input"""
    is_valid, checksum = validate_ethereum_address(address)
    if not is_valid:
        raise InvalidAddressError(address)
    return ChecksumAddress(checksum)


def to_uint256(value: Any) -> int:
    """Widen a python integer to the chain's uint256, rejecting out of range values"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected an integer, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"Value {value} out of uint256 range")
    return value


def format_token_uri(uri: str, token_id: int) -> str:
    """Substitute the ERC-1155 {id} placeholder with the 64 char hex token id"""
    if "{id}" not in uri:
        return uri
    return uri.replace("{id}", format(token_id, "064x"))


def convert_ipfs_to_http(ipfs_url: Optional[str], gateway_url: str) -> Optional[str]:
    """Convert IPFS URL to HTTP URL on the given gateway"""
    if not ipfs_url or not isinstance(ipfs_url, str):
        return None

    gateway = gateway_url.rstrip("/") + "/"

    # IPFS protocol - preserve full path after hash
    if ipfs_url.startswith("ipfs://"):
        ipfs_path = ipfs_url[len("ipfs://"):].lstrip("/")
        if ipfs_path.startswith("ipfs/"):
            ipfs_path = ipfs_path[len("ipfs/"):]
        return f"{gateway}{ipfs_path}"

    # Public gateway links are moved to the configured one
    if ipfs_url.startswith("https://ipfs.io/ipfs/"):
        return f"{gateway}{ipfs_url[len('https://ipfs.io/ipfs/'):]}"

    # Already HTTP/HTTPS
    if ipfs_url.startswith(("http://", "https://")):
        return ipfs_url

    # Bare CID, optionally with a path
    if _CID_V0_RE.match(ipfs_url) or _CID_V1_RE.match(ipfs_url):
        return f"{gateway}{ipfs_url}"

    return ipfs_url
