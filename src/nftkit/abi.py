"""Minimal ABI fragments for the ERC-1155 and ERC-721 contracts nftkit talks to"""

from typing import Any, Dict, List


def _fn(name: str, inputs: List[tuple], outputs: List[str], mutability: str = "view") -> Dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": mutability,
        "inputs": [{"name": arg, "type": typ} for arg, typ in inputs],
        "outputs": [{"name": "", "type": typ} for typ in outputs],
    }


_APPROVAL_ABI: List[Dict[str, Any]] = [
    _fn("isApprovedForAll", [("account", "address"), ("operator", "address")], ["bool"]),
    _fn("setApprovalForAll", [("operator", "address"), ("approved", "bool")], [], "nonpayable"),
]

ERC1155_ABI: List[Dict[str, Any]] = _APPROVAL_ABI + [
    _fn("uri", [("id", "uint256")], ["string"]),
    _fn("totalSupply", [("id", "uint256")], ["uint256"]),
    _fn("nextTokenIdToMint", [], ["uint256"]),
    _fn("balanceOf", [("account", "address"), ("id", "uint256")], ["uint256"]),
    _fn("balanceOfBatch", [("accounts", "address[]"), ("ids", "uint256[]")], ["uint256[]"]),
    _fn(
        "safeTransferFrom",
        [("from", "address"), ("to", "address"), ("id", "uint256"), ("amount", "uint256"), ("data", "bytes")],
        [],
        "nonpayable",
    ),
    _fn("burn", [("account", "address"), ("id", "uint256"), ("value", "uint256")], [], "nonpayable"),
]

ERC721_ABI: List[Dict[str, Any]] = _APPROVAL_ABI + [
    _fn("tokenURI", [("tokenId", "uint256")], ["string"]),
    _fn("ownerOf", [("tokenId", "uint256")], ["address"]),
    _fn("balanceOf", [("owner", "address")], ["uint256"]),
    _fn("totalSupply", [], ["uint256"]),
    _fn("nextTokenIdToMint", [], ["uint256"]),
    _fn("tokenOfOwnerByIndex", [("owner", "address"), ("index", "uint256")], ["uint256"]),
    _fn(
        "safeTransferFrom",
        [("from", "address"), ("to", "address"), ("tokenId", "uint256")],
        [],
        "nonpayable",
    ),
    _fn("burn", [("tokenId", "uint256")], [], "nonpayable"),
]
