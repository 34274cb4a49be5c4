"""Collaborator clients: chain access and metadata gateway"""

from .base import BaseHTTPClient
from .chain import ContractWrapper, create_web3
from .gateway import IpfsGateway

__all__ = ["BaseHTTPClient", "ContractWrapper", "IpfsGateway", "create_web3"]
