"""
Configuration management for nftkit
"""

import os
from typing import Optional, TYPE_CHECKING
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

if TYPE_CHECKING:
    from .signer import Signer

# Load environment variables
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

DEFAULT_IPFS_GATEWAY = "https://cloudflare-ipfs.com/ipfs/"


@dataclass
class Config:
    """Main configuration class"""

    # Chain connection
    rpc_url: Optional[str] = None
    chain_id: Optional[int] = None
    private_key: Optional[str] = None

    # Metadata gateway
    ipfs_gateway_url: str = DEFAULT_IPFS_GATEWAY

    # Cache settings (metadata documents only)
    cache_ttl: int = 900  # 15 minutes
    cache_type: str = "memory"  # "memory", "redis" or "none"
    redis_url: Optional[str] = None

    # Request settings
    max_retries: int = 3
    timeout: int = 30
    max_workers: int = 10  # Maximum concurrent units in a batch resolve
    batch_timeout: Optional[float] = None  # Per-unit timeout, None waits forever

    # Transaction settings
    confirmation_timeout: int = 120
    poll_latency: float = 2.0

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables"""

        def get_optional_int(key_name: str) -> Optional[int]:
            value = os.getenv(key_name, "").strip()
            return int(value) if value else None

        def get_optional_float(key_name: str) -> Optional[float]:
            value = os.getenv(key_name, "").strip()
            return float(value) if value else None

        return cls(
            rpc_url=os.getenv("RPC_URL"),
            chain_id=get_optional_int("CHAIN_ID"),
            private_key=os.getenv("PRIVATE_KEY") or None,
            ipfs_gateway_url=os.getenv("IPFS_GATEWAY_URL", DEFAULT_IPFS_GATEWAY),
            redis_url=os.getenv("REDIS_URL"),
            cache_ttl=int(os.getenv("CACHE_TTL", "900")),
            cache_type=os.getenv("CACHE_TYPE", "memory"),
            max_retries=int(os.getenv("MAX_RETRIES", "3")),
            timeout=int(os.getenv("TIMEOUT", "30")),
            max_workers=int(os.getenv("MAX_WORKERS", "10")),
            batch_timeout=get_optional_float("BATCH_TIMEOUT"),
            confirmation_timeout=int(os.getenv("CONFIRMATION_TIMEOUT", "120")),
            poll_latency=float(os.getenv("POLL_LATENCY", "2.0")),
        )

    def get_rpc_url(self) -> str:
        """Get RPC URL"""
        if not self.rpc_url:
            raise ValueError("RPC URL not configured")
        return self.rpc_url

    def get_signer(self) -> Optional["Signer"]:
        """Build a signer from the configured private key, if any"""
        if not self.private_key:
            return None
        from .signer import Signer
        return Signer.from_private_key(self.private_key, chain_id=self.chain_id)


# Global config instance
config = Config.from_env()
