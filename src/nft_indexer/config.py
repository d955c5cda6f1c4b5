"""
Configuration management for the NFT indexer service
"""

import os
from typing import List, Optional
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


DEFAULT_INDEXER_URL = "https://indexer.chaos.ternoa.com/"
DEFAULT_IPFS_GATEWAY = "https://ipfs.ternoa.dev/ipfs"


def _get_bool(key_name: str, default: bool) -> bool:
    value = os.getenv(key_name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Main configuration class"""

    indexer_url: str = DEFAULT_INDEXER_URL
    ternoa_api_url: Optional[str] = None  # profiles and categories, enrichment skipped when unset
    ipfs_gateway: str = DEFAULT_IPFS_GATEWAY

    # Request settings
    timeout: int = 30
    max_retries: int = 0  # extra attempts after the first one
    max_workers: int = 10  # concurrent node enrichments per call

    # Enrichment settings
    enrich_series: bool = True

    # Logging
    log_level: str = "INFO"

    # HTTP API settings
    api_port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables"""

        def get_list(key_name: str, default: str) -> List[str]:
            """Get a comma-separated list"""
            raw = os.getenv(key_name, default)
            return [v.strip() for v in raw.split(",") if v.strip()]

        return cls(
            indexer_url=os.getenv("INDEXER_URL", DEFAULT_INDEXER_URL),
            ternoa_api_url=os.getenv("TERNOA_API_URL") or None,
            ipfs_gateway=os.getenv("IPFS_GATEWAY", DEFAULT_IPFS_GATEWAY),
            timeout=int(os.getenv("TIMEOUT", "30")),
            max_retries=int(os.getenv("MAX_RETRIES", "0")),
            max_workers=int(os.getenv("MAX_WORKERS", "10")),
            enrich_series=_get_bool("ENRICH_SERIES", True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            api_port=int(os.getenv("API_PORT", "8000")),
            cors_origins=get_list("CORS_ORIGINS", "*"),
        )


# Global config instance
config = Config.from_env()
