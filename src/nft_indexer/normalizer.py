"""Turn NFT metadata documents into enriched fields"""

from dataclasses import dataclass
from typing import Dict, Any, Optional

from .config import DEFAULT_IPFS_GATEWAY
from .models import MediaLink


def convert_ipfs_to_http(ipfs_url: str, gateway: str = DEFAULT_IPFS_GATEWAY) -> Optional[str]:
    """Convert an IPFS URI or bare hash to an HTTP gateway URL"""
    if not ipfs_url or not isinstance(ipfs_url, str):
        return None

    ipfs_url = ipfs_url.strip()
    gateway = gateway.rstrip("/")

    # Already HTTP/HTTPS
    if ipfs_url.startswith(("http://", "https://")):
        return ipfs_url

    # IPFS protocol - preserve full path after hash
    if ipfs_url.startswith("ipfs://"):
        ipfs_path = ipfs_url[len("ipfs://"):].lstrip("/")
        if ipfs_path.startswith("ipfs/"):
            ipfs_path = ipfs_path[len("ipfs/"):]
        return f"{gateway}/{ipfs_path}"

    # Bare CIDv0 (Qm...) or CIDv1 (bafy...) hash, optionally with a path
    root = ipfs_url.split("/")[0]
    if (root.startswith("Qm") and len(root) == 46) or (root.startswith("baf") and len(root) > 50):
        return f"{gateway}/{ipfs_url}"

    return None


@dataclass
class NFTMetadata:
    """Fields taken from an NFT's off-chain metadata document"""
    name: Optional[str] = None
    description: Optional[str] = None
    media: Optional[MediaLink] = None
    crypted_media: Optional[MediaLink] = None


class Normalizer:
    """Convert metadata documents to the enriched NFT fields"""

    @staticmethod
    def _media_link(value: Any, gateway: str) -> Optional[MediaLink]:
        # Either a bare hash/URL or an object carrying a `hash` or `url`
        if isinstance(value, dict):
            value = value.get("url") or value.get("hash")
        if not value or not isinstance(value, str):
            return None
        url = convert_ipfs_to_http(value, gateway)
        return MediaLink(url=url) if url else None

    @staticmethod
    def _text(value: Any) -> Optional[str]:
        # Metadata is user-authored, only plain strings are kept
        return value if isinstance(value, str) and value else None

    @staticmethod
    def normalize_metadata(data: Dict[str, Any], gateway: str = DEFAULT_IPFS_GATEWAY) -> NFTMetadata:
        """Normalize a Ternoa NFT metadata document"""
        if not isinstance(data, dict):
            return NFTMetadata()

        properties = data.get("properties") or {}
        if not isinstance(properties, dict):
            properties = {}

        media = Normalizer._media_link(properties.get("media"), gateway)
        if media is None:
            media = Normalizer._media_link(data.get("image"), gateway)

        return NFTMetadata(
            name=Normalizer._text(data.get("title")) or Normalizer._text(data.get("name")),
            description=Normalizer._text(data.get("description")),
            media=media,
            crypted_media=Normalizer._media_link(properties.get("cryptedMedia"), gateway),
        )
