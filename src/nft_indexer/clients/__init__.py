"""API clients for the indexer and enrichment sources"""

from .indexer import IndexerClient
from .ipfs import IPFSClient
from .ternoa import TernoaAPIClient

__all__ = ["IndexerClient", "IPFSClient", "TernoaAPIClient"]
