"""
NFT Indexer - enriched NFT queries over a GraphQL indexer
"""

__version__ = "1.0.0"

from .service import NFTService
from .models import NFT, CompleteNFT, PaginatedResponse
from .errors import (
    FailureKind,
    NFTServiceError,
    NFTsRetrievalError,
    NFTRetrievalError,
    OwnerNFTsRetrievalError,
)

__all__ = [
    "NFTService",
    "NFT",
    "CompleteNFT",
    "PaginatedResponse",
    "FailureKind",
    "NFTServiceError",
    "NFTsRetrievalError",
    "NFTRetrievalError",
    "OwnerNFTsRetrievalError",
]
