"""Exceptions raised by the NFT indexer service"""

from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    """Why a facade operation failed"""
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    ENRICHMENT = "enrichment"
    UNKNOWN = "unknown"


class IndexerError(Exception):
    """Base exception for indexer requests."""
    pass


class IndexerTransportError(IndexerError):
    """The indexer could not be reached or answered with an HTTP error."""
    pass


class IndexerResponseError(IndexerError):
    """The indexer answered with GraphQL errors or an unexpected payload."""
    pass


class EnrichmentError(Exception):
    """A secondary lookup for an NFT failed."""

    def __init__(self, nft_id: str, message: str):
        self.nft_id = nft_id
        super().__init__(f"{message} (NFT {nft_id})")


class NFTNotFoundError(Exception):
    """No NFT matched the requested id."""

    def __init__(self, nft_id: str):
        self.nft_id = nft_id
        super().__init__(f"NFT {nft_id} not found")


class NFTServiceError(Exception):
    """
    Error surfaced by the NFT query facade.

    ``str(err)`` is always the static message of the operation family;
    ``kind`` and ``__cause__`` keep the underlying reason.
    """

    default_message = "NFT service error"

    def __init__(self, kind: FailureKind = FailureKind.UNKNOWN, message: Optional[str] = None):
        self.kind = kind
        super().__init__(message or self.default_message)

    @property
    def is_not_found(self) -> bool:
        return self.kind == FailureKind.NOT_FOUND


class NFTsRetrievalError(NFTServiceError):
    default_message = "Couldn't get NFTs"


class NFTRetrievalError(NFTServiceError):
    default_message = "Couldn't get NFT"


class OwnerNFTsRetrievalError(NFTServiceError):
    default_message = "Couldn't get user's NFTs"
