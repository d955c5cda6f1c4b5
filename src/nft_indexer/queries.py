"""
GraphQL documents for the NFT indexer

Every builder returns a `GraphQLQuery`; caller data always travels in
`variables`, never inside the document text.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


NFT_FIELDS = """
        id
        owner
        creator
        listed
        timestampList
        uri
        price
        priceTiime
        serieId
        marketplaceId
"""

PAGE_INFO_FIELDS = """
      pageInfo {
        hasNextPage
        hasPreviousPage
      }
"""

NOT_BURNT = "{ burnTimestamp: { isNull: true } }"


@dataclass(frozen=True)
class GraphQLQuery:
    """A GraphQL document with its variables"""
    document: str
    variables: Dict[str, Any] = field(default_factory=dict)
    operation_name: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Request body for a GraphQL POST"""
        payload: Dict[str, Any] = {"query": self.document, "variables": self.variables}
        if self.operation_name:
            payload["operationName"] = self.operation_name
        return payload


def page_to_offset(page: int, limit: int) -> int:
    """Convert a 1-based page number to an indexer offset"""
    return (page - 1) * limit


def _nft_entities(operation: str, params: str, arguments: str, paginated: bool = False) -> str:
    page_info = PAGE_INFO_FIELDS if paginated else ""
    signature = f"({params})" if params else ""
    return f"""
query {operation}{signature} {{
  nftEntities({arguments}) {{
      totalCount{page_info}
      nodes {{{NFT_FIELDS}      }}
  }}
}}
"""


class QueriesBuilder:
    """Builds the indexer queries used by the NFT service"""

    @staticmethod
    def all_nfts() -> GraphQLQuery:
        """All NFTs that have not been burnt"""
        document = _nft_entities("AllNFTs", "", f"filter: {NOT_BURNT}")
        return GraphQLQuery(document, {}, "AllNFTs")

    @staticmethod
    def all_nfts_paginated(limit: int, offset: int) -> GraphQLQuery:
        """A page of NFTs that have not been burnt"""
        document = _nft_entities(
            "AllNFTsPaginated",
            "$first: Int!, $offset: Int!",
            f"first: $first, offset: $offset, filter: {NOT_BURNT}",
            paginated=True,
        )
        return GraphQLQuery(document, {"first": limit, "offset": offset}, "AllNFTsPaginated")

    @staticmethod
    def nft_from_id(nft_id: str) -> GraphQLQuery:
        """The NFT with the given id"""
        document = _nft_entities(
            "NFTFromId",
            "$id: String!",
            "filter: { id: { equalTo: $id } }",
        )
        return GraphQLQuery(document, {"id": nft_id}, "NFTFromId")

    @staticmethod
    def nfts_from_owner_id(owner_id: str) -> GraphQLQuery:
        """All unburnt NFTs held by an owner"""
        document = _nft_entities(
            "NFTsFromOwnerId",
            "$owner: String!",
            f"filter: {{ and: [{NOT_BURNT}, {{ owner: {{ equalTo: $owner }} }}] }}",
        )
        return GraphQLQuery(document, {"owner": owner_id}, "NFTsFromOwnerId")

    @staticmethod
    def nfts_from_owner_id_paginated(owner_id: str, limit: int, offset: int) -> GraphQLQuery:
        """A page of unburnt NFTs held by an owner"""
        document = _nft_entities(
            "NFTsFromOwnerIdPaginated",
            "$owner: String!, $first: Int!, $offset: Int!",
            "first: $first, offset: $offset, "
            f"filter: {{ and: [{NOT_BURNT}, {{ owner: {{ equalTo: $owner }} }}] }}",
            paginated=True,
        )
        return GraphQLQuery(
            document,
            {"owner": owner_id, "first": limit, "offset": offset},
            "NFTsFromOwnerIdPaginated",
        )

    @staticmethod
    def nfts_from_serie(serie_id: str) -> GraphQLQuery:
        """All unburnt NFTs of a series"""
        document = _nft_entities(
            "NFTsFromSerie",
            "$serieId: String!",
            f"filter: {{ and: [{NOT_BURNT}, {{ serieId: {{ equalTo: $serieId }} }}] }}",
        )
        return GraphQLQuery(document, {"serieId": serie_id}, "NFTsFromSerie")
