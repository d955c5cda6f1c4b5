"""
Pydantic models for indexer NFT records and their enriched form
"""

from typing import Any, Generic, List, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field, field_validator


DataType = TypeVar("DataType")


class WireModel(BaseModel):
    """Base model keeping the indexer's camelCase names as aliases"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict:
        """Dump with the camelCase names used on the wire"""
        return self.model_dump(by_alias=True)


class UserProfile(WireModel):
    """Public profile of a wallet owner or creator"""
    wallet_id: str = Field(alias="walletId")
    name: Optional[str] = None
    picture: Optional[str] = None
    bio: Optional[str] = None
    twitter_name: Optional[str] = Field(default=None, alias="twitterName")
    verified: bool = False


class Category(WireModel):
    """Category tag attached to an NFT"""
    code: str
    name: str
    description: Optional[str] = None


class MediaLink(WireModel):
    url: str


class NFT(WireModel):
    """Raw NFT node as returned by the indexer"""

    id: str
    owner: str
    creator: Optional[str] = None
    listed: int = 0
    timestamp_list: Optional[str] = Field(default=None, alias="timestampList")
    uri: Optional[str] = None

    # Pricing, kept as strings since the chain amounts exceed float precision
    price: str = "0"
    price_tiime: str = Field(default="0", alias="priceTiime")

    # Series
    serie_id: Optional[str] = Field(default=None, alias="serieId")
    total_nft: Optional[int] = Field(default=None, alias="totalNft")
    total_listed_nft: Optional[int] = Field(default=None, alias="totalListedNft")
    serie_data: Optional[List["NFT"]] = Field(default=None, alias="serieData")

    views_count: Optional[int] = Field(default=None, alias="viewsCount")
    marketplace_id: Optional[str] = Field(default=None, alias="marketplaceId")

    @field_validator("price", "price_tiime", mode="before")
    @classmethod
    def _amount_to_str(cls, value: Any) -> Any:
        if value is None:
            return "0"
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("serie_id", "marketplace_id", "timestamp_list", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value


class CompleteNFT(NFT):
    """NFT enriched with metadata, profiles and categories"""

    name: Optional[str] = None
    description: Optional[str] = None
    media: Optional[MediaLink] = None
    crypted_media: Optional[MediaLink] = Field(default=None, alias="cryptedMedia")
    owner_data: Optional[UserProfile] = Field(default=None, alias="ownerData")
    creator_data: Optional[UserProfile] = Field(default=None, alias="creatorData")
    categories: Optional[List[Category]] = None


class PageInfo(WireModel):
    has_next_page: bool = Field(alias="hasNextPage")
    has_previous_page: bool = Field(alias="hasPreviousPage")


class NFTConnection(WireModel):
    """The `nftEntities` connection of an indexer response"""
    total_count: Optional[int] = Field(default=None, alias="totalCount")
    page_info: Optional[PageInfo] = Field(default=None, alias="pageInfo")
    nodes: List[NFT]


class NFTListResponse(WireModel):
    """Envelope of every NFT list query"""
    nft_entities: NFTConnection = Field(alias="nftEntities")


class PaginatedResponse(WireModel, Generic[DataType]):
    """A page of records with the indexer's page-info"""

    data: List[DataType]
    total_count: Optional[int] = Field(default=None, alias="totalCount")
    has_next_page: bool = Field(default=False, alias="hasNextPage")
    has_previous_page: bool = Field(default=False, alias="hasPreviousPage")
