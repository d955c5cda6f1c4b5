"""FastAPI endpoints exposing the NFT queries"""

from typing import Any, Dict, Optional
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .. import __version__
from ..config import config
from ..errors import NFTServiceError
from ..service import DEFAULT_LIMIT, DEFAULT_PAGE, NFTService
from ..utils import validate_account_id

app = FastAPI(title="NFT Indexer API", version=__version__)

if config.cors_origins == ["*"]:
    logger.warning("CORS is set to allow all origins. Consider restricting in production.")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
    max_age=3600,
)

MAX_LIMIT = 100

_service: Optional[NFTService] = None


def get_service() -> NFTService:
    """Shared service instance, created on first use"""
    global _service
    if _service is None:
        _service = NFTService()
    return _service


def _http_error(err: NFTServiceError) -> HTTPException:
    status_code = 404 if err.is_not_found else 502
    return HTTPException(status_code=status_code, detail=str(err))


def _wants_page(page: Optional[int], limit: Optional[int]) -> bool:
    return page is not None or limit is not None


@app.get("/api/nfts")
async def list_nfts(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=MAX_LIMIT),
    service: NFTService = Depends(get_service),
) -> Dict[str, Any]:
    """All NFTs, or one page of them when page or limit is given"""
    try:
        if _wants_page(page, limit):
            result = await service.get_paginated_nfts(page or DEFAULT_PAGE, limit or DEFAULT_LIMIT)
            return result.to_wire()
        nfts = await service.get_all_nfts()
    except NFTServiceError as e:
        raise _http_error(e)
    return {"data": [nft.to_wire() for nft in nfts], "totalCount": len(nfts)}


@app.get("/api/nfts/owner/{owner_id}")
async def list_owner_nfts(
    owner_id: str,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=MAX_LIMIT),
    service: NFTService = Depends(get_service),
) -> Dict[str, Any]:
    """NFTs held by a wallet"""
    is_valid, owner_id = validate_account_id(owner_id)
    if not is_valid:
        raise HTTPException(status_code=400, detail="Invalid owner id")

    try:
        if _wants_page(page, limit):
            result = await service.get_paginated_nfts_from_owner(owner_id, page or DEFAULT_PAGE, limit or DEFAULT_LIMIT)
            return result.to_wire()
        nfts = await service.get_nfts_from_owner(owner_id)
    except NFTServiceError as e:
        raise _http_error(e)
    return {"data": [nft.to_wire() for nft in nfts], "totalCount": len(nfts)}


@app.get("/api/nfts/owner", include_in_schema=False)
async def missing_owner():
    raise HTTPException(status_code=400, detail="Missing owner id")


@app.get("/api/nfts/{nft_id}")
async def get_nft(nft_id: str, service: NFTService = Depends(get_service)) -> Dict[str, Any]:
    """A single NFT"""
    try:
        nft = await service.get_nft(nft_id)
    except NFTServiceError as e:
        raise _http_error(e)
    return nft.to_wire()


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "NFT Indexer API",
        "version": __version__,
        "indexer": config.indexer_url,
        "endpoints": {
            "nfts": "/api/nfts",
            "nft": "/api/nfts/{nft_id}",
            "owner_nfts": "/api/nfts/owner/{owner_id}",
            "health": "/health",
        },
    }
