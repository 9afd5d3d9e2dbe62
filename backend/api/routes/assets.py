"""
Assets API routes.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from api.dependencies import get_session_factory
from api.schemas import AssetResponse, ErrorResponse, asset_to_response
from repositories import AssetsRepository

router = APIRouter()
assets_repo = AssetsRepository()
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[AssetResponse],
    responses={500: {"model": ErrorResponse}},
)
def list_assets(session_factory: sessionmaker = Depends(get_session_factory)):
    """List all assets in ascending id order."""
    try:
        with session_factory() as session:
            assets = assets_repo.list_assets(session)
    except SQLAlchemyError as e:
        logger.exception("Failed to list assets")
        return JSONResponse(
            status_code=500,
            content={"error": "Database query failed", "details": str(e)},
        )
    return [asset_to_response(a) for a in assets]
