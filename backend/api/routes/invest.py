"""
Invest API route.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool

from api.dependencies import get_session_factory
from api.schemas import (
    INVALID_INVEST_REQUEST,
    ErrorResponse,
    InvestRequest,
    InvestResponse,
    investment_to_response,
)
from domain.errors import InvestmentError
from services.investment import invest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "",
    response_model=InvestResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def invest_in_asset(
    request: Request,
    session_factory: sessionmaker = Depends(get_session_factory),
):
    """
    Buy tokens of an asset with wallet cash.

    Malformed bodies and rejected purchases are client errors (400); store
    failures are server errors (500). Either way nothing is persisted.
    """
    try:
        payload = await request.json()
        body = InvestRequest.model_validate(payload)
    except (ValueError, ValidationError):
        return JSONResponse(status_code=400, content={"error": INVALID_INVEST_REQUEST})

    try:
        result = await run_in_threadpool(invest, session_factory, body.assetId, body.tokensToBuy)
    except InvestmentError as e:
        return JSONResponse(status_code=400, content={"error": e.message})
    except SQLAlchemyError as e:
        return JSONResponse(
            status_code=500,
            content={"error": "Investment failed", "details": str(e)},
        )
    return investment_to_response(result)
