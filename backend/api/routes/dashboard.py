"""
Dashboard API routes.
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from api.dependencies import get_session_factory
from api.schemas import ErrorResponse, dashboard_to_response
from repositories import DashboardRepository

router = APIRouter()
dashboard_repo = DashboardRepository()
logger = logging.getLogger(__name__)


@router.get("", responses={500: {"model": ErrorResponse}})
def get_dashboard(session_factory: sessionmaker = Depends(get_session_factory)):
    """Return the dashboard, or an empty object before it has been seeded."""
    try:
        with session_factory() as session:
            dashboard = dashboard_repo.get_dashboard(session)
    except SQLAlchemyError as e:
        logger.exception("Failed to read dashboard")
        return JSONResponse(
            status_code=500,
            content={"error": "Database query failed", "details": str(e)},
        )
    if dashboard is None:
        return {}
    return dashboard_to_response(dashboard)
