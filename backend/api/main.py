"""
FastAPI application entry point.

Run with: uvicorn api.main:create_app --factory --reload
"""
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import assets, dashboard, invest
from db import create_db_engine, make_session_factory
from services.bootstrap import bootstrap
from settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app together with its connection pool."""
    settings = settings or default_settings

    app = FastAPI(
        title="Onblock Investment API",
        description="Tokenized real-estate investment ledger",
        version="0.1.0",
    )

    engine = create_db_engine(
        settings.DATABASE_URL,
        timeout_seconds=settings.TRANSACTION_TIMEOUT_SECONDS,
        echo=settings.SQL_ECHO,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.bootstrap_error = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
    app.include_router(assets.router, prefix="/assets", tags=["assets"])
    app.include_router(invest.router, prefix="/invest", tags=["invest"])

    @app.on_event("startup")
    def startup_event():
        """Create the database, tables and seed data on startup."""
        try:
            bootstrap(engine, seed=settings.SEED_ON_STARTUP)
        except Exception as e:
            logger.exception("Database initialization failed")
            if settings.BOOTSTRAP_FAIL_FAST:
                raise
            app.state.bootstrap_error = str(e)
            logger.warning("Continuing in degraded mode (BOOTSTRAP_FAIL_FAST is off)")

    @app.on_event("shutdown")
    def shutdown_event():
        engine.dispose()

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "Onblock Investment API"}

    @app.get("/health")
    async def health():
        """Health check endpoint; reports degraded when bootstrap failed."""
        if app.state.bootstrap_error:
            return {"status": "degraded", "error": app.state.bootstrap_error}
        return {"status": "healthy"}

    return app


def run() -> None:
    """Serve the API with uvicorn using HOST/PORT from settings."""
    import uvicorn

    logging.basicConfig(
        level=default_settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Endpoints: GET /dashboard, GET /assets, POST /invest")
    uvicorn.run(
        "api.main:create_app",
        factory=True,
        host=default_settings.HOST,
        port=default_settings.PORT,
    )


if __name__ == "__main__":
    run()
