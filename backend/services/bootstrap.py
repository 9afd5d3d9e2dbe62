"""
Schema bootstrap and seed data.

Every step is idempotent: the database and tables are only created when
missing, and seed rows are only inserted into empty tables. Existing data is
never overwritten.
"""
import logging
from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from db import ensure_database_exists, init_db, make_session_factory
from repositories import AssetsRepository, DashboardRepository

logger = logging.getLogger(__name__)

SEED_DASHBOARD: Dict[str, Decimal] = {
    "wallet_balance": Decimal("15000.00"),
    "total_investment": Decimal("5200.00"),
    "monthly_yield": Decimal("435.50"),
}

# (name, location, apy, price_per_token, tokens_available)
SEED_ASSETS: List[Tuple[str, str, Decimal, Decimal, int]] = [
    ("Skyline Apartments", "New York, NY", Decimal("8.5"), Decimal("50.00"), 1000),
    ("Ocean View Villa", "Miami, FL", Decimal("12.0"), Decimal("150.00"), 500),
    ("Mountain Retreat", "Aspen, CO", Decimal("10.2"), Decimal("75.00"), 800),
    ("Downtown Office", "Chicago, IL", Decimal("9.8"), Decimal("120.00"), 1200),
]


def seed_data(session_factory: sessionmaker) -> Dict[str, bool]:
    """
    Insert dummy data into empty tables.

    Returns:
        Dict telling which tables were seeded, e.g. {"dashboard": True, "assets": False}
    """
    dashboard_repo = DashboardRepository()
    assets_repo = AssetsRepository()
    seeded = {"dashboard": False, "assets": False}

    with session_factory.begin() as session:
        if dashboard_repo.count(session) == 0:
            dashboard_repo.create_dashboard(session, **SEED_DASHBOARD)
            seeded["dashboard"] = True
            logger.info("Seed: dashboard table initialized")

        if assets_repo.count(session) == 0:
            for name, location, apy, price, tokens in SEED_ASSETS:
                assets_repo.create_asset(session, name, location, apy, price, tokens)
            seeded["assets"] = True
            logger.info("Seed: assets table initialized with %s assets", len(SEED_ASSETS))

    return seeded


def bootstrap(engine: Engine, seed: bool = True) -> None:
    """Ensure the database and schema exist, then seed empty tables."""
    ensure_database_exists(engine.url.render_as_string(hide_password=False))
    init_db(engine)
    if seed:
        seed_data(make_session_factory(engine))
    logger.info("Database schema ready%s", " and seeded" if seed else "")
