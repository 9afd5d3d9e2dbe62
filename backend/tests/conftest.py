import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from db import create_db_engine, make_session_factory  # noqa: E402
from services.bootstrap import bootstrap  # noqa: E402
from settings import Settings  # noqa: E402


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'ledger.db'}"


@pytest.fixture
def engine(database_url):
    engine = create_db_engine(database_url, timeout_seconds=10)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory over a freshly bootstrapped and seeded database."""
    bootstrap(engine)
    return make_session_factory(engine)


@pytest.fixture
def app_settings(monkeypatch, database_url):
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("BOOTSTRAP_FAIL_FAST", "true")
    monkeypatch.setenv("SEED_ON_STARTUP", "true")
    return Settings()
