import os
from pathlib import Path
from typing import List

# Basic settings helper to read environment configuration.

BACKEND_ROOT = Path(__file__).resolve().parent
DEFAULT_DATABASE_URL = f"sqlite:///{BACKEND_ROOT / 'onblock.db'}"


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_list(val: str | None, default: List[str]) -> List[str]:
    if not val:
        return list(default)
    return [item.strip() for item in val.split(",") if item.strip()]


def normalize_database_url(url: str) -> str:
    """Hosted Postgres providers hand out postgres:// URLs, which SQLAlchemy rejects."""
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


class Settings:
    def __init__(self) -> None:
        self.DATABASE_URL: str = normalize_database_url(
            os.getenv("DATABASE_URL", "").strip() or DEFAULT_DATABASE_URL
        )
        self.HOST: str = os.getenv("HOST", "127.0.0.1")
        self.PORT: int = int(os.getenv("PORT", "3001"))
        self.CORS_ORIGINS: List[str] = _as_list(os.getenv("CORS_ORIGINS"), ["*"])
        self.TRANSACTION_TIMEOUT_SECONDS: float = float(
            os.getenv("TRANSACTION_TIMEOUT_SECONDS", "5")
        )
        self.BOOTSTRAP_FAIL_FAST: bool = _as_bool(os.getenv("BOOTSTRAP_FAIL_FAST"), True)
        self.SEED_ON_STARTUP: bool = _as_bool(os.getenv("SEED_ON_STARTUP"), True)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.SQL_ECHO: bool = _as_bool(os.getenv("SQL_ECHO"), False)


settings = Settings()
