"""
SQLAlchemy ORM models for persistence.
"""
from sqlalchemy import CheckConstraint, Column, Integer, Numeric, String

from db import Base


class DashboardORM(Base):
    __tablename__ = "dashboard"
    __table_args__ = (
        CheckConstraint("wallet_balance >= 0", name="ck_dashboard_wallet_balance_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=False)
    wallet_balance = Column(Numeric(15, 2), nullable=False, default=0)
    total_investment = Column(Numeric(15, 2), nullable=False, default=0)
    monthly_yield = Column(Numeric(15, 2), nullable=False, default=0)


class AssetORM(Base):
    __tablename__ = "assets"
    __table_args__ = (
        CheckConstraint("tokens_available >= 0", name="ck_assets_tokens_available_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    apy = Column(Numeric(5, 2), nullable=False)
    price_per_token = Column(Numeric(15, 2), nullable=False)
    tokens_available = Column(Integer, nullable=False)
