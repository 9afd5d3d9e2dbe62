"""
Dashboard repository backed by SQLAlchemy.

The dashboard is a single row stored under DASHBOARD_ID.
"""
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from domain.models import DASHBOARD_ID, Dashboard, as_decimal
from repositories.models import DashboardORM


def _dashboard_from_orm(orm: DashboardORM) -> Dashboard:
    return Dashboard(
        id=orm.id,
        wallet_balance=as_decimal(orm.wallet_balance),
        total_investment=as_decimal(orm.total_investment),
        monthly_yield=as_decimal(orm.monthly_yield),
    )


class DashboardRepository:
    """Read/write operations for the singleton dashboard."""

    def _query(self, session: Session, dashboard_id: int, for_update: bool = False):
        query = session.query(DashboardORM).filter(DashboardORM.id == dashboard_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_dashboard(self, session: Session, for_update: bool = False) -> Optional[Dashboard]:
        orm = self._query(session, DASHBOARD_ID, for_update)
        return _dashboard_from_orm(orm) if orm else None

    def update_dashboard(
        self,
        session: Session,
        dashboard_id: int,
        *,
        wallet_balance: Optional[Decimal] = None,
        total_investment: Optional[Decimal] = None,
        monthly_yield: Optional[Decimal] = None,
    ) -> Dashboard:
        orm = self._query(session, dashboard_id)
        if not orm:
            raise LookupError(f"Dashboard {dashboard_id} not found")
        if wallet_balance is not None:
            orm.wallet_balance = wallet_balance
        if total_investment is not None:
            orm.total_investment = total_investment
        if monthly_yield is not None:
            orm.monthly_yield = monthly_yield
        session.flush()
        return _dashboard_from_orm(orm)

    def create_dashboard(
        self,
        session: Session,
        wallet_balance: Decimal,
        total_investment: Decimal,
        monthly_yield: Decimal,
    ) -> Dashboard:
        orm = DashboardORM(
            id=DASHBOARD_ID,
            wallet_balance=wallet_balance,
            total_investment=total_investment,
            monthly_yield=monthly_yield,
        )
        session.add(orm)
        session.flush()
        return _dashboard_from_orm(orm)

    def count(self, session: Session) -> int:
        return session.query(func.count(DashboardORM.id)).scalar() or 0
