"""
Asset repository backed by SQLAlchemy.

Methods never commit: the caller owns the transaction.
"""
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from domain.models import Asset, as_decimal
from repositories.models import AssetORM


def _asset_from_orm(orm: AssetORM) -> Asset:
    return Asset(
        id=orm.id,
        name=orm.name,
        location=orm.location,
        apy=as_decimal(orm.apy),
        price_per_token=as_decimal(orm.price_per_token),
        tokens_available=orm.tokens_available,
    )


class AssetsRepository:
    """Read/write operations for assets."""

    def _query(self, session: Session, asset_id: int, for_update: bool = False):
        query = session.query(AssetORM).filter(AssetORM.id == asset_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def list_assets(self, session: Session) -> List[Asset]:
        assets = session.query(AssetORM).order_by(AssetORM.id.asc()).all()
        return [_asset_from_orm(a) for a in assets]

    def get_asset(self, session: Session, asset_id: int, for_update: bool = False) -> Optional[Asset]:
        orm = self._query(session, asset_id, for_update)
        return _asset_from_orm(orm) if orm else None

    def update_asset(self, session: Session, asset_id: int, tokens_available: int) -> Asset:
        orm = self._query(session, asset_id)
        if not orm:
            raise LookupError(f"Asset {asset_id} not found")
        orm.tokens_available = tokens_available
        session.flush()
        return _asset_from_orm(orm)

    def create_asset(
        self,
        session: Session,
        name: str,
        location: str,
        apy: Decimal,
        price_per_token: Decimal,
        tokens_available: int,
    ) -> Asset:
        orm = AssetORM(
            name=name,
            location=location,
            apy=apy,
            price_per_token=price_per_token,
            tokens_available=tokens_available,
        )
        session.add(orm)
        session.flush()
        return _asset_from_orm(orm)

    def count(self, session: Session) -> int:
        return session.query(func.count(AssetORM.id)).scalar() or 0
