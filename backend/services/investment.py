"""
Investment transaction engine.

Purchases tokens of an asset as a single atomic unit: the asset's inventory
is decremented and the dashboard is debited/credited in the same database
transaction, or nothing changes at all.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from domain.errors import (
    AssetNotFound,
    BusinessRuleViolation,
    DashboardNotFound,
    InsufficientFunds,
    InsufficientInventory,
    InvalidInvestmentRequest,
)
from domain.models import MAX_ROW_ID, InvestmentResult, quantize_money
from repositories import AssetsRepository, DashboardRepository

logger = logging.getLogger(__name__)

assets_repo = AssetsRepository()
dashboard_repo = DashboardRepository()


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_investment(asset_id, tokens_to_buy) -> None:
    """Reject malformed input before any store access."""
    if not _is_positive_int(asset_id) or not _is_positive_int(tokens_to_buy):
        raise InvalidInvestmentRequest()


def invest(session_factory: sessionmaker, asset_id: int, tokens_to_buy: int) -> InvestmentResult:
    """
    Buy ``tokens_to_buy`` tokens of asset ``asset_id`` with wallet cash.

    The asset row and then the dashboard row are locked for the duration of
    the transaction (always in that order), so concurrent purchases are
    serialized and cannot both pass the inventory/balance checks.

    Args:
        session_factory: Session factory bound to the application engine
        asset_id: Id of the asset to buy
        tokens_to_buy: Number of tokens, must be positive

    Returns:
        InvestmentResult with the committed balances

    Raises:
        InvalidInvestmentRequest: malformed input (no store access happens)
        BusinessRuleViolation: asset missing, not enough tokens, not enough cash
        SQLAlchemyError: store failure; the transaction is rolled back
    """
    validate_investment(asset_id, tokens_to_buy)

    try:
        if asset_id > MAX_ROW_ID:
            # No row can carry this id, and the driver would refuse to bind it.
            raise AssetNotFound(asset_id)
        # begin() commits on success, rolls back on any exception, and always
        # closes the session so the connection goes back to the pool.
        with session_factory.begin() as session:
            asset = assets_repo.get_asset(session, asset_id, for_update=True)
            if asset is None:
                raise AssetNotFound(asset_id)
            if asset.tokens_available < tokens_to_buy:
                raise InsufficientInventory(tokens_to_buy, asset.tokens_available)

            total_cost = quantize_money(asset.cost_of(tokens_to_buy))

            dashboard = dashboard_repo.get_dashboard(session, for_update=True)
            if dashboard is None:
                raise DashboardNotFound()
            if dashboard.wallet_balance < total_cost:
                raise InsufficientFunds(total_cost, dashboard.wallet_balance)

            tokens_remaining = asset.tokens_available - tokens_to_buy
            assets_repo.update_asset(session, asset.id, tokens_remaining)

            added_monthly_yield = asset.monthly_yield_on(total_cost)
            updated = dashboard_repo.update_dashboard(
                session,
                dashboard.id,
                wallet_balance=quantize_money(dashboard.wallet_balance - total_cost),
                total_investment=quantize_money(dashboard.total_investment + total_cost),
                monthly_yield=quantize_money(dashboard.monthly_yield + added_monthly_yield),
            )
    except BusinessRuleViolation as e:
        logger.warning(
            "Investment rejected: asset_id=%s tokens=%s reason=%s", asset_id, tokens_to_buy, e.message
        )
        raise
    except SQLAlchemyError:
        logger.exception("Investment failed: asset_id=%s tokens=%s", asset_id, tokens_to_buy)
        raise

    logger.info(
        "Investment committed: asset_id=%s tokens=%s spent=%s remaining_balance=%s",
        asset_id,
        tokens_to_buy,
        total_cost,
        updated.wallet_balance,
    )
    return InvestmentResult(
        asset_id=asset.id,
        tokens_bought=tokens_to_buy,
        tokens_remaining=tokens_remaining,
        spent=total_cost,
        remaining_balance=updated.wallet_balance,
        new_total_investment=updated.total_investment,
        new_monthly_yield=updated.monthly_yield,
        added_monthly_yield=added_monthly_yield,
    )
