"""
Tests for the investment transaction engine.
"""
import threading
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from domain.errors import (
    AssetNotFound,
    DashboardNotFound,
    InsufficientFunds,
    InsufficientInventory,
    InvalidInvestmentRequest,
)
from repositories import AssetsRepository, DashboardRepository
from repositories.models import DashboardORM
from services import investment
from services.investment import invest

assets_repo = AssetsRepository()
dashboard_repo = DashboardRepository()

SKYLINE_ID = 1  # Skyline Apartments: 50.00/token, 8.5% APY, 1000 tokens


def _snapshot(session_factory):
    with session_factory() as session:
        return dashboard_repo.get_dashboard(session), assets_repo.list_assets(session)


def test_invest_updates_dashboard_and_inventory(session_factory):
    result = invest(session_factory, SKYLINE_ID, 10)

    assert result.spent == Decimal("500")
    assert result.remaining_balance == Decimal("14500")
    assert result.new_total_investment == Decimal("5700")
    assert result.added_monthly_yield.quantize(Decimal("0.0001")) == Decimal("3.5417")
    assert result.new_monthly_yield == Decimal("439.04")
    assert result.tokens_remaining == 990

    dashboard, assets = _snapshot(session_factory)
    assert dashboard.wallet_balance == Decimal("14500")
    assert dashboard.total_investment == Decimal("5700")
    assert dashboard.monthly_yield == Decimal("439.04")
    assert assets[0].tokens_available == 990
    # other assets untouched
    assert [a.tokens_available for a in assets[1:]] == [500, 800, 1200]


def test_cost_arithmetic_holds_across_purchases(session_factory):
    before, _ = _snapshot(session_factory)
    first = invest(session_factory, 2, 3)  # Ocean View Villa, 150.00/token
    second = invest(session_factory, 4, 7)  # Downtown Office, 120.00/token

    assert first.spent == Decimal("450")
    assert second.spent == Decimal("840")
    assert second.remaining_balance == before.wallet_balance - Decimal("1290")
    assert second.new_total_investment == before.total_investment + Decimal("1290")


@pytest.mark.parametrize(
    "asset_id, tokens",
    [(SKYLINE_ID, 0), (SKYLINE_ID, -3), (0, 5), (None, 5), (SKYLINE_ID, None), (SKYLINE_ID, True), ("1", 5)],
)
def test_invalid_input_rejected_before_store_access(monkeypatch, asset_id, tokens):
    def _fail(*args, **kwargs):
        raise AssertionError("store must not be touched")

    monkeypatch.setattr(investment.assets_repo, "get_asset", _fail)

    with pytest.raises(InvalidInvestmentRequest) as exc:
        invest(object(), asset_id, tokens)
    assert exc.value.message == "Valid assetId and tokensToBuy are required"


def test_missing_asset_rejected_without_changes(session_factory):
    before = _snapshot(session_factory)

    with pytest.raises(AssetNotFound) as exc:
        invest(session_factory, 999, 1)

    assert exc.value.message == "Asset not found"
    assert _snapshot(session_factory) == before


@pytest.mark.parametrize("asset_id", [2**31, 2**63, 10**20])
def test_asset_id_beyond_column_range_is_not_found(monkeypatch, asset_id):
    def _fail(*args, **kwargs):
        raise AssertionError("store must not be touched")

    monkeypatch.setattr(investment.assets_repo, "get_asset", _fail)

    with pytest.raises(AssetNotFound):
        invest(object(), asset_id, 1)


def test_insufficient_inventory_rejected_without_changes(session_factory):
    before = _snapshot(session_factory)

    with pytest.raises(InsufficientInventory) as exc:
        invest(session_factory, 2, 501)

    assert exc.value.message == "Not enough tokens available in this asset"
    assert exc.value.available == 500
    assert _snapshot(session_factory) == before


def test_insufficient_funds_rejected_without_changes(session_factory):
    before = _snapshot(session_factory)

    # 120.00 * 126 = 15120.00 > 15000.00
    with pytest.raises(InsufficientFunds) as exc:
        invest(session_factory, 4, 126)

    assert exc.value.message == "Insufficient wallet balance to complete transaction"
    assert _snapshot(session_factory) == before


def test_exact_balance_can_be_spent(session_factory):
    # 150.00 * 100 = 15000.00, the entire wallet
    result = invest(session_factory, 2, 100)

    assert result.remaining_balance == Decimal("0")
    with pytest.raises(InsufficientFunds):
        invest(session_factory, SKYLINE_ID, 1)


def test_missing_dashboard_rolls_back_asset(session_factory):
    with session_factory.begin() as session:
        session.query(DashboardORM).delete()

    with pytest.raises(DashboardNotFound):
        invest(session_factory, SKYLINE_ID, 5)

    _, assets = _snapshot(session_factory)
    assert assets[0].tokens_available == 1000


def test_store_failure_mid_transaction_rolls_back(monkeypatch, session_factory):
    def _broken_update(*args, **kwargs):
        raise OperationalError("UPDATE dashboard", {}, Exception("disk I/O error"))

    monkeypatch.setattr(investment.dashboard_repo, "update_dashboard", _broken_update)

    with pytest.raises(OperationalError):
        invest(session_factory, SKYLINE_ID, 5)

    monkeypatch.undo()
    dashboard, assets = _snapshot(session_factory)
    assert assets[0].tokens_available == 1000
    assert dashboard.wallet_balance == Decimal("15000")


def test_balances_never_go_negative(session_factory):
    outcomes = []
    for asset_id, tokens in [(2, 60), (2, 60), (3, 100), (1, 200), (4, 50)]:
        try:
            invest(session_factory, asset_id, tokens)
            outcomes.append(True)
        except (InsufficientFunds, InsufficientInventory):
            outcomes.append(False)

    dashboard, assets = _snapshot(session_factory)
    assert False in outcomes
    assert dashboard.wallet_balance >= 0
    assert all(a.tokens_available >= 0 for a in assets)


def test_concurrent_invests_cannot_oversell(session_factory):
    with session_factory.begin() as session:
        assets_repo.update_asset(session, SKYLINE_ID, 10)

    barrier = threading.Barrier(2)
    results = []
    errors = []

    def _buy():
        barrier.wait()
        try:
            results.append(invest(session_factory, SKYLINE_ID, 6))
        except InsufficientInventory as e:
            errors.append(e)

    threads = [threading.Thread(target=_buy) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 1
    assert len(errors) == 1
    _, assets = _snapshot(session_factory)
    assert assets[0].tokens_available == 4
