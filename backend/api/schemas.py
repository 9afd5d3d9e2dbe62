"""
Request/response models for the HTTP API.

Money is serialized as JSON numbers rounded to cents. Dashboard and asset
records keep their snake_case column names; the invest payload is camelCase.
"""
from pydantic import BaseModel, Field

from domain.models import Asset, Dashboard, InvestmentResult

INVALID_INVEST_REQUEST = "Valid assetId and tokensToBuy are required"


class DashboardResponse(BaseModel):
    id: int
    wallet_balance: float
    total_investment: float
    monthly_yield: float


class AssetResponse(BaseModel):
    id: int
    name: str
    location: str
    apy: float
    price_per_token: float
    tokens_available: int


class InvestRequest(BaseModel):
    assetId: int = Field(gt=0, strict=True)
    tokensToBuy: int = Field(gt=0, strict=True)


class InvestData(BaseModel):
    spent: float
    remainingBalance: float
    newTotalInvestment: float
    newMonthlyYield: float


class InvestResponse(BaseModel):
    success: bool = True
    message: str = "Investment processed successfully"
    data: InvestData


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


def dashboard_to_response(dashboard: Dashboard) -> DashboardResponse:
    """Convert domain Dashboard to API response."""
    return DashboardResponse(
        id=dashboard.id,
        wallet_balance=float(dashboard.wallet_balance),
        total_investment=float(dashboard.total_investment),
        monthly_yield=float(dashboard.monthly_yield),
    )


def asset_to_response(asset: Asset) -> AssetResponse:
    """Convert domain Asset to API response."""
    return AssetResponse(
        id=asset.id,
        name=asset.name,
        location=asset.location,
        apy=float(asset.apy),
        price_per_token=float(asset.price_per_token),
        tokens_available=asset.tokens_available,
    )


def investment_to_response(result: InvestmentResult) -> InvestResponse:
    return InvestResponse(
        data=InvestData(
            spent=float(result.spent),
            remainingBalance=float(result.remaining_balance),
            newTotalInvestment=float(result.new_total_investment),
            newMonthlyYield=float(result.new_monthly_yield),
        )
    )
