"""
Core domain models for the investment ledger.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

# The dashboard is a singleton stored under a well-known key.
DASHBOARD_ID = 1

# Largest id an INTEGER primary key can hold on every supported backend
# (PostgreSQL INTEGER is 32-bit). Larger ids cannot be bound by the drivers.
MAX_ROW_ID = 2**31 - 1

CENT = Decimal("0.01")
MONTHS_PER_YEAR = 12


def as_decimal(value) -> Decimal:
    """Coerce a driver value to Decimal without picking up float representation noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary amount to cents, the precision of the money columns."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class Dashboard:
    """
    The user's aggregate financial position.

    Only the invest transaction mutates it; clients never set it directly.
    """
    id: int
    wallet_balance: Decimal
    total_investment: Decimal
    monthly_yield: Decimal


@dataclass
class Asset:
    """A tokenized real-estate offering with a fixed per-token price."""
    id: int
    name: str
    location: str
    apy: Decimal  # annual percentage yield, e.g. 8.5 for 8.5%
    price_per_token: Decimal
    tokens_available: int

    def cost_of(self, tokens: int) -> Decimal:
        return self.price_per_token * tokens

    def monthly_yield_on(self, amount: Decimal) -> Decimal:
        """Straight-line monthly income from ``amount`` invested at this APY (no compounding)."""
        return (amount * (self.apy / Decimal(100))) / MONTHS_PER_YEAR


@dataclass
class InvestmentResult:
    """Outcome of a committed invest transaction."""
    asset_id: int
    tokens_bought: int
    tokens_remaining: int
    spent: Decimal
    remaining_balance: Decimal
    new_total_investment: Decimal
    new_monthly_yield: Decimal
    added_monthly_yield: Decimal
