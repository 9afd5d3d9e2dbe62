"""
Domain failures raised by the investment engine.

Store failures are not wrapped here; they surface as SQLAlchemy errors.
"""


class InvestmentError(Exception):
    """Base class for every rejected investment."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInvestmentRequest(InvestmentError):
    """Malformed input, rejected before the store is touched."""

    def __init__(self, message: str = "Valid assetId and tokensToBuy are required"):
        super().__init__(message)


class BusinessRuleViolation(InvestmentError):
    """A precondition checked inside the transaction failed; the transaction is rolled back."""


class AssetNotFound(BusinessRuleViolation):
    def __init__(self, asset_id: int):
        super().__init__("Asset not found")
        self.asset_id = asset_id


class InsufficientInventory(BusinessRuleViolation):
    def __init__(self, requested: int, available: int):
        super().__init__("Not enough tokens available in this asset")
        self.requested = requested
        self.available = available


class DashboardNotFound(BusinessRuleViolation):
    def __init__(self):
        super().__init__("Dashboard not initialized")


class InsufficientFunds(BusinessRuleViolation):
    def __init__(self, required, available):
        super().__init__("Insufficient wallet balance to complete transaction")
        self.required = required
        self.available = available
