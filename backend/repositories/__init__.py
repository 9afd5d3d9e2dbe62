from .assets import AssetsRepository
from .dashboard import DashboardRepository
from . import models

__all__ = ["AssetsRepository", "DashboardRepository", "models"]
