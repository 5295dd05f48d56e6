# nms_trade/demands/__init__.py
"""Demand levels: the tenant-scoped Station x Item relation."""

from .models import Demand, DemandCreate, DemandUpdate, DemandKey
from .storage_interfaces import AbstractDemandStore
from .sqlite_demand_store import SQLiteDemandStore
from .service import DemandService

__all__ = [
    "Demand",
    "DemandCreate",
    "DemandUpdate",
    "DemandKey",
    "AbstractDemandStore",
    "SQLiteDemandStore",
    "DemandService",
]
