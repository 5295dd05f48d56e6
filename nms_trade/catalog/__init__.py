# nms_trade/catalog/__init__.py
"""
Items and stations: the tenant-scoped id/name entities of the trade API.

Both share one SQLite store implementation, one service base class and
one router factory; they differ only in their columns and models.
"""

from .models import (
    Item, ItemCreate, ItemUpdate,
    Station, StationCreate, StationUpdate, StationItemDemand, ItemReference,
)
from .storage_interfaces import AbstractCatalogStore, AbstractItemStore, AbstractStationStore
from .sqlite_catalog_store import SQLiteCatalogStore, SQLiteItemStore, SQLiteStationStore
from .service import CatalogService, ItemService, StationService

__all__ = [
    "Item", "ItemCreate", "ItemUpdate",
    "Station", "StationCreate", "StationUpdate", "StationItemDemand", "ItemReference",
    "AbstractCatalogStore", "AbstractItemStore", "AbstractStationStore",
    "SQLiteCatalogStore", "SQLiteItemStore", "SQLiteStationStore",
    "CatalogService", "ItemService", "StationService",
]
