# nms_trade/demands/sqlite_demand_store.py
import logging
import sqlite3
from typing import List, Optional

from .models import Demand, DemandKey
from .storage_interfaces import AbstractDemandStore
from ..errors import StorageFailureError
from ..storage.entity_table import DEMANDS_TABLE
from ..storage.sqlite_base import SQLiteDatabase

logger = logging.getLogger(__name__)


class SQLiteDemandStore(AbstractDemandStore):
    """SQLite implementation of the demand storage interface."""

    table = DEMANDS_TABLE

    def __init__(self, db: SQLiteDatabase):
        self.db = db

    def _row_to_demand(self, row: Optional[sqlite3.Row]) -> Optional[Demand]:
        if not row:
            return None
        return Demand.model_validate(dict(row))

    async def list(self, tenant: str) -> List[Demand]:
        rows = await self.table.list_rows(self.db, tenant)
        return [self._row_to_demand(row) for row in rows]

    async def get(self, tenant: str, key: DemandKey) -> Optional[Demand]:
        row = await self.table.fetch_row(self.db, tenant, key.model_dump())
        return self._row_to_demand(row)

    async def upsert(self, tenant: str, station_id: int, item_id: int, demand_level: float) -> Demand:
        values = {"station_id": station_id, "item_id": item_id, "demand_level": demand_level}
        row = await self.table.upsert_row(self.db, tenant, values)
        if row is None:
            raise StorageFailureError("Failed to retrieve persisted Demands row")
        return self._row_to_demand(row)

    async def update(self, tenant: str, key: DemandKey, demand_level: float) -> Optional[Demand]:
        changed = await self.table.update_row(
            self.db, tenant, key.model_dump(), {"demand_level": demand_level}
        )
        if changed == 0:
            return None
        return await self.get(tenant, key)

    async def delete(self, tenant: str, key: DemandKey) -> bool:
        return await self.table.delete_row(self.db, tenant, key.model_dump()) > 0
