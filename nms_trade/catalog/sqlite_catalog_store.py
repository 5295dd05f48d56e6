# nms_trade/catalog/sqlite_catalog_store.py
import logging
import sqlite3
from typing import Any, ClassVar, Dict, List, Optional, Type

from pydantic import BaseModel

from .models import Item, Station
from .storage_interfaces import AbstractItemStore, AbstractStationStore
from ..errors import NoFieldsProvidedError, StorageFailureError
from ..storage.entity_table import EntityTable, ITEMS_TABLE, STATIONS_TABLE
from ..storage.sqlite_base import SQLiteDatabase

logger = logging.getLogger(__name__)


class SQLiteCatalogStore:
    """
    SQLite implementation shared by the item and station stores.

    Subclasses only name their table description and model; the SQL comes
    from the table description.
    """

    table: ClassVar[EntityTable]
    model: ClassVar[Type[BaseModel]]

    def __init__(self, db: SQLiteDatabase):
        self.db = db

    def _row_to_model(self, row: Optional[sqlite3.Row]) -> Optional[Any]:
        if not row:
            return None
        return self.model.model_validate(dict(row))

    async def list(self, tenant: str) -> List[Any]:
        rows = await self.table.list_rows(self.db, tenant)
        return [self._row_to_model(row) for row in rows]

    async def get(self, tenant: str, entity_id: int) -> Optional[Any]:
        row = await self.table.fetch_row(self.db, tenant, {"id": entity_id})
        return self._row_to_model(row)

    async def upsert(self, tenant: str, data: BaseModel) -> Any:
        values: Dict[str, Any] = data.model_dump(include=set(self.table.columns))
        row = await self.table.upsert_row(self.db, tenant, values)
        if row is None:
            raise StorageFailureError(f"Failed to retrieve persisted {self.table.name} row")
        return self._row_to_model(row)

    async def update(self, tenant: str, entity_id: int, patch: BaseModel) -> Optional[Any]:
        # Explicit nulls are dropped too, so no column is ever nulled out
        fields: Dict[str, Any] = patch.model_dump(exclude_none=True)
        if not fields:
            raise NoFieldsProvidedError()

        changed = await self.table.update_row(self.db, tenant, {"id": entity_id}, fields)
        if changed == 0:
            logger.debug(f"No {self.table.name} row with id {entity_id} to update.")
            return None
        return await self.get(tenant, entity_id)

    async def delete(self, tenant: str, entity_id: int) -> bool:
        return await self.table.delete_row(self.db, tenant, {"id": entity_id}) > 0


class SQLiteItemStore(SQLiteCatalogStore, AbstractItemStore):
    """SQLite-backed item store."""
    table = ITEMS_TABLE
    model = Item


class SQLiteStationStore(SQLiteCatalogStore, AbstractStationStore):
    """SQLite-backed station store."""
    table = STATIONS_TABLE
    model = Station
