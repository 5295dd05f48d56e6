# nms_trade/storage/entity_table.py
import logging
import sqlite3
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .sqlite_base import SQLiteDatabase

logger = logging.getLogger(__name__)

TENANT_COLUMN = "UserToken"


@dataclass(frozen=True)
class EntityTable:
    """
    Column-level description of one tenant-scoped table.

    All SQL for listing, fetching, upserting, patching and deleting rows is
    generated from this description, so every entity shares one
    implementation of the tenant-isolation and upsert rules.

    Attributes:
        name: Table name
        columns: Model field name -> column name, in insert order
        key_fields: Fields forming the key together with the tenant
        auto_id_field: Key field the store assigns when the caller omits it
        natural_key_fields: Fields that identify a row when no id is given
    """

    name: str
    columns: Mapping[str, str]
    key_fields: Tuple[str, ...]
    auto_id_field: Optional[str] = None
    natural_key_fields: Tuple[str, ...] = ()

    @property
    def mutable_fields(self) -> Tuple[str, ...]:
        return tuple(f for f in self.columns if f not in self.key_fields)

    def _select_clause(self) -> str:
        projection = ", ".join(f"{column} AS {field}" for field, column in self.columns.items())
        return f"SELECT {projection} FROM {self.name}"

    def _where_clause(self, fields: Tuple[str, ...]) -> str:
        conditions = [f"{self.columns[f]} = ?" for f in fields]
        conditions.append(f"{TENANT_COLUMN} = ?")
        return " AND ".join(conditions)

    async def list_rows(self, db: SQLiteDatabase, tenant: str) -> List[sqlite3.Row]:
        query = f"{self._select_clause()} WHERE {TENANT_COLUMN} = ?"
        return await db.fetchall(query, (tenant,))

    async def fetch_row(
        self, db: SQLiteDatabase, tenant: str, lookup: Mapping[str, Any]
    ) -> Optional[sqlite3.Row]:
        fields = tuple(lookup)
        query = f"{self._select_clause()} WHERE {self._where_clause(fields)}"
        return await db.fetchone(query, (*lookup.values(), tenant))

    async def upsert_row(
        self, db: SQLiteDatabase, tenant: str, values: Mapping[str, Any]
    ) -> Optional[sqlite3.Row]:
        """
        Insert a row or overwrite the existing row with the same key.

        Without a value for ``auto_id_field`` the next id of the tenant is
        assigned and the natural key decides what counts as "the same row".
        Uses ON CONFLICT ... DO UPDATE rather than INSERT OR REPLACE so the
        existing row is kept and dependent rows are not cascaded away.

        Returns:
            The persisted row, re-read from storage.
        """
        auto_assign = self.auto_id_field is not None and values.get(self.auto_id_field) is None
        conflict_fields = self.natural_key_fields if auto_assign else self.key_fields

        insert_columns: List[str] = []
        placeholders: List[str] = []
        params: List[Any] = []
        for field, column in self.columns.items():
            insert_columns.append(column)
            if auto_assign and field == self.auto_id_field:
                placeholders.append(
                    f"(SELECT COALESCE(MAX({column}), 0) + 1 FROM {self.name} WHERE {TENANT_COLUMN} = ?)"
                )
                params.append(tenant)
            else:
                placeholders.append("?")
                params.append(values.get(field))
        insert_columns.append(TENANT_COLUMN)
        placeholders.append("?")
        params.append(tenant)

        conflict_target = ", ".join([self.columns[f] for f in conflict_fields] + [TENANT_COLUMN])
        overwrite = [
            f"{self.columns[f]} = excluded.{self.columns[f]}"
            for f in self.columns
            if f not in conflict_fields and f != self.auto_id_field
        ]
        on_conflict = f"DO UPDATE SET {', '.join(overwrite)}" if overwrite else "DO NOTHING"

        query = (
            f"INSERT INTO {self.name} ({', '.join(insert_columns)}) "
            f"VALUES ({', '.join(placeholders)}) "
            f"ON CONFLICT ({conflict_target}) {on_conflict}"
        )
        await db.execute(query, params)

        lookup = {f: values.get(f) for f in conflict_fields}
        return await self.fetch_row(db, tenant, lookup)

    async def update_row(
        self, db: SQLiteDatabase, tenant: str, key: Mapping[str, Any], patch: Dict[str, Any]
    ) -> int:
        """
        Rewrite only the patched columns of the keyed row.

        Returns:
            int: Number of rows changed (0 when no row matches within the tenant)
        """
        set_clauses = []
        params: List[Any] = []
        for field, value in patch.items():
            set_clauses.append(f"{self.columns[field]} = ?")
            params.append(value)

        key_fields = tuple(key)
        query = f"UPDATE {self.name} SET {', '.join(set_clauses)} WHERE {self._where_clause(key_fields)}"
        params.extend(key.values())
        params.append(tenant)

        cursor = await db.execute(query, params)
        return cursor.rowcount

    async def delete_row(self, db: SQLiteDatabase, tenant: str, key: Mapping[str, Any]) -> int:
        key_fields = tuple(key)
        query = f"DELETE FROM {self.name} WHERE {self._where_clause(key_fields)}"
        cursor = await db.execute(query, (*key.values(), tenant))
        return cursor.rowcount


ITEMS_TABLE = EntityTable(
    name="Items",
    columns={"id": "Id", "name": "Name", "value": "Value"},
    key_fields=("id",),
    auto_id_field="id",
    natural_key_fields=("name",),
)

STATIONS_TABLE = EntityTable(
    name="Stations",
    columns={"id": "Id", "name": "Name"},
    key_fields=("id",),
    auto_id_field="id",
    natural_key_fields=("name",),
)

DEMANDS_TABLE = EntityTable(
    name="Demands",
    columns={"station_id": "StationId", "item_id": "ItemId", "demand_level": "DemandLevel"},
    key_fields=("station_id", "item_id"),
)
