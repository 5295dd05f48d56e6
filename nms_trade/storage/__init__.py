# nms_trade/storage/__init__.py

"""Storage module initialization.

Provides the injectable SQLite database wrapper, the schema initializer,
and the schema-driven table descriptions shared by all trade stores.
"""

from .sqlite_base import SQLiteDatabase
from .schema import init_schema, get_schema_version, SCHEMA_VERSION
from .entity_table import EntityTable, ITEMS_TABLE, STATIONS_TABLE, DEMANDS_TABLE

__all__ = [
    "SQLiteDatabase",
    "init_schema",
    "get_schema_version",
    "SCHEMA_VERSION",
    "EntityTable",
    "ITEMS_TABLE",
    "STATIONS_TABLE",
    "DEMANDS_TABLE",
]
