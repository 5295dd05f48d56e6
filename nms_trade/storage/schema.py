# nms_trade/storage/schema.py
import logging
from datetime import datetime, timezone
from typing import Optional

from .sqlite_base import SQLiteDatabase

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0.0"


async def init_schema(db: SQLiteDatabase) -> None:
    """
    Initialize the trade schema: Items, Stations, Demands and their indexes.

    Uses IF NOT EXISTS throughout so repeated calls (startup, CLI, every
    bulk import) neither fail nor duplicate structure. Demands reference
    Stations and Items through the tenant-scoped composite keys and are
    removed with them (ON DELETE CASCADE).
    """
    await db.execute('''
    CREATE TABLE IF NOT EXISTS Items (
        Id INTEGER NOT NULL,
        Name TEXT NOT NULL,
        Value REAL NOT NULL DEFAULT 0,
        UserToken TEXT NOT NULL,
        PRIMARY KEY (Id, UserToken),
        UNIQUE (Name, UserToken)
    )
    ''')
    logger.info("Ensured 'Items' table exists.")

    await db.execute('''
    CREATE TABLE IF NOT EXISTS Stations (
        Id INTEGER NOT NULL,
        Name TEXT NOT NULL,
        UserToken TEXT NOT NULL,
        PRIMARY KEY (Id, UserToken),
        UNIQUE (Name, UserToken)
    )
    ''')
    logger.info("Ensured 'Stations' table exists.")

    await db.execute('''
    CREATE TABLE IF NOT EXISTS Demands (
        StationId INTEGER NOT NULL,
        ItemId INTEGER NOT NULL,
        DemandLevel REAL NOT NULL,
        UserToken TEXT NOT NULL,
        PRIMARY KEY (StationId, ItemId, UserToken),
        FOREIGN KEY (StationId, UserToken)
            REFERENCES Stations (Id, UserToken) ON DELETE CASCADE,
        FOREIGN KEY (ItemId, UserToken)
            REFERENCES Items (Id, UserToken) ON DELETE CASCADE
    )
    ''')
    logger.info("Ensured 'Demands' table exists.")

    # The primary key already covers (StationId, ...); cascades from Items need their own
    await db.execute(
        "CREATE INDEX IF NOT EXISTS idx_demands_item ON Demands (ItemId, UserToken)"
    )

    await db.execute('''
    CREATE TABLE IF NOT EXISTS schema_version (
        version TEXT PRIMARY KEY,
        applied_at TEXT NOT NULL
    )
    ''')
    if await get_schema_version(db) != SCHEMA_VERSION:
        await db.execute(
            "INSERT OR IGNORE INTO schema_version (version, applied_at) VALUES (?, ?)",
            (SCHEMA_VERSION, datetime.now(timezone.utc).isoformat()),
        )
        logger.info(f"Recorded schema version {SCHEMA_VERSION}.")

    logger.info("SQLite trade schema initialized/verified.")


async def get_schema_version(db: SQLiteDatabase) -> Optional[str]:
    """Return the most recently applied schema version, or None before initialization."""
    row = await db.fetchone(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'schema_version'"
    )
    if row is None:
        return None
    row = await db.fetchone(
        "SELECT version FROM schema_version ORDER BY applied_at DESC LIMIT 1"
    )
    return row["version"] if row else None
