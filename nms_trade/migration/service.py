# nms_trade/migration/service.py
import logging

from .models import MigrationRequest, MigrationResult
from ..catalog.service import ItemService, StationService
from ..storage.schema import init_schema
from ..storage.sqlite_base import SQLiteDatabase
from ..utils import mask_token

logger = logging.getLogger(__name__)


class MigrationService:
    """
    Bulk import of a tenant's items, stations and nested demand entries.

    Runs one upsert per row: every item first, then each station followed
    by its demand entries. Nothing is wrapped in a transaction, so a
    storage error aborts the remaining rows and leaves the rows already
    written in place. Re-running the full import converges because every
    write is an upsert.
    """

    def __init__(self, db: SQLiteDatabase, item_service: ItemService, station_service: StationService):
        self.db = db
        self.item_service = item_service
        self.station_service = station_service

    async def migrate(self, tenant: str, request: MigrationRequest) -> MigrationResult:
        logger.info(
            f"Service: Migrating {len(request.items)} items and {len(request.stations)} stations "
            f"for tenant {mask_token(tenant)}"
        )
        await init_schema(self.db)

        result = MigrationResult()
        for item in request.items:
            await self.item_service.upsert(tenant, item)
            result.items += 1

        for station in request.stations:
            await self.station_service.upsert(tenant, station)
            result.stations += 1
            result.demands += len(station.items or [])

        logger.info(
            f"Service: Migration complete for tenant {mask_token(tenant)}: "
            f"{result.items} items, {result.stations} stations, {result.demands} demands"
        )
        return result
