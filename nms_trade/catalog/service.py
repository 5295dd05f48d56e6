# nms_trade/catalog/service.py
import logging
from typing import Any, List

from pydantic import BaseModel

from .models import Station, StationCreate
from .storage_interfaces import AbstractCatalogStore, AbstractStationStore
from ..demands.storage_interfaces import AbstractDemandStore
from ..errors import NotFoundError
from ..utils import mask_token

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Service layer for id/name entities (items, stations).

    Logs every operation and applies the not-found convention: a patch on a
    missing row raises NotFoundError, a delete of a missing row succeeds.
    """

    entity_label = "entity"

    def __init__(self, store: AbstractCatalogStore):
        self.store = store

    async def list(self, tenant: str) -> List[Any]:
        logger.info(f"Service: Listing {self.entity_label}s for tenant {mask_token(tenant)}")
        return await self.store.list(tenant)

    async def upsert(self, tenant: str, data: BaseModel) -> Any:
        logger.info(f"Service: Upserting {self.entity_label} for tenant {mask_token(tenant)}")
        return await self.store.upsert(tenant, data)

    async def update(self, tenant: str, entity_id: int, patch: BaseModel) -> Any:
        logger.info(f"Service: Updating {self.entity_label} {entity_id} for tenant {mask_token(tenant)}")
        updated = await self.store.update(tenant, entity_id, patch)
        if updated is None:
            logger.warning(f"Service: {self.entity_label.capitalize()} {entity_id} not found for tenant {mask_token(tenant)}")
            raise NotFoundError(f"{self.entity_label.capitalize()} not found")
        return updated

    async def delete(self, tenant: str, entity_id: int) -> bool:
        """Delete the entity; returns True whether or not a row existed."""
        deleted = await self.store.delete(tenant, entity_id)
        logger.info(
            f"Service: Delete {self.entity_label} {entity_id} for tenant {mask_token(tenant)} "
            f"({'removed' if deleted else 'no-op'})"
        )
        return True


class ItemService(CatalogService):
    entity_label = "item"


class StationService(CatalogService):
    """
    Station operations, including the bulk station shape.

    A station sent with nested ``items`` gets one demand upsert per entry
    after the station itself is written. The entries are not written
    atomically with the station.
    """

    entity_label = "station"

    def __init__(self, store: AbstractStationStore, demand_store: AbstractDemandStore):
        super().__init__(store)
        self.demand_store = demand_store

    async def upsert(self, tenant: str, data: StationCreate) -> Station:
        station = await super().upsert(tenant, data)
        for entry in data.items or []:
            await self.demand_store.upsert(tenant, station.id, entry.item.id, entry.demand)
        if data.items:
            logger.info(
                f"Service: Wrote {len(data.items)} demand entries for station {station.id} "
                f"of tenant {mask_token(tenant)}"
            )
        return station
