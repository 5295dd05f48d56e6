# nms_trade/demands/service.py
import logging
from typing import List

from .models import Demand, DemandCreate, DemandKey, DemandUpdate
from .storage_interfaces import AbstractDemandStore
from ..errors import MissingFieldsError, NoFieldsProvidedError, NotFoundError
from ..utils import mask_token

logger = logging.getLogger(__name__)


class DemandService:
    """
    Service layer for demand rows.

    Validates request data before any storage call and applies the same
    not-found convention as the catalog services.
    """

    def __init__(self, demand_store: AbstractDemandStore):
        self.demand_store = demand_store

    async def list_demands(self, tenant: str) -> List[Demand]:
        logger.info(f"Service: Listing demands for tenant {mask_token(tenant)}")
        return await self.demand_store.list(tenant)

    async def upsert_demand(self, tenant: str, demand_create: DemandCreate) -> Demand:
        """
        Create or replace a demand row.

        Raises:
            MissingFieldsError: If stationId, itemId or demandLevel is absent
            ReferentialViolationError: If the station or item is unknown to the tenant
        """
        if (
            demand_create.station_id is None
            or demand_create.item_id is None
            or demand_create.demand_level is None
        ):
            raise MissingFieldsError()

        logger.info(
            f"Service: Upserting demand S:{demand_create.station_id}/I:{demand_create.item_id} "
            f"for tenant {mask_token(tenant)}"
        )
        return await self.demand_store.upsert(
            tenant,
            demand_create.station_id,
            demand_create.item_id,
            demand_create.demand_level,
        )

    async def update_demand(self, tenant: str, key: DemandKey, demand_update: DemandUpdate) -> Demand:
        if demand_update.demand_level is None:
            raise NoFieldsProvidedError()

        logger.info(
            f"Service: Updating demand S:{key.station_id}/I:{key.item_id} for tenant {mask_token(tenant)}"
        )
        updated = await self.demand_store.update(tenant, key, demand_update.demand_level)
        if updated is None:
            logger.warning(
                f"Service: Demand S:{key.station_id}/I:{key.item_id} not found for tenant {mask_token(tenant)}"
            )
            raise NotFoundError("Demand not found")
        return updated

    async def delete_demand(self, tenant: str, key: DemandKey) -> bool:
        deleted = await self.demand_store.delete(tenant, key)
        logger.info(
            f"Service: Delete demand S:{key.station_id}/I:{key.item_id} for tenant {mask_token(tenant)} "
            f"({'removed' if deleted else 'no-op'})"
        )
        return True
