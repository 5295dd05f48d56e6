# nms_trade/catalog/endpoints.py
import logging
from typing import Annotated, Callable, Dict, List, Type

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel

from .models import Item, ItemCreate, ItemUpdate, Station, StationCreate, StationUpdate
from .service import CatalogService
from ..dependencies import TenantKey, get_item_service, get_station_service
from ..storage.sqlite_base import SQLITE_INTEGER_MAX, SQLITE_INTEGER_MIN

logger = logging.getLogger(__name__)


def build_catalog_router(
    singular: str,
    plural: str,
    response_model: Type[BaseModel],
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    service_dependency: Callable[..., CatalogService],
    tag: str,
) -> APIRouter:
    """
    Build the list/create/update/delete routes of one catalog entity.

    Items and stations expose the same route shapes:
    ``GET /{plural}``, ``POST /{singular}``, ``PUT /{singular}/{id}``
    and ``DELETE /{singular}/{id}``.
    """
    router = APIRouter(tags=[tag])
    Service = Annotated[CatalogService, Depends(service_dependency)]
    EntityId = Annotated[
        int,
        Path(
            ge=SQLITE_INTEGER_MIN,
            le=SQLITE_INTEGER_MAX,
            description=f"Tenant-scoped id of the {singular}",
        ),
    ]

    @router.get(f"/{plural}", response_model=List[response_model], name=f"list_{plural}")
    async def list_entities(tenant: TenantKey, service: Service):
        return await service.list(tenant)

    @router.post(f"/{singular}", response_model=response_model, name=f"upsert_{singular}")
    async def upsert_entity(data: create_model, tenant: TenantKey, service: Service):
        return await service.upsert(tenant, data)

    @router.put(f"/{singular}/{{entity_id}}", response_model=response_model, name=f"update_{singular}")
    async def update_entity(
        entity_id: EntityId,
        patch: update_model,
        tenant: TenantKey,
        service: Service,
    ):
        return await service.update(tenant, entity_id, patch)

    @router.delete(f"/{singular}/{{entity_id}}", response_model=Dict[str, bool], name=f"delete_{singular}")
    async def delete_entity(
        entity_id: EntityId,
        tenant: TenantKey,
        service: Service,
    ):
        await service.delete(tenant, entity_id)
        return {"success": True}

    return router


items_router = build_catalog_router(
    singular="item",
    plural="items",
    response_model=Item,
    create_model=ItemCreate,
    update_model=ItemUpdate,
    service_dependency=get_item_service,
    tag="Items",
)

stations_router = build_catalog_router(
    singular="station",
    plural="stations",
    response_model=Station,
    create_model=StationCreate,
    update_model=StationUpdate,
    service_dependency=get_station_service,
    tag="Stations",
)
