# nms_trade/demands/endpoints.py
import logging
import re
from typing import Annotated, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from .models import Demand, DemandCreate, DemandKey, DemandUpdate
from .service import DemandService
from ..dependencies import TenantKey, get_demand_service
from ..errors import InvalidKeyError, MissingKeyError
from ..storage.sqlite_base import SQLITE_INTEGER_MAX, SQLITE_INTEGER_MIN

logger = logging.getLogger(__name__)

demands_router = APIRouter(tags=["Demands"])

Service = Annotated[DemandService, Depends(get_demand_service)]

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
NUMERIC_KEY_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def parse_identifier(raw: str) -> int:
    """
    Parse a numeric identifier from a query string value.

    Accepts ASCII integers and integral decimals ("3", " 3 ", "3.0", "1e2")
    that fit a SQLite INTEGER.

    Raises:
        InvalidKeyError: If the value is not a whole number in range
    """
    text = raw.strip()
    if not NUMERIC_KEY_PATTERN.fullmatch(text):
        raise InvalidKeyError()
    if INTEGER_PATTERN.fullmatch(text):
        number = int(text)
    else:
        value = float(text)
        if not value.is_integer():
            raise InvalidKeyError()
        number = int(value)
    if not SQLITE_INTEGER_MIN <= number <= SQLITE_INTEGER_MAX:
        raise InvalidKeyError()
    return number


async def get_demand_key(
    station_id: Annotated[Optional[str], Query(alias="stationId")] = None,
    item_id: Annotated[Optional[str], Query(alias="itemId")] = None,
) -> DemandKey:
    """
    Read the demand key from the query string, rejecting bad keys before storage.

    Raises:
        MissingKeyError: If stationId or itemId is absent
        InvalidKeyError: If either is not a numeric identifier
    """
    if station_id is None or item_id is None or not station_id.strip() or not item_id.strip():
        logger.warning("API: Demand key missing from query string.")
        raise MissingKeyError()
    return DemandKey(station_id=parse_identifier(station_id), item_id=parse_identifier(item_id))


Key = Annotated[DemandKey, Depends(get_demand_key)]


@demands_router.get("/demands", response_model=List[Demand])
async def list_demands(tenant: TenantKey, service: Service):
    return await service.list_demands(tenant)


@demands_router.post("/demand", response_model=Demand)
async def upsert_demand(demand_create: DemandCreate, tenant: TenantKey, service: Service):
    """Create or replace the demand of one item at one station."""
    return await service.upsert_demand(tenant, demand_create)


@demands_router.put("/demand", response_model=Demand)
async def update_demand(tenant: TenantKey, key: Key, demand_update: DemandUpdate, service: Service):
    """Set the demand level addressed by the ``stationId``/``itemId`` query parameters."""
    return await service.update_demand(tenant, key, demand_update)


@demands_router.delete("/demand", response_model=Dict[str, bool])
async def delete_demand(tenant: TenantKey, key: Key, service: Service):
    await service.delete_demand(tenant, key)
    return {"success": True}
