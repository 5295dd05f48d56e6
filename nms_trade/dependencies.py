# nms_trade/dependencies.py
import logging
from typing import Annotated, Optional

from fastapi import Depends, Header, Query, Request

from .catalog.service import ItemService, StationService
from .catalog.sqlite_catalog_store import SQLiteItemStore, SQLiteStationStore
from .demands.service import DemandService
from .demands.sqlite_demand_store import SQLiteDemandStore
from .errors import MissingTenantError
from .migration.service import MigrationService
from .storage.sqlite_base import SQLiteDatabase
from .utils import mask_token

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the credentials of an ``Authorization: Bearer <token>`` header, if any."""
    if not authorization:
        return None
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return credentials.strip() or None


def resolve_tenant(request: Request, authorization: Optional[str], *explicit_tokens: Optional[str]) -> str:
    """
    Resolve the tenant key of a request and attach it to ``request.state``.

    The bearer header wins; explicit ``userToken`` values (body field, then
    query parameter) are consulted in the order given. Blank values count
    as absent. The token is not verified, only used as a partition key.

    Raises:
        MissingTenantError: If no location carries a token
    """
    tenant = extract_bearer_token(authorization)
    auth_method_used = "Header (Bearer)"
    if not tenant:
        auth_method_used = "Explicit userToken"
        tenant = next((t.strip() for t in explicit_tokens if t and t.strip()), None)

    if not tenant:
        logger.warning(f"Tenant Resolver: No tenant token on {request.method} {request.url.path}.")
        raise MissingTenantError()

    request.state.tenant = tenant
    logger.debug(f"Tenant Resolver: Resolved tenant {mask_token(tenant)} via {auth_method_used}.")
    return tenant


async def require_tenant(
    request: Request,
    authorization: Annotated[Optional[str], Header()] = None,
    user_token: Annotated[
        Optional[str],
        Query(alias="userToken", description="Legacy tenant token, used when no bearer header is sent.")
    ] = None,
) -> str:
    """Dependency for the per-resource API: bearer header, or legacy ``userToken`` query parameter."""
    return resolve_tenant(request, authorization, user_token)


TenantKey = Annotated[str, Depends(require_tenant)]


def get_database(request: Request) -> SQLiteDatabase:
    """The database owned by the running application (created in its lifespan)."""
    return request.app.state.db


Database = Annotated[SQLiteDatabase, Depends(get_database)]


def get_item_service(db: Database) -> ItemService:
    return ItemService(SQLiteItemStore(db))


def get_station_service(db: Database) -> StationService:
    return StationService(SQLiteStationStore(db), SQLiteDemandStore(db))


def get_demand_service(db: Database) -> DemandService:
    return DemandService(SQLiteDemandStore(db))


def get_migration_service(
    db: Database,
    item_service: Annotated[ItemService, Depends(get_item_service)],
    station_service: Annotated[StationService, Depends(get_station_service)],
) -> MigrationService:
    return MigrationService(db, item_service, station_service)
