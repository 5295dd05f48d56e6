# nms_trade/migration/endpoints.py
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header, Query, Request

from .models import MigrationRequest, MigrationResult
from .service import MigrationService
from ..dependencies import get_migration_service, resolve_tenant

logger = logging.getLogger(__name__)

migration_router = APIRouter(tags=["Migration"])


@migration_router.post("/migrate", response_model=MigrationResult)
async def migrate_endpoint(
    request: Request,
    migration_request: MigrationRequest,
    service: Annotated[MigrationService, Depends(get_migration_service)],
    authorization: Annotated[Optional[str], Header()] = None,
    user_token: Annotated[Optional[str], Query(alias="userToken")] = None,
):
    """
    Import a whole tenant dataset (items, stations, nested demands).

    The tenant comes from the body's ``userToken``, a bearer header, or the
    ``userToken`` query parameter. Not atomic: on a storage error the rows
    written so far stay in place.
    """
    tenant = resolve_tenant(request, authorization, migration_request.user_token, user_token)
    return await service.migrate(tenant, migration_request)
