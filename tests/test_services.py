# tests/test_services.py
import pytest

from nms_trade.catalog.models import ItemCreate, ItemUpdate, StationCreate
from nms_trade.demands.models import DemandCreate, DemandKey, DemandUpdate
from nms_trade.demands.service import DemandService
from nms_trade.errors import (
    MissingFieldsError,
    NoFieldsProvidedError,
    NotFoundError,
    ReferentialViolationError,
)
from nms_trade.migration.models import MigrationRequest
from nms_trade.migration.service import MigrationService


async def test_item_service_update_of_missing_item_is_not_found(item_service):
    with pytest.raises(NotFoundError) as exc_info:
        await item_service.update("u1", 5, ItemUpdate(value=3))
    assert exc_info.value.status_code == 404


async def test_item_service_delete_of_missing_item_succeeds(item_service):
    assert await item_service.delete("u1", 5) is True


async def test_station_service_writes_nested_demands(item_service, station_service, demand_store):
    await item_service.upsert("u1", ItemCreate(id=1, name="Carbon", value=50))
    await item_service.upsert("u1", ItemCreate(id=2, name="Oxygen", value=40))

    station = await station_service.upsert(
        "u1",
        StationCreate.model_validate({
            "id": 4,
            "name": "Euclid Outpost",
            "items": [{"item": {"id": 1}, "demand": 3}, {"item": {"id": 2}, "demand": 1}],
        }),
    )

    assert station.id == 4
    demands = await demand_store.list("u1")
    assert sorted((d.station_id, d.item_id, d.demand_level) for d in demands) == [(4, 1, 3), (4, 2, 1)]


async def test_demand_service_rejects_missing_fields_before_storage(demand_store):
    service = DemandService(demand_store)
    with pytest.raises(MissingFieldsError):
        await service.upsert_demand("u1", DemandCreate(stationId=1, itemId=2))


async def test_demand_service_update_requires_demand_level(demand_store):
    service = DemandService(demand_store)
    with pytest.raises(NoFieldsProvidedError):
        await service.update_demand("u1", DemandKey(station_id=1, item_id=1), DemandUpdate())


async def test_demand_service_update_of_missing_row_is_not_found(demand_store):
    service = DemandService(demand_store)
    with pytest.raises(NotFoundError):
        await service.update_demand("u1", DemandKey(station_id=1, item_id=1), DemandUpdate(demandLevel=2))


async def test_migration_imports_items_stations_and_demands(db, item_service, station_service, demand_store):
    service = MigrationService(db, item_service, station_service)
    request = MigrationRequest.model_validate({
        "userToken": "u1",
        "items": [{"id": 1, "name": "Carbon", "value": 50}, {"id": 2, "name": "Oxygen", "value": 40}],
        "stations": [
            {"id": 1, "name": "Euclid Outpost", "items": [{"item": {"id": 1}, "demand": 2}]},
            {"id": 2, "name": "Trade Hub", "items": [{"item": {"id": 2}, "demand": 5}]},
        ],
    })

    result = await service.migrate("u1", request)
    again = await service.migrate("u1", request)

    assert (result.items, result.stations, result.demands) == (2, 2, 2)
    assert again == result
    assert len(await item_service.list("u1")) == 2
    assert len(await station_service.list("u1")) == 2
    assert len(await demand_store.list("u1")) == 2


async def test_migration_failure_leaves_partial_import(db, item_service, station_service, demand_store):
    service = MigrationService(db, item_service, station_service)
    request = MigrationRequest.model_validate({
        "items": [{"id": 1, "name": "Carbon", "value": 50}],
        "stations": [
            {"id": 1, "name": "Euclid Outpost", "items": [{"item": {"id": 99}, "demand": 2}]},
            {"id": 2, "name": "Trade Hub"},
        ],
    })

    with pytest.raises(ReferentialViolationError):
        await service.migrate("u1", request)

    assert [i.name for i in await item_service.list("u1")] == ["Carbon"]
    assert [s.name for s in await station_service.list("u1")] == ["Euclid Outpost"]
    assert await demand_store.list("u1") == []
