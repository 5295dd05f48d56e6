# tests/conftest.py
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from nms_trade.catalog.service import ItemService, StationService
from nms_trade.catalog.sqlite_catalog_store import SQLiteItemStore, SQLiteStationStore
from nms_trade.demands.sqlite_demand_store import SQLiteDemandStore
from nms_trade.main import create_app
from nms_trade.settings import Settings
from nms_trade.storage.schema import init_schema
from nms_trade.storage.sqlite_base import SQLiteDatabase


@pytest_asyncio.fixture
async def db(tmp_path):
    database = SQLiteDatabase(str(tmp_path / "trade_test.sqlite3"))
    await init_schema(database)
    yield database
    await database.close()


@pytest.fixture
def item_store(db):
    return SQLiteItemStore(db)


@pytest.fixture
def station_store(db):
    return SQLiteStationStore(db)


@pytest.fixture
def demand_store(db):
    return SQLiteDemandStore(db)


@pytest.fixture
def item_service(item_store):
    return ItemService(item_store)


@pytest.fixture
def station_service(station_store, demand_store):
    return StationService(station_store, demand_store)


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        sqlite_db_path=str(tmp_path / "trade_api_test.sqlite3"),
        api_prefix="/api",
        cors_origins=["http://localhost:5173"],
    )


@pytest.fixture
def client(test_settings):
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client
