# tests/test_api.py
import pytest

API = "/api"


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_item(client, token: str, name: str, value: float) -> dict:
    response = client.post(f"{API}/item", json={"name": name, "value": value}, headers=auth(token))
    assert response.status_code == 200, response.text
    return response.json()


def create_station(client, token: str, name: str) -> dict:
    response = client.post(f"{API}/station", json={"name": name}, headers=auth(token))
    assert response.status_code == 200, response.text
    return response.json()


def test_health(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.parametrize("method,path", [
    ("GET", "/items"),
    ("POST", "/item"),
    ("PUT", "/item/1"),
    ("DELETE", "/item/1"),
    ("GET", "/stations"),
    ("GET", "/demands"),
    ("DELETE", "/demand?stationId=1&itemId=1"),
])
def test_missing_tenant_is_rejected(client, method, path):
    response = client.request(method, f"{API}{path}", json={"name": "Carbon", "value": 1})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing userToken"}


def test_non_bearer_authorization_counts_as_missing(client):
    response = client.get(f"{API}/items", headers={"Authorization": "Basic dTE6cHc="})
    assert response.status_code == 400


def test_created_item_is_visible_only_to_its_tenant(client):
    created = create_item(client, "u1", "Carbon", 50)
    assert created == {"id": 1, "name": "Carbon", "value": 50}

    u1_items = client.get(f"{API}/items", headers=auth("u1")).json()
    assert created in u1_items

    u2_items = client.get(f"{API}/items", headers=auth("u2")).json()
    assert u2_items == []


def test_legacy_user_token_query_parameter(client):
    create_item(client, "legacy", "Carbon", 50)
    response = client.get(f"{API}/items", params={"userToken": "legacy"})
    assert response.status_code == 200
    assert [i["name"] for i in response.json()] == ["Carbon"]


def test_posting_same_item_twice_keeps_one_row(client):
    first = create_item(client, "u1", "Carbon", 50)
    second = create_item(client, "u1", "Carbon", 50)
    assert first == second
    assert len(client.get(f"{API}/items", headers=auth("u1")).json()) == 1


def test_item_partial_update(client):
    item = create_item(client, "u1", "Carbon", 50)

    response = client.put(f"{API}/item/{item['id']}", json={"value": 5}, headers=auth("u1"))

    assert response.status_code == 200
    assert response.json() == {"id": item["id"], "name": "Carbon", "value": 5}


def test_item_update_without_fields_is_400(client):
    item = create_item(client, "u1", "Carbon", 50)
    response = client.put(f"{API}/item/{item['id']}", json={}, headers=auth("u1"))
    assert response.status_code == 400
    assert response.json() == {"error": "No fields to update"}


def test_item_update_of_unknown_id_is_404(client):
    response = client.put(f"{API}/item/77", json={"name": "Ghost"}, headers=auth("u1"))
    assert response.status_code == 404
    assert response.json() == {"error": "Item not found"}


def test_item_update_from_other_tenant_is_404(client):
    item = create_item(client, "u1", "Carbon", 50)
    response = client.put(f"{API}/item/{item['id']}", json={"value": 1}, headers=auth("u2"))
    assert response.status_code == 404
    assert client.get(f"{API}/items", headers=auth("u1")).json()[0]["value"] == 50


def test_item_body_validation_is_400(client):
    response = client.post(f"{API}/item", json={"name": "Carbon"}, headers=auth("u1"))
    assert response.status_code == 400
    assert "value" in response.json()["error"]


def test_non_numeric_item_id_in_path_is_400(client):
    response = client.delete(f"{API}/item/abc", headers=auth("u1"))
    assert response.status_code == 400
    assert "error" in response.json()


def test_delete_nonexistent_item_succeeds(client):
    response = client.delete(f"{API}/item/123", headers=auth("u1"))
    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_station_crud(client):
    station = create_station(client, "u1", "Euclid Outpost")
    assert station == {"id": 1, "name": "Euclid Outpost"}

    renamed = client.put(f"{API}/station/{station['id']}", json={"name": "Euclid Hub"}, headers=auth("u1"))
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Euclid Hub"

    missing_name = client.put(f"{API}/station/{station['id']}", json={}, headers=auth("u1"))
    assert missing_name.status_code == 400

    deleted = client.delete(f"{API}/station/{station['id']}", headers=auth("u1"))
    assert deleted.json() == {"success": True}
    assert client.get(f"{API}/stations", headers=auth("u1")).json() == []


def test_station_bulk_shape_writes_demands(client):
    create_item(client, "u1", "Carbon", 50)
    response = client.post(
        f"{API}/station",
        json={"id": 9, "name": "Euclid Outpost", "items": [{"item": {"id": 1}, "demand": 3}]},
        headers=auth("u1"),
    )
    assert response.status_code == 200
    assert response.json() == {"id": 9, "name": "Euclid Outpost"}

    demands = client.get(f"{API}/demands", headers=auth("u1")).json()
    assert demands == [{"stationId": 9, "itemId": 1, "demandLevel": 3}]


def test_demand_lifecycle(client):
    item = create_item(client, "u1", "Carbon", 50)
    station = create_station(client, "u1", "Euclid Outpost")
    payload = {"stationId": station["id"], "itemId": item["id"], "demandLevel": 2}

    created = client.post(f"{API}/demand", json=payload, headers=auth("u1"))
    assert created.status_code == 200
    assert created.json() == payload

    key = {"stationId": station["id"], "itemId": item["id"]}
    updated = client.put(f"{API}/demand", params=key, json={"demandLevel": 4}, headers=auth("u1"))
    assert updated.status_code == 200
    assert updated.json()["demandLevel"] == 4

    deleted = client.delete(f"{API}/demand", params=key, headers=auth("u1"))
    assert deleted.json() == {"success": True}
    assert client.get(f"{API}/demands", headers=auth("u1")).json() == []

    deleted_again = client.delete(f"{API}/demand", params=key, headers=auth("u1"))
    assert deleted_again.status_code == 200


def test_demand_with_missing_fields_is_400(client):
    response = client.post(f"{API}/demand", json={"stationId": 1, "itemId": 1}, headers=auth("u1"))
    assert response.status_code == 400
    assert response.json() == {"error": "Missing demand data"}


def test_demand_for_unknown_station_is_storage_error(client):
    item = create_item(client, "u1", "Carbon", 50)
    response = client.post(
        f"{API}/demand",
        json={"stationId": 99, "itemId": item["id"], "demandLevel": 1},
        headers=auth("u1"),
    )
    assert response.status_code == 500
    assert "FOREIGN KEY" in response.json()["error"]


@pytest.mark.parametrize("method", ["PUT", "DELETE"])
def test_demand_non_numeric_key_is_invalid_key(client, method):
    response = client.request(
        method,
        f"{API}/demand",
        params={"stationId": "abc", "itemId": "1"},
        json={"demandLevel": 1},
        headers=auth("u1"),
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid stationId or itemId"}


@pytest.mark.parametrize("method", ["PUT", "DELETE"])
def test_demand_missing_key_is_400(client, method):
    response = client.request(
        method, f"{API}/demand", params={"stationId": "1"}, json={"demandLevel": 1}, headers=auth("u1")
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Missing demand data"}


def test_demand_update_of_missing_row_is_404(client):
    response = client.put(
        f"{API}/demand", params={"stationId": 1, "itemId": 1}, json={"demandLevel": 1}, headers=auth("u1")
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Demand not found"}


def test_deleting_station_cascades_through_api(client):
    carbon = create_item(client, "u1", "Carbon", 50)
    outpost = create_station(client, "u1", "Euclid Outpost")
    hub = create_station(client, "u1", "Trade Hub")
    for station in (outpost, hub):
        client.post(
            f"{API}/demand",
            json={"stationId": station["id"], "itemId": carbon["id"], "demandLevel": 1},
            headers=auth("u1"),
        )

    client.delete(f"{API}/station/{outpost['id']}", headers=auth("u1"))

    demands = client.get(f"{API}/demands", headers=auth("u1")).json()
    assert [d["stationId"] for d in demands] == [hub["id"]]


def test_migrate_with_token_in_body(client):
    payload = {
        "userToken": "bulk-user",
        "items": [{"id": 1, "name": "Carbon", "value": 50}, {"id": 2, "name": "Oxygen", "value": 40}],
        "stations": [
            {"id": 1, "name": "Euclid Outpost", "items": [{"item": {"id": 1}, "demand": 2}, {"item": {"id": 2}, "demand": 1}]},
        ],
    }

    response = client.post(f"{API}/migrate", json=payload)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert len(client.get(f"{API}/items", headers=auth("bulk-user")).json()) == 2
    assert len(client.get(f"{API}/demands", headers=auth("bulk-user")).json()) == 2
    assert client.get(f"{API}/items", headers=auth("u1")).json() == []


def test_migrate_without_tenant_is_400(client):
    response = client.post(f"{API}/migrate", json={"items": [], "stations": []})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing userToken"}


def test_unknown_route_uses_error_shape(client):
    response = client.get(f"{API}/planets", headers=auth("u1"))
    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.parametrize("method,path", [
    ("PUT", "/item/99999999999999999999"),
    ("DELETE", "/item/99999999999999999999"),
    ("PUT", "/station/-99999999999999999999"),
    ("DELETE", "/station/99999999999999999999"),
])
def test_out_of_range_path_id_is_400(client, method, path):
    response = client.request(method, f"{API}{path}", json={"name": "Carbon", "value": 1}, headers=auth("u1"))
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.parametrize("method", ["PUT", "DELETE"])
@pytest.mark.parametrize("station_id", ["1e300", "99999999999999999999"])
def test_out_of_range_demand_key_is_invalid_key(client, method, station_id):
    response = client.request(
        method,
        f"{API}/demand",
        params={"stationId": station_id, "itemId": "1"},
        json={"demandLevel": 1},
        headers=auth("u1"),
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid stationId or itemId"}


@pytest.mark.parametrize("method", ["PUT", "DELETE"])
def test_missing_tenant_is_reported_before_bad_demand_key(client, method):
    response = client.request(
        method, f"{API}/demand", params={"stationId": "abc", "itemId": "1"}, json={"demandLevel": 1}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Missing userToken"}
