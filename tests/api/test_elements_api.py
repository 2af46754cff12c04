# tests/api/test_elements_api.py
import pytest

ELEMENTS = "/projects/p1/types/t1/spaces/s1/elements"

@pytest.fixture
def outside_wall_data():
    """Outside concrete wall with outside isolation and one facade layer."""
    return {
        "type": "Wall",
        "sub_type": "Outside Wall",
        "outside_cover": "tiah",
        "build_method": "concrete",
        "build_method_isolation": "outside isolation",
        "isolation_coverage": "bright color",
        "name": "North facade",
        "layers": [
            {
                "id": "l1",
                "substance": "polystyrene",
                "maker": "Kalkar",
                "product": "EPS facade board",
                "thickness": 4,
                "thermal_conductivity": 0.04,
                "mass": 12,
            }
        ],
    }

@pytest.fixture
def created(client, api_headers, outside_wall_data):
    response = client.post(f"{ELEMENTS}/create", json=outside_wall_data, headers=api_headers)
    assert response.status_code == 201
    return response.json()["data"]

def test_auth_required(client, outside_wall_data):
    """Authentication is required for element endpoints."""
    response = client.post(f"{ELEMENTS}/create", json=outside_wall_data)
    assert response.status_code in (401, 422)

    response = client.get(ELEMENTS, headers={"X-API-Key": "invalid_key"})
    assert response.status_code == 401

def test_status_endpoints_are_open(client):
    assert client.get("/").json()["status"] == "online"
    assert client.get("/health").json()["status"] == "healthy"

def test_create_element(created):
    assert created["element_id"]
    assert created["project_id"] == "p1"
    assert created["space_id"] == "s1"
    assert created["layers"][0]["product"] == "EPS facade board"
    assert created["layers"][0]["group"] == 1

def test_missing_groups_cycle_by_position(client, api_headers, outside_wall_data):
    layer = outside_wall_data["layers"][0]
    outside_wall_data["layers"] = [dict(layer, id=f"l{i}") for i in range(4)]
    response = client.post(f"{ELEMENTS}/create", json=outside_wall_data, headers=api_headers)
    groups = [layer["group"] for layer in response.json()["data"]["layers"]]
    assert groups == [1, 2, 3, 1]

def test_create_requires_build_method(client, api_headers, outside_wall_data):
    outside_wall_data["build_method"] = None
    response = client.post(f"{ELEMENTS}/create", json=outside_wall_data, headers=api_headers)
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["detail"] == "Build Method is required for Outside Wall elements"
    assert detail["extra"]["field"] == "build_method"

def test_create_rejects_sub_type_mismatch(client, api_headers):
    response = client.post(
        f"{ELEMENTS}/create",
        json={"type": "Floor", "sub_type": "Outside Wall"},
        headers=api_headers,
    )
    assert response.status_code == 422

def test_create_rejects_bad_thickness(client, api_headers, outside_wall_data):
    outside_wall_data["layers"][0]["thickness"] = 0
    response = client.post(f"{ELEMENTS}/create", json=outside_wall_data, headers=api_headers)
    assert response.status_code == 422

def test_get_and_list(client, api_headers, created):
    element_id = created["element_id"]
    response = client.get(f"{ELEMENTS}/{element_id}", headers=api_headers)
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["data"]["name"] == "North facade"

    response = client.get(ELEMENTS, headers=api_headers)
    assert [e["element_id"] for e in response.json()["data"]] == [element_id]

def test_get_unknown_element(client, api_headers):
    response = client.get(f"{ELEMENTS}/missing", headers=api_headers)
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "resource_not_found"

def test_list_is_scoped_to_space(client, api_headers, created):
    response = client.get("/projects/p1/types/t1/spaces/other/elements", headers=api_headers)
    assert response.json()["data"] == []

def test_update_element(client, api_headers, created, outside_wall_data):
    element_id = created["element_id"]
    outside_wall_data["layers"].append({
        "id": "l2",
        "substance": "plaster",
        "maker": "Nirlat",
        "product": "Silicone finish coat",
        "thickness": 0.3,
        "group": 1,
    })
    response = client.put(f"{ELEMENTS}/{element_id}", json=outside_wall_data, headers=api_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [layer["id"] for layer in body["data"]["layers"]] == ["l1", "l2"]

def test_update_unknown_element(client, api_headers, outside_wall_data):
    response = client.put(f"{ELEMENTS}/missing", json=outside_wall_data, headers=api_headers)
    assert response.status_code == 404

def test_delete_and_clear(client, api_headers, outside_wall_data, created):
    client.post(f"{ELEMENTS}/create", json=outside_wall_data, headers=api_headers)

    response = client.delete(f"{ELEMENTS}/{created['element_id']}", headers=api_headers)
    assert response.json()["message"] == "Element deleted successfully"
    assert len(client.get(ELEMENTS, headers=api_headers).json()["data"]) == 1

    response = client.delete(f"{ELEMENTS}/clear", headers=api_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "All elements cleared successfully"
    assert response.json()["data"] == {"deleted": 1}
    assert client.get(ELEMENTS, headers=api_headers).json()["data"] == []

def test_delete_unknown_element(client, api_headers):
    response = client.delete(f"{ELEMENTS}/missing", headers=api_headers)
    assert response.status_code == 404

def test_compliance_check(client, api_headers, created):
    response = client.post(f"{ELEMENTS}/{created['element_id']}/compliance-check", headers=api_headers)
    assert response.status_code == 200
    result = response.json()["data"]
    assert set(result) == {"is_compliant", "u_value", "max_u_value", "areal_mass", "details"}
    assert "Catalog consistency" in result["details"]["checks_passed"]
    assert result["max_u_value"] == 0.8
    assert result["u_value"] == pytest.approx(1 / (0.17 + 0.04 / 0.04), abs=1e-3)

def test_storage_unavailable(client, api_headers, monkeypatch):
    monkeypatch.setattr("api.utils.db.supabase", None)
    response = client.get(ELEMENTS, headers=api_headers)
    assert response.status_code == 500
    assert response.json()["detail"]["code"] == "database_error"
