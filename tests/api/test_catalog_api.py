# tests/api/test_catalog_api.py

CONCRETE_OUTSIDE = {"build_method": "concrete", "build_method_isolation": "outside isolation"}

def test_auth_required(client):
    assert client.get("/catalog/substances").status_code in (401, 422)

def test_entries(client, api_headers):
    response = client.get("/catalog/entries", headers=api_headers)
    assert response.status_code == 200
    assert response.json()[0]["id"] == "1"

def test_entries_in_context(client, api_headers):
    response = client.get("/catalog/entries", params=CONCRETE_OUTSIDE, headers=api_headers)
    assert [entry["id"] for entry in response.json()] == ["27", "28", "29", "30", "31"]

def test_substances_in_context(client, api_headers):
    response = client.get("/catalog/substances", params=CONCRETE_OUTSIDE, headers=api_headers)
    assert response.json() == ["polystyrene", "rock wool", "plaster"]

def test_makers(client, api_headers):
    response = client.get("/catalog/makers", params={"substance": "polystyrene"}, headers=api_headers)
    assert response.json() == ["Kalkar", "Isopan"]

def test_products(client, api_headers):
    params = dict(CONCRETE_OUTSIDE, substance="polystyrene", maker="Kalkar")
    response = client.get("/catalog/products", params=params, headers=api_headers)
    assert response.json() == ["EPS facade board"]

def test_entry(client, api_headers):
    params = {"substance": "polystyrene", "maker": "Kalkar", "product": "EPS facade board"}
    response = client.get("/catalog/entry", params=params, headers=api_headers)
    assert response.status_code == 200
    assert response.json()["min_thickness"] == 3

def test_entry_not_in_context(client, api_headers):
    params = dict(CONCRETE_OUTSIDE, substance="polystyrene", maker="Kalkar", product="EPS 15")
    response = client.get("/catalog/entry", params=params, headers=api_headers)
    assert response.status_code == 404
