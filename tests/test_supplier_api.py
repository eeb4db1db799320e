# tests/test_supplier_api.py

"""
Supplier endpoints end to end: envelope shape, status codes and error
reclassification as a client sees them.
"""

import re

import pytest
from httpx import AsyncClient

from app.services import id_allocator

SUPPLIERS = "/api/suppliers"
MISSING_ID = "507f1f77bcf86cd799439011"


# =============================================================================
# 1. Create
# =============================================================================
@pytest.mark.asyncio
async def test_create_supplier_success(client: AsyncClient):
    payload = {
        "name": "Acme",
        "contact": {"phone": "1234567890", "email": "a@acme.com"},
        "address": {"street": "1 Main St", "city": "Springfield", "state": "IL",
                    "postalCode": "62701", "country": "USA"},
    }
    response = await client.post(SUPPLIERS, json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Supplier created successfully"
    data = body["data"]
    assert re.match(r"^SP-\d{5}$", data["supplierID"])
    assert data["name"] == "Acme"
    assert set(data) == {"supplier_Id", "supplierID", "name", "contact", "address"}


@pytest.mark.asyncio
async def test_create_supplier_ignores_supplied_domain_id(client: AsyncClient, create_supplier):
    data = await create_supplier(supplierID="SP-99999")
    assert data["supplierID"] == "SP-00001"


@pytest.mark.asyncio
async def test_create_supplier_accumulates_validation_errors(client: AsyncClient):
    response = await client.post(SUPPLIERS, json={"contact": {"phone": "12", "email": "nope"}})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errorCode"] == "VALIDATION_ERROR"
    assert body["statusCode"] == 400
    assert {d["field"] for d in body["details"]} == {"name", "contact.phone", "contact.email"}
    assert len(body["error"]) == 3


@pytest.mark.asyncio
async def test_create_supplier_duplicate_email_conflict(client: AsyncClient, create_supplier):
    await create_supplier(contact={"email": "dup@acme.com"})

    response = await client.post(SUPPLIERS, json={"name": "Other", "contact": {"email": "dup@acme.com"}})
    assert response.status_code == 409
    assert response.json()["errorCode"] == "CONFLICT"


@pytest.mark.asyncio
async def test_create_supplier_conflict_after_retries(client: AsyncClient, create_supplier, monkeypatch):
    await create_supplier()

    async def always_stale(repository, field, prefix, width=None):
        return "SP-00001"

    monkeypatch.setattr(id_allocator, "allocate_domain_id", always_stale)

    response = await client.post(SUPPLIERS, json={"name": "Racer"})
    assert response.status_code == 409
    assert response.json()["statusCode"] == 409


# =============================================================================
# 2. Read
# =============================================================================
@pytest.mark.asyncio
async def test_get_supplier_by_domain_id(client: AsyncClient, create_supplier):
    created = await create_supplier()

    response = await client.get(f"{SUPPLIERS}/supplierID/{created['supplierID']}")
    assert response.status_code == 200
    assert response.json()["data"] == created


@pytest.mark.asyncio
async def test_get_supplier_by_domain_id_not_found(client: AsyncClient):
    response = await client.get(f"{SUPPLIERS}/supplierID/SP-00001")

    assert response.status_code == 404
    body = response.json()
    assert "not found" in body["error"]
    assert body["errorCode"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_get_supplier_by_domain_id_bad_format(client: AsyncClient):
    response = await client.get(f"{SUPPLIERS}/supplierID/SP-1")

    assert response.status_code == 400
    assert response.json()["message"] == "Supplier ID should be in the format SP-xxxxx"


@pytest.mark.asyncio
async def test_get_supplier_by_internal_id(client: AsyncClient, create_supplier):
    created = await create_supplier()

    response = await client.get(f"{SUPPLIERS}/{created['supplier_Id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Supplier retrieved successfully"
    assert response.json()["data"]["supplierID"] == created["supplierID"]


@pytest.mark.asyncio
async def test_get_supplier_malformed_internal_id(client: AsyncClient):
    response = await client.get(f"{SUPPLIERS}/not-an-object-id")

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid Supplier ID format"
    assert body["details"] == [
        {"field": "supplier_Id", "rejectedValue": "not-an-object-id", "message": "Invalid Supplier ID format"}
    ]


@pytest.mark.asyncio
async def test_get_supplier_missing_internal_id(client: AsyncClient):
    response = await client.get(f"{SUPPLIERS}/{MISSING_ID}")
    assert response.status_code == 404


# =============================================================================
# 3. List / search
# =============================================================================
@pytest.mark.asyncio
async def test_list_suppliers_filter_by_status(client: AsyncClient, create_supplier):
    await create_supplier(name="Alpha")
    await create_supplier(name="Bravo", status="Blocked")
    await create_supplier(name="Charlie")

    response = await client.get(SUPPLIERS, params={"status": "Blocked"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["suppliers"]) == 1
    assert data["suppliers"][0]["name"] == "Bravo"
    assert data["pagination"]["total"] == 1


@pytest.mark.asyncio
async def test_list_suppliers_pagination(client: AsyncClient, create_supplier):
    for i in range(1, 13):
        await create_supplier(name=f"Supplier {i:02d}")

    response = await client.get(SUPPLIERS, params={"page": 2, "limit": 5, "sort": "-name"})
    data = response.json()["data"]
    assert [s["name"] for s in data["suppliers"]] == [f"Supplier {i:02d}" for i in range(7, 2, -1)]
    assert data["pagination"] == {"total": 12, "page": 2, "limit": 5, "totalPages": 3}


@pytest.mark.asyncio
async def test_list_suppliers_empty(client: AsyncClient):
    response = await client.get(SUPPLIERS)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "No suppliers found"
    assert body["data"]["suppliers"] == []


@pytest.mark.asyncio
async def test_list_suppliers_invalid_query(client: AsyncClient):
    response = await client.get(SUPPLIERS, params={"limit": 0, "status": "Sleeping"})

    assert response.status_code == 400
    assert {d["field"] for d in response.json()["details"]} == {"limit", "status"}


@pytest.mark.asyncio
async def test_list_suppliers_by_city(client: AsyncClient, create_supplier):
    await create_supplier(name="Local")
    await create_supplier(name="Remote", address={"city": "Shelbyville"})

    response = await client.get(SUPPLIERS, params={"city": "shelby"})
    assert [s["name"] for s in response.json()["data"]["suppliers"]] == ["Remote"]


@pytest.mark.asyncio
async def test_search_suppliers(client: AsyncClient, create_supplier):
    await create_supplier(name="Acme Tools")
    await create_supplier(name="Globex")

    response = await client.get(f"{SUPPLIERS}/search", params={"term": "acme"})

    assert response.status_code == 200
    results = response.json()["data"]
    assert [s["name"] for s in results] == ["Acme Tools"]


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{}, {"term": "a"}, {"term": "   "}])
async def test_search_suppliers_rejects_short_terms(client: AsyncClient, params):
    response = await client.get(f"{SUPPLIERS}/search", params=params)

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "term"


# =============================================================================
# 4. Update
# =============================================================================
@pytest.mark.asyncio
async def test_update_supplier(client: AsyncClient, create_supplier):
    created = await create_supplier()

    response = await client.put(
        f"{SUPPLIERS}/{created['supplier_Id']}",
        json={"name": "Acme Renamed", "supplierID": "SP-99999", "address": {"city": "Capital City"}},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Acme Renamed"
    assert data["supplierID"] == created["supplierID"]
    assert data["address"]["city"] == "Capital City"
    assert data["address"]["street"] == "1 Main St"


@pytest.mark.asyncio
async def test_update_supplier_validation(client: AsyncClient, create_supplier):
    created = await create_supplier()

    response = await client.put(f"{SUPPLIERS}/{created['supplier_Id']}", json={"contact": {"phone": "abc"}})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_supplier_not_found(client: AsyncClient):
    response = await client.put(f"{SUPPLIERS}/{MISSING_ID}", json={"name": "Ghost"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_supplier_email_conflict(client: AsyncClient, create_supplier):
    await create_supplier(name="One", contact={"email": "one@acme.com"})
    second = await create_supplier(name="Two", contact={"email": "two@acme.com"})

    response = await client.put(f"{SUPPLIERS}/{second['supplier_Id']}", json={"contact": {"email": "one@acme.com"}})
    assert response.status_code == 409


# =============================================================================
# 5. Delete
# =============================================================================
@pytest.mark.asyncio
async def test_delete_supplier_twice(client: AsyncClient, create_supplier):
    created = await create_supplier()
    url = f"{SUPPLIERS}/{created['supplier_Id']}"

    first = await client.delete(url)
    assert first.status_code == 200
    assert first.json()["data"] == {"deletedCount": 1}

    second = await client.delete(url)
    assert second.status_code == 404
    assert "not found" in second.json()["error"]


@pytest.mark.asyncio
async def test_delete_all_suppliers(client: AsyncClient, create_supplier):
    for name in ("One", "Two", "Three"):
        await create_supplier(name=name)

    response = await client.delete(SUPPLIERS)
    assert response.status_code == 200
    assert response.json()["message"] == "3 suppliers deleted successfully"
    assert response.json()["data"] == {"deletedCount": 3}

    listing = await client.get(SUPPLIERS)
    assert listing.json()["data"]["pagination"]["total"] == 0


# =============================================================================
# 6. Authentication
# =============================================================================
@pytest.mark.asyncio
async def test_missing_api_key(anonymous_client: AsyncClient):
    response = await anonymous_client.get(SUPPLIERS)

    assert response.status_code == 401
    assert response.json()["errorCode"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_unknown_api_key(anonymous_client: AsyncClient):
    response = await anonymous_client.get(SUPPLIERS, headers={"X-API-Key": "wrong"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid API key"


@pytest.mark.asyncio
async def test_auth_disabled_without_keys(anonymous_client: AsyncClient, monkeypatch):
    from app.core.config import settings
    monkeypatch.setattr(settings, "API_KEYS", [])

    response = await anonymous_client.get(SUPPLIERS)
    assert response.status_code == 200


# =============================================================================
# 7. Request rules reach the client
# =============================================================================
@pytest.mark.asyncio
async def test_create_supplier_missing_name_uses_rule_message(client: AsyncClient):
    response = await client.post(SUPPLIERS, json={})

    assert response.status_code == 400
    assert response.json()["details"] == [
        {"field": "name", "rejectedValue": None, "message": "Supplier name is required"}
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("sort", ["$where", "-", "name,password"])
async def test_list_suppliers_rejects_unknown_sort_field(client: AsyncClient, create_supplier, sort):
    await create_supplier()

    response = await client.get(SUPPLIERS, params={"sort": sort})

    assert response.status_code == 400
    details = response.json()["details"]
    assert [d["field"] for d in details] == ["sort"]
    assert details[0]["rejectedValue"] == sort


@pytest.mark.asyncio
async def test_list_suppliers_sorts_by_nested_field(client: AsyncClient, create_supplier):
    await create_supplier(name="B", address={"city": "Zurich"})
    await create_supplier(name="A", address={"city": "Austin"})

    response = await client.get(SUPPLIERS, params={"sort": "-address.city"})

    assert response.status_code == 200
    assert [s["name"] for s in response.json()["data"]["suppliers"]] == ["B", "A"]
