# tests/test_catalog_api.py

"""
Smoke tests for the resources built on the same router as suppliers:
products, customers, warehouses, inventory, orders, purchases, transfers
and users.
"""

import pytest
from bson import ObjectId
from httpx import AsyncClient

from app.core.config import COLLECTION_USERS
from app.core.security import verify_password


async def _create(client: AsyncClient, path: str, payload: dict) -> dict:
    response = await client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# =============================================================================
# 1. Products
# =============================================================================
@pytest.mark.asyncio
async def test_product_lifecycle(client: AsyncClient, create_supplier):
    supplier = await create_supplier()
    product = await _create(client, "/api/products", {
        "name": "Cordless Drill", "price": 129.99, "quantity": 40,
        "category": "Electronics", "supplier": supplier["supplier_Id"], "sku": "drl-18v",
    })

    assert product["productID"] == "PR-00001"
    assert product["sku"] == "DRL-18V"

    response = await client.get("/api/products/productID/PR-00001")
    assert response.status_code == 200
    assert response.json()["data"]["product_Id"] == product["product_Id"]

    response = await client.put(f"/api/products/{product['product_Id']}", json={"price": 99.5})
    assert response.json()["data"]["price"] == 99.5


@pytest.mark.asyncio
async def test_product_price_range_filter(client: AsyncClient, create_supplier):
    supplier = await create_supplier()
    for name, price in (("Cheap", 5), ("Mid", 50), ("Dear", 500)):
        await _create(client, "/api/products", {
            "name": name, "price": price, "quantity": 1,
            "category": "Other", "supplier": supplier["supplier_Id"],
        })

    response = await client.get("/api/products", params={"minPrice": 10, "maxPrice": 100})
    assert [p["name"] for p in response.json()["data"]["products"]] == ["Mid"]


@pytest.mark.asyncio
async def test_product_invalid_category_and_supplier(client: AsyncClient):
    response = await client.post("/api/products", json={
        "name": "Mystery", "price": 1, "quantity": 1, "category": "Toys", "supplier": "abc",
    })

    assert response.status_code == 400
    assert {d["field"] for d in response.json()["details"]} == {"category", "supplier"}


# =============================================================================
# 2. Customers
# =============================================================================
@pytest.mark.asyncio
async def test_customer_lifecycle(client: AsyncClient):
    customer = await _create(client, "/api/customers", {
        "name": "Globex Retail", "email": "Orders@Globex.com", "phone": "5551234567",
    })
    assert customer["customerID"] == "CU-00001"
    assert customer["email"] == "orders@globex.com"

    response = await client.get("/api/customers/search", params={"term": "globex"})
    assert len(response.json()["data"]) == 1

    response = await client.delete(f"/api/customers/{customer['customer_Id']}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_customer_duplicate_email(client: AsyncClient):
    await _create(client, "/api/customers", {"name": "First", "email": "same@globex.com"})

    response = await client.post("/api/customers", json={"name": "Second", "email": "same@globex.com"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_customer_missing_email(client: AsyncClient):
    response = await client.post("/api/customers", json={"name": "No Mail"})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "email"


# =============================================================================
# 3. Warehouses
# =============================================================================
@pytest.mark.asyncio
async def test_warehouse_defaults_and_lookup(client: AsyncClient):
    warehouse = await _create(client, "/api/warehouses", {
        "name": "North DC", "capacity": 12000,
        "contact": {"name": "Jane Doe", "phone": "1234567890"},
        "address": {"city": "Leeds", "country": "UK"},
    })

    assert warehouse["warehouseID"] == "WH-00001"
    assert warehouse["capacityUnit"] == "sqft"
    assert warehouse["status"] == "Active"

    response = await client.get(f"/api/warehouses/{warehouse['warehouse_Id']}")
    assert response.json()["data"]["contact"]["name"] == "Jane Doe"


@pytest.mark.asyncio
async def test_warehouse_capacity_filter(client: AsyncClient):
    await _create(client, "/api/warehouses", {"name": "Small", "capacity": 100})
    await _create(client, "/api/warehouses", {"name": "Large", "capacity": 10000})

    response = await client.get("/api/warehouses", params={"minCapacity": 1000})
    assert [w["name"] for w in response.json()["data"]["warehouses"]] == ["Large"]


@pytest.mark.asyncio
async def test_warehouse_bad_domain_id_format(client: AsyncClient):
    response = await client.get("/api/warehouses/warehouseID/SP-00001")
    assert response.status_code == 400


# =============================================================================
# 4. Inventory
# =============================================================================
@pytest.fixture
def stock_refs(client: AsyncClient, create_supplier):
    async def _refs():
        supplier = await create_supplier()
        product = await _create(client, "/api/products", {
            "name": "Drill", "price": 10, "quantity": 1, "category": "Other",
            "supplier": supplier["supplier_Id"],
        })
        warehouse = await _create(client, "/api/warehouses", {"name": "Main", "capacity": 500})
        return product["product_Id"], warehouse["warehouse_Id"]
    return _refs


@pytest.mark.asyncio
async def test_inventory_lifecycle(client: AsyncClient, stock_refs):
    product_id, warehouse_id = await stock_refs()
    record = await _create(client, "/api/inventory", {
        "product": product_id, "warehouse": warehouse_id, "quantity": 250,
        "location": {"aisle": "A1", "rack": "R2", "bin": "B3"},
    })

    assert record["inventoryID"] == "IN-00001"
    assert record["status"] == "In Stock"
    assert (record["minStockLevel"], record["maxStockLevel"]) == (10, 100)

    response = await client.get("/api/inventory/inventoryID/IN-00001")
    assert response.json()["data"]["quantity"] == 250

    response = await client.get("/api/inventory", params={"warehouse": warehouse_id})
    assert len(response.json()["data"]["inventory"]) == 1


@pytest.mark.asyncio
async def test_inventory_max_below_min_rejected(client: AsyncClient, stock_refs):
    product_id, warehouse_id = await stock_refs()

    response = await client.post("/api/inventory", json={
        "product": product_id, "warehouse": warehouse_id, "minStockLevel": 50, "maxStockLevel": 10,
    })

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "maxStockLevel"


@pytest.mark.asyncio
async def test_inventory_update_checked_against_stored_levels(client: AsyncClient, stock_refs):
    product_id, warehouse_id = await stock_refs()
    record = await _create(client, "/api/inventory", {"product": product_id, "warehouse": warehouse_id})

    # Update alone looks valid; merged with the stored minStockLevel (10) it is not
    response = await client.put(f"/api/inventory/{record['inventory_Id']}", json={"maxStockLevel": 5})

    assert response.status_code == 400
    body = response.json()
    assert len(body["details"]) == 1
    assert body["details"][0]["field"] == "maxStockLevel"


@pytest.mark.asyncio
async def test_inventory_one_record_per_product_and_warehouse(client: AsyncClient, stock_refs):
    product_id, warehouse_id = await stock_refs()
    await _create(client, "/api/inventory", {"product": product_id, "warehouse": warehouse_id})

    response = await client.post("/api/inventory", json={"product": product_id, "warehouse": warehouse_id})
    assert response.status_code == 409


# =============================================================================
# 5. Orders
# =============================================================================
def _order(**overrides):
    payload = {
        "customer": str(ObjectId()),
        "products": [
            {"product": str(ObjectId()), "quantity": 2, "priceAtOrder": 10.25},
            {"product": str(ObjectId()), "quantity": 1, "priceAtOrder": 4},
        ],
        "shippingAddress": {"street": "1 Main St", "city": "Leeds", "country": "UK"},
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_order_lifecycle(client: AsyncClient):
    order = await _create(client, "/api/orders", _order(totalAmount=999))

    assert order["orderID"] == "OR-00001"
    assert order["status"] == "pending"
    assert order["totalAmount"] == 24.5

    response = await client.put(f"/api/orders/{order['order_Id']}", json={"status": "shipped"})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "shipped"

    response = await client.get("/api/orders", params={"status": "shipped"})
    assert [o["orderID"] for o in response.json()["data"]["orders"]] == ["OR-00001"]


@pytest.mark.asyncio
async def test_order_status_is_lowercase_enum(client: AsyncClient):
    response = await client.post("/api/orders", json=_order(status="Shipped"))

    assert response.status_code == 400
    detail = response.json()["details"][0]
    assert detail["field"] == "status"
    assert detail["message"] == "Status must be one of: pending, processing, shipped, delivered, cancelled"

    order = await _create(client, "/api/orders", _order(status="processing"))
    response = await client.put(f"/api/orders/{order['order_Id']}", json={"status": "lost"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_order_update_recomputes_total(client: AsyncClient):
    order = await _create(client, "/api/orders", _order())

    response = await client.put(f"/api/orders/{order['order_Id']}", json={
        "products": [{"product": str(ObjectId()), "quantity": 5, "priceAtOrder": 2}],
    })
    assert response.json()["data"]["totalAmount"] == 10


# =============================================================================
# 6. Purchases
# =============================================================================
@pytest.mark.asyncio
async def test_purchase_lifecycle(client: AsyncClient, create_supplier):
    supplier = await create_supplier()
    purchase = await _create(client, "/api/purchases", {
        "supplier": supplier["supplier_Id"],
        "items": [{"product": str(ObjectId()), "quantity": 3, "price": 2.5}],
    })

    assert purchase["purchaseID"] == "PU-00001"
    assert (purchase["status"], purchase["paymentStatus"]) == ("pending", "unpaid")
    assert purchase["totalAmount"] == 7.5

    response = await client.get("/api/purchases/purchaseID/PU-00001")
    assert response.json()["data"]["purchase_Id"] == purchase["purchase_Id"]

    response = await client.put(f"/api/purchases/{purchase['purchase_Id']}", json={"paymentStatus": "overdue"})
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "paymentStatus"


# =============================================================================
# 7. Inventory transfers
# =============================================================================
def _transfer(from_warehouse, to_warehouse):
    return {
        "fromWarehouse": from_warehouse,
        "toWarehouse": to_warehouse,
        "items": [{"product": str(ObjectId()), "quantity": 10}],
    }


@pytest.mark.asyncio
async def test_transfer_lifecycle(client: AsyncClient):
    source, destination = str(ObjectId()), str(ObjectId())
    transfer = await _create(client, "/api/transfers", _transfer(source, destination))

    assert transfer["transferID"] == "TR-00001"
    assert transfer["status"] == "Draft"
    assert transfer["items"][0]["receivedQuantity"] == 0

    response = await client.put(f"/api/transfers/{transfer['transfer_Id']}", json={"status": "In Transit"})
    assert response.json()["data"]["status"] == "In Transit"


@pytest.mark.asyncio
async def test_transfer_same_warehouse_rejected_on_create(client: AsyncClient):
    warehouse = str(ObjectId())

    response = await client.post("/api/transfers", json=_transfer(warehouse, warehouse))

    assert response.status_code == 400
    assert response.json()["details"] == [{
        "field": "toWarehouse", "rejectedValue": warehouse,
        "message": "From and To warehouses cannot be the same",
    }]


@pytest.mark.asyncio
async def test_transfer_same_warehouse_rejected_on_merged_update(client: AsyncClient):
    source, destination = str(ObjectId()), str(ObjectId())
    transfer = await _create(client, "/api/transfers", _transfer(source, destination))

    # Update alone looks valid; merged with the stored fromWarehouse it is not
    response = await client.put(f"/api/transfers/{transfer['transfer_Id']}", json={"toWarehouse": source})

    assert response.status_code == 400
    body = response.json()
    assert len(body["details"]) == 1
    assert body["details"][0]["field"] == "toWarehouse"
    assert body["message"] == "From and To warehouses cannot be the same"

    response = await client.get(f"/api/transfers/{transfer['transfer_Id']}")
    assert response.json()["data"]["toWarehouse"] == destination


# =============================================================================
# 8. Users
# =============================================================================
def _user(**overrides):
    payload = {"username": "jdoe", "email": "J.Doe@Example.com",
               "password": "Secret@123", "confirmPassword": "Secret@123"}
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_user_create_hashes_and_hides_password(client: AsyncClient, mongo_db):
    user = await _create(client, "/api/users", _user())

    assert user["userID"] == "USR-00001"
    assert user["email"] == "j.doe@example.com"
    assert user["role"] == "USER"
    assert "password" not in user and "confirmPassword" not in user

    stored = await mongo_db[COLLECTION_USERS].find_one({"userID": "USR-00001"})
    assert "confirmPassword" not in stored
    assert verify_password("Secret@123", stored["password"])


@pytest.mark.asyncio
async def test_user_password_mismatch(client: AsyncClient):
    response = await client.post("/api/users", json=_user(confirmPassword="Other@123"))

    assert response.status_code == 400
    assert response.json()["details"][0]["message"] == "Passwords do not match"


@pytest.mark.asyncio
async def test_user_password_change(client: AsyncClient, mongo_db):
    user = await _create(client, "/api/users", _user())
    path = f"/api/users/{user['user_Id']}"

    response = await client.put(path, json={"password": "Changed@456"})
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "confirmPassword"

    response = await client.put(path, json={"password": "Changed@456", "confirmPassword": "Changed@456"})
    assert response.status_code == 200
    stored = await mongo_db[COLLECTION_USERS].find_one({"userID": "USR-00001"})
    assert verify_password("Changed@456", stored["password"])


@pytest.mark.asyncio
async def test_user_duplicate_username(client: AsyncClient):
    await _create(client, "/api/users", _user())

    response = await client.post("/api/users", json=_user(email="other@example.com"))
    assert response.status_code == 409
