# mongodb.py

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING, TEXT
from app.core.config import (
    MONGO_URI, MONGO_DB,
    COLLECTION_SUPPLIERS, COLLECTION_PRODUCTS, COLLECTION_CUSTOMERS,
    COLLECTION_WAREHOUSES, COLLECTION_INVENTORY, COLLECTION_ORDERS,
    COLLECTION_PURCHASES, COLLECTION_TRANSFERS, COLLECTION_USERS,
)
from app.utiles.logger import get_logger

logger = get_logger(__name__)

# Global client and db instances

client = AsyncIOMotorClient(MONGO_URI)
db = client[MONGO_DB]


async def connect_to_mongo():
    """Connect to MongoDB when app starts."""
    # Ensure indexes are created
    await ensure_indexes()

    logger.info("✅ MongoDB connection established (db=%s)", db.name)


async def close_mongo_connection():
    """Close MongoDB connection when app shuts down."""
    if client:
        client.close()
        logger.warning("⚠️ MongoDB connection closed")


async def ping() -> bool:
    """Round-trip to the server; raises if MongoDB is unreachable."""
    await db.command("ping")
    return True


async def ensure_indexes(database=None):
    """Create necessary indexes for collections."""
    database = database if database is not None else db

    # ---------------- Suppliers ----------------
    await database[COLLECTION_SUPPLIERS].create_index("supplierID", unique=True)
    await database[COLLECTION_SUPPLIERS].create_index("name")
    await database[COLLECTION_SUPPLIERS].create_index("status")
    await database[COLLECTION_SUPPLIERS].create_index([("address.city", ASCENDING), ("address.state", ASCENDING)])
    await database[COLLECTION_SUPPLIERS].create_index("address.country")
    # Email is only unique when present
    await database[COLLECTION_SUPPLIERS].create_index("contact.email", unique=True, sparse=True)
    await database[COLLECTION_SUPPLIERS].create_index(
        [("name", TEXT), ("contact.email", TEXT), ("address.city", TEXT), ("address.country", TEXT)]
    )

    # ---------------- Products ----------------
    await database[COLLECTION_PRODUCTS].create_index("productID", unique=True)
    await database[COLLECTION_PRODUCTS].create_index("name")
    await database[COLLECTION_PRODUCTS].create_index("category")
    await database[COLLECTION_PRODUCTS].create_index("supplier")
    await database[COLLECTION_PRODUCTS].create_index("sku", unique=True, sparse=True)
    await database[COLLECTION_PRODUCTS].create_index(
        [("name", TEXT), ("description", TEXT), ("category", TEXT)]
    )

    # ---------------- Customers ----------------
    await database[COLLECTION_CUSTOMERS].create_index("customerID", unique=True)
    await database[COLLECTION_CUSTOMERS].create_index("email", unique=True)
    await database[COLLECTION_CUSTOMERS].create_index("name")
    await database[COLLECTION_CUSTOMERS].create_index([("name", TEXT), ("email", TEXT)])

    # ---------------- Warehouses ----------------
    await database[COLLECTION_WAREHOUSES].create_index("warehouseID", unique=True)
    await database[COLLECTION_WAREHOUSES].create_index("name")
    await database[COLLECTION_WAREHOUSES].create_index("status")
    await database[COLLECTION_WAREHOUSES].create_index([("address.city", ASCENDING), ("address.state", ASCENDING)])

    # ---------------- Inventory ----------------
    await database[COLLECTION_INVENTORY].create_index("inventoryID", unique=True)
    await database[COLLECTION_INVENTORY].create_index([("product", ASCENDING), ("warehouse", ASCENDING)], unique=True)
    await database[COLLECTION_INVENTORY].create_index("warehouse")
    await database[COLLECTION_INVENTORY].create_index("status")
    await database[COLLECTION_INVENTORY].create_index([("updatedAt", DESCENDING)])

    # ---------------- Orders ----------------
    await database[COLLECTION_ORDERS].create_index("orderID", unique=True)
    await database[COLLECTION_ORDERS].create_index("customer")
    await database[COLLECTION_ORDERS].create_index("status")
    await database[COLLECTION_ORDERS].create_index([("orderDate", DESCENDING)])

    # ---------------- Purchases ----------------
    await database[COLLECTION_PURCHASES].create_index("purchaseID", unique=True)
    await database[COLLECTION_PURCHASES].create_index("supplier")
    await database[COLLECTION_PURCHASES].create_index([("status", ASCENDING), ("paymentStatus", ASCENDING)])

    # ---------------- Transfers ----------------
    await database[COLLECTION_TRANSFERS].create_index("transferID", unique=True)
    await database[COLLECTION_TRANSFERS].create_index([("fromWarehouse", ASCENDING), ("toWarehouse", ASCENDING)])
    await database[COLLECTION_TRANSFERS].create_index("status")

    # ---------------- Users ----------------
    await database[COLLECTION_USERS].create_index("userID", unique=True)
    await database[COLLECTION_USERS].create_index("username", unique=True)
    await database[COLLECTION_USERS].create_index("email", unique=True)
    await database[COLLECTION_USERS].create_index("role")

    logger.info("✅ Indexes ensured for all resource collections")
