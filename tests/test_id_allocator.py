# tests/test_id_allocator.py

"""
Sequential domain ID allocation (SP-00001, SP-00002, ...).
"""

import pytest

from app.core.config import COLLECTION_SUPPLIERS
from app.services.id_allocator import allocate_domain_id, format_domain_id


def test_format_domain_id_pads_to_width():
    assert format_domain_id("SP-", 7, 5) == "SP-00007"


def test_format_domain_id_grows_past_width():
    assert format_domain_id("SP-", 100000, 5) == "SP-100000"


@pytest.mark.asyncio
async def test_first_id_on_empty_collection(supplier_service):
    domain_id = await allocate_domain_id(supplier_service.repository, "supplierID", "SP-")
    assert domain_id == "SP-00001"


@pytest.mark.asyncio
async def test_ids_increase_monotonically(supplier_service):
    created = [await supplier_service.create({"name": f"Supplier {i}"}) for i in range(3)]
    assert [doc["supplierID"] for doc in created] == ["SP-00001", "SP-00002", "SP-00003"]


@pytest.mark.asyncio
async def test_gap_continues_from_highest(supplier_service, mongo_db):
    await mongo_db[COLLECTION_SUPPLIERS].insert_one({"name": "Legacy", "supplierID": "SP-00010"})

    doc = await supplier_service.create({"name": "Next"})
    assert doc["supplierID"] == "SP-00011"


@pytest.mark.asyncio
async def test_deleted_ids_are_not_reused_below_the_max(supplier_service):
    first = await supplier_service.create({"name": "First"})
    await supplier_service.create({"name": "Second"})
    await supplier_service.delete(str(first["_id"]))

    doc = await supplier_service.create({"name": "Third"})
    assert doc["supplierID"] == "SP-00003"


@pytest.mark.asyncio
async def test_malformed_suffix_restarts_at_one(supplier_service, mongo_db):
    await mongo_db[COLLECTION_SUPPLIERS].insert_one({"name": "Broken", "supplierID": "SP-ABCDE"})

    domain_id = await allocate_domain_id(supplier_service.repository, "supplierID", "SP-")
    assert domain_id == "SP-00001"


@pytest.mark.asyncio
async def test_allocation_does_not_write(supplier_service, mongo_db):
    await allocate_domain_id(supplier_service.repository, "supplierID", "SP-")
    assert await mongo_db[COLLECTION_SUPPLIERS].count_documents({}) == 0
