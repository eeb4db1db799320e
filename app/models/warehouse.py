from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.core.config import COLLECTION_WAREHOUSES
from app.models import rules
from app.models.common import Address, ContactPerson, ListQuery, RequestModel
from app.models.resource import DATE_RANGE_FILTERS, ResourceConfig
from app.utiles.custom_helpers import FilterField

WAREHOUSE_STATUSES = ("Active", "Inactive", "Maintenance", "Full")
CAPACITY_UNITS = ("sqft", "sqm", "pallets", "items")


class WarehouseCreate(RequestModel):
    name: str = Field(..., examples=["North Distribution Center"])
    description: Optional[str] = None
    capacity: float = Field(..., examples=[12000])
    capacityUnit: Optional[str] = Field(None, examples=["sqft"])
    status: Optional[str] = Field(None, examples=["Active"])
    contact: Optional[ContactPerson] = None
    address: Optional[Address] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return rules.required_text(v, "Warehouse name", 100)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, v):
        return rules.optional_text(v, "Warehouse description", 500)

    @field_validator("capacity", mode="before")
    @classmethod
    def check_capacity_present(cls, v):
        return rules.required_value(v, "Capacity")

    @field_validator("capacity")
    @classmethod
    def check_capacity(cls, v):
        return rules.non_negative(v, "Capacity")

    @field_validator("capacityUnit", mode="before")
    @classmethod
    def check_capacity_unit(cls, v):
        return rules.one_of(v, CAPACITY_UNITS, "Capacity unit")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, WAREHOUSE_STATUSES, "Status")


class WarehouseUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    capacity: Optional[float] = None
    capacityUnit: Optional[str] = None
    status: Optional[str] = None
    contact: Optional[ContactPerson] = None
    address: Optional[Address] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return rules.non_empty_text(v, "Warehouse name", 100)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, v):
        return rules.optional_text(v, "Warehouse description", 500)

    @field_validator("capacity")
    @classmethod
    def check_capacity(cls, v):
        return rules.non_negative(v, "Capacity")

    @field_validator("capacityUnit", mode="before")
    @classmethod
    def check_capacity_unit(cls, v):
        return rules.one_of(v, CAPACITY_UNITS, "Capacity unit")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, WAREHOUSE_STATUSES, "Status")


class WarehouseQuery(ListQuery):
    name: Optional[str] = None
    status: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    minCapacity: Optional[float] = Field(None, ge=0)
    maxCapacity: Optional[float] = Field(None, ge=0)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, WAREHOUSE_STATUSES, "Status")


class WarehouseDocument(WarehouseCreate):
    warehouseID: str
    capacityUnit: str = "sqft"
    status: str = "Active"


def transform_warehouse(warehouse):
    if not warehouse:
        return None

    return {
        "warehouse_Id": str(warehouse["_id"]),
        "warehouseID": warehouse.get("warehouseID"),
        "name": warehouse.get("name"),
        "description": warehouse.get("description"),
        "capacity": warehouse.get("capacity"),
        "capacityUnit": warehouse.get("capacityUnit"),
        "status": warehouse.get("status"),
        "contact": warehouse.get("contact"),
        "address": warehouse.get("address"),
    }


WAREHOUSE_RESOURCE = ResourceConfig(
    entity="Warehouse",
    plural="warehouses",
    collection=COLLECTION_WAREHOUSES,
    prefix="WH-",
    domain_id_field="warehouseID",
    internal_id_key="warehouse_Id",
    document_model=WarehouseDocument,
    transform=transform_warehouse,
    filters={
        "name": FilterField("name", "regex"),
        "status": FilterField("status"),
        "city": FilterField("address.city", "regex"),
        "state": FilterField("address.state", "regex"),
        "country": FilterField("address.country", "regex"),
        "minCapacity": FilterField("capacity", "gte"),
        "maxCapacity": FilterField("capacity", "lte"),
        **DATE_RANGE_FILTERS,
    },
    search_fields=("name", "description", "address.city", "address.country", "contact.name"),
    default_sort="name",
    sortable_fields=("name", "capacity", "status", "address.city", "address.country"),
)
