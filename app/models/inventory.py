# app/models/inventory.py
"""
Stock records: how much of one product sits in one warehouse.

product and warehouse are stored as raw ids; nothing here checks that they
point at existing documents. The (product, warehouse) pair is unique at the
index level.
"""
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from app.core.config import COLLECTION_INVENTORY
from app.models import rules
from app.models.common import ListQuery, RequestModel
from app.models.resource import DATE_RANGE_FILTERS, ResourceConfig
from app.utiles.custom_helpers import FilterField

STOCK_STATUSES = ("In Stock", "Low Stock", "Out of Stock", "Reserved", "Damaged")


class BinLocation(BaseModel):
    aisle: Optional[str] = None
    rack: Optional[str] = None
    bin: Optional[str] = None

    @field_validator("aisle", "rack", "bin", mode="before")
    @classmethod
    def check_identifier(cls, v, info: ValidationInfo):
        return rules.optional_text(v, f"{info.field_name.title()} identifier", 10)


class InventoryCreate(RequestModel):
    product: str = Field(..., description="Product internal id")
    warehouse: str = Field(..., description="Warehouse internal id")
    quantity: int = Field(0, examples=[250])
    minStockLevel: int = Field(10, examples=[20])
    maxStockLevel: int = Field(100, examples=[500])
    status: Optional[str] = Field(None, examples=["In Stock"])
    location: Optional[BinLocation] = None
    notes: Optional[str] = None

    @field_validator("product", mode="before")
    @classmethod
    def check_product(cls, v):
        if v is None:
            raise ValueError("Product reference is required")
        return rules.object_id(v, "Product")

    @field_validator("warehouse", mode="before")
    @classmethod
    def check_warehouse(cls, v):
        if v is None:
            raise ValueError("Warehouse reference is required")
        return rules.object_id(v, "Warehouse")

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        return rules.non_negative(v, "Quantity")

    @field_validator("minStockLevel")
    @classmethod
    def check_min_stock(cls, v):
        return rules.non_negative(v, "Minimum stock level")

    # Declared after minStockLevel so info.data already holds it
    @field_validator("maxStockLevel")
    @classmethod
    def check_max_stock(cls, v, info: ValidationInfo):
        rules.non_negative(v, "Maximum stock level")
        return rules.at_least(v, info.data.get("minStockLevel"), "Maximum stock level", "minimum stock level")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, STOCK_STATUSES, "Status")

    @field_validator("notes", mode="before")
    @classmethod
    def check_notes(cls, v):
        return rules.optional_text(v, "Notes", 500)


class InventoryUpdate(BaseModel):
    quantity: Optional[int] = None
    minStockLevel: Optional[int] = None
    maxStockLevel: Optional[int] = None
    status: Optional[str] = None
    location: Optional[BinLocation] = None
    notes: Optional[str] = None

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        return rules.non_negative(v, "Quantity")

    @field_validator("minStockLevel")
    @classmethod
    def check_min_stock(cls, v):
        return rules.non_negative(v, "Minimum stock level")

    @field_validator("maxStockLevel")
    @classmethod
    def check_max_stock(cls, v, info: ValidationInfo):
        rules.non_negative(v, "Maximum stock level")
        return rules.at_least(v, info.data.get("minStockLevel"), "Maximum stock level", "minimum stock level")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, STOCK_STATUSES, "Status")

    @field_validator("notes", mode="before")
    @classmethod
    def check_notes(cls, v):
        return rules.optional_text(v, "Notes", 500)


class InventoryQuery(ListQuery):
    product: Optional[str] = None
    warehouse: Optional[str] = None
    status: Optional[str] = None
    minQuantity: Optional[int] = Field(None, ge=0)
    maxQuantity: Optional[int] = Field(None, ge=0)

    @field_validator("product", mode="before")
    @classmethod
    def check_product(cls, v):
        return rules.object_id(v, "Product")

    @field_validator("warehouse", mode="before")
    @classmethod
    def check_warehouse(cls, v):
        return rules.object_id(v, "Warehouse")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, STOCK_STATUSES, "Status")


class InventoryDocument(InventoryCreate):
    inventoryID: str
    status: str = "In Stock"


def transform_inventory(inventory):
    if not inventory:
        return None

    return {
        "inventory_Id": str(inventory["_id"]),
        "inventoryID": inventory.get("inventoryID"),
        "product": inventory.get("product"),
        "warehouse": inventory.get("warehouse"),
        "quantity": inventory.get("quantity"),
        "minStockLevel": inventory.get("minStockLevel"),
        "maxStockLevel": inventory.get("maxStockLevel"),
        "status": inventory.get("status"),
        "location": inventory.get("location"),
        "notes": inventory.get("notes"),
    }


INVENTORY_RESOURCE = ResourceConfig(
    entity="Inventory",
    plural="inventory",
    collection=COLLECTION_INVENTORY,
    prefix="IN-",
    domain_id_field="inventoryID",
    internal_id_key="inventory_Id",
    document_model=InventoryDocument,
    transform=transform_inventory,
    filters={
        "product": FilterField("product"),
        "warehouse": FilterField("warehouse"),
        "status": FilterField("status"),
        "minQuantity": FilterField("quantity", "gte"),
        "maxQuantity": FilterField("quantity", "lte"),
        **DATE_RANGE_FILTERS,
    },
    search_fields=("inventoryID", "status", "notes"),
    default_sort="inventoryID",
    sortable_fields=("quantity", "status", "minStockLevel", "maxStockLevel"),
)
