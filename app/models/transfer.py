# app/models/transfer.py
"""
Stock moving between two warehouses. The two warehouse references must
differ; on update the rule is checked again against the merged document.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from app.core.config import COLLECTION_TRANSFERS
from app.models import rules
from app.models.common import ListQuery, RequestModel
from app.models.resource import DATE_RANGE_FILTERS, ResourceConfig
from app.utiles.custom_helpers import FilterField, _now_utc

TRANSFER_STATUSES = ("Draft", "Pending", "In Transit", "Partially Received", "Completed", "Cancelled")
SAME_WAREHOUSE_MESSAGE = "From and To warehouses cannot be the same"


class TransferItem(BaseModel):
    product: str = Field(..., description="Product internal id")
    quantity: int = Field(..., examples=[25])
    receivedQuantity: int = 0
    notes: Optional[str] = None

    @field_validator("product", mode="before")
    @classmethod
    def check_product(cls, v):
        if v is None:
            raise ValueError("Product reference is required")
        return rules.object_id(v, "Product")

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        return rules.min_value(v, 1, "Quantity")

    @field_validator("receivedQuantity")
    @classmethod
    def check_received(cls, v):
        return rules.non_negative(v, "Received quantity")

    @field_validator("notes", mode="before")
    @classmethod
    def check_notes(cls, v):
        return rules.optional_text(v, "Notes", 200)


class TransferCreate(RequestModel):
    fromWarehouse: str = Field(..., description="Source warehouse internal id")
    toWarehouse: str = Field(..., description="Destination warehouse internal id")
    items: List[TransferItem] = Field(...)
    requestDate: Optional[datetime] = None
    expectedDeliveryDate: Optional[datetime] = None
    status: Optional[str] = Field(None, examples=["Draft"])
    notes: Optional[str] = None

    @field_validator("fromWarehouse", mode="before")
    @classmethod
    def check_from_warehouse(cls, v):
        if v is None:
            raise ValueError("Source warehouse is required")
        return rules.object_id(v, "Warehouse")

    # Declared after fromWarehouse so info.data already holds it
    @field_validator("toWarehouse", mode="before")
    @classmethod
    def check_to_warehouse(cls, v, info: ValidationInfo):
        if v is None:
            raise ValueError("Destination warehouse is required")
        rules.object_id(v, "Warehouse")
        return rules.differs_from(v, info.data.get("fromWarehouse"), SAME_WAREHOUSE_MESSAGE)

    @field_validator("items", mode="before")
    @classmethod
    def check_items(cls, v):
        return rules.non_empty_list(v, "item")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, TRANSFER_STATUSES, "Status")

    @field_validator("notes", mode="before")
    @classmethod
    def check_notes(cls, v):
        return rules.optional_text(v, "Notes", 500)


class TransferUpdate(BaseModel):
    fromWarehouse: Optional[str] = None
    toWarehouse: Optional[str] = None
    items: Optional[List[TransferItem]] = None
    expectedDeliveryDate: Optional[datetime] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("fromWarehouse", mode="before")
    @classmethod
    def check_from_warehouse(cls, v):
        return rules.object_id(v, "Warehouse")

    @field_validator("toWarehouse", mode="before")
    @classmethod
    def check_to_warehouse(cls, v, info: ValidationInfo):
        rules.object_id(v, "Warehouse")
        return rules.differs_from(v, info.data.get("fromWarehouse"), SAME_WAREHOUSE_MESSAGE)

    @field_validator("items", mode="before")
    @classmethod
    def check_items(cls, v):
        if v is None:
            return v
        return rules.non_empty_list(v, "item")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, TRANSFER_STATUSES, "Status")

    @field_validator("notes", mode="before")
    @classmethod
    def check_notes(cls, v):
        return rules.optional_text(v, "Notes", 500)


class TransferQuery(ListQuery):
    fromWarehouse: Optional[str] = None
    toWarehouse: Optional[str] = None
    status: Optional[str] = None

    @field_validator("fromWarehouse", "toWarehouse", mode="before")
    @classmethod
    def check_warehouse(cls, v):
        return rules.object_id(v, "Warehouse")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, TRANSFER_STATUSES, "Status")


class TransferDocument(TransferCreate):
    transferID: str
    status: str = "Draft"
    requestDate: datetime = Field(default_factory=_now_utc)


def transform_transfer(transfer):
    if not transfer:
        return None

    return {
        "transfer_Id": str(transfer["_id"]),
        "transferID": transfer.get("transferID"),
        "fromWarehouse": transfer.get("fromWarehouse"),
        "toWarehouse": transfer.get("toWarehouse"),
        "items": transfer.get("items"),
        "requestDate": transfer.get("requestDate"),
        "expectedDeliveryDate": transfer.get("expectedDeliveryDate"),
        "status": transfer.get("status"),
        "notes": transfer.get("notes"),
    }


TRANSFER_RESOURCE = ResourceConfig(
    entity="InventoryTransfer",
    plural="transfers",
    collection=COLLECTION_TRANSFERS,
    prefix="TR-",
    domain_id_field="transferID",
    internal_id_key="transfer_Id",
    document_model=TransferDocument,
    transform=transform_transfer,
    filters={
        "fromWarehouse": FilterField("fromWarehouse"),
        "toWarehouse": FilterField("toWarehouse"),
        "status": FilterField("status"),
        **DATE_RANGE_FILTERS,
    },
    search_fields=("transferID", "status", "notes"),
    default_sort="-createdAt",
    sortable_fields=("requestDate", "expectedDeliveryDate", "status"),
)
