# app/models/purchase.py
"""
Purchase orders raised against a supplier. Like orders, ``totalAmount`` is
derived from the line items by the storage schema.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.config import COLLECTION_PURCHASES
from app.models import rules
from app.models.common import ListQuery, RequestModel
from app.models.resource import DATE_RANGE_FILTERS, ResourceConfig
from app.utiles.custom_helpers import FilterField, _now_utc

PURCHASE_STATUSES = ("pending", "ordered", "received", "cancelled", "returned")
PAYMENT_STATUSES = ("unpaid", "partially_paid", "paid")


class PurchaseItem(BaseModel):
    product: str = Field(..., description="Product internal id")
    quantity: int = Field(..., examples=[50])
    price: float = Field(..., examples=[4.5])

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

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        return rules.non_negative(v, "Price")


class PurchaseCreate(RequestModel):
    supplier: str = Field(..., description="Supplier internal id")
    items: List[PurchaseItem] = Field(...)
    purchaseDate: Optional[datetime] = None
    status: Optional[str] = Field(None, examples=["pending"])
    paymentStatus: Optional[str] = Field(None, examples=["unpaid"])
    paymentDue: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("supplier", mode="before")
    @classmethod
    def check_supplier(cls, v):
        if v is None:
            raise ValueError("Supplier reference is required")
        return rules.object_id(v, "Supplier")

    @field_validator("items", mode="before")
    @classmethod
    def check_items(cls, v):
        return rules.non_empty_list(v, "item")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, PURCHASE_STATUSES, "Status")

    @field_validator("paymentStatus", mode="before")
    @classmethod
    def check_payment_status(cls, v):
        return rules.one_of(v, PAYMENT_STATUSES, "Payment status")

    @field_validator("notes", mode="before")
    @classmethod
    def check_notes(cls, v):
        return rules.optional_text(v, "Notes", 500)


class PurchaseUpdate(BaseModel):
    items: Optional[List[PurchaseItem]] = None
    status: Optional[str] = None
    paymentStatus: Optional[str] = None
    paymentDue: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("items", mode="before")
    @classmethod
    def check_items(cls, v):
        if v is None:
            return v
        return rules.non_empty_list(v, "item")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, PURCHASE_STATUSES, "Status")

    @field_validator("paymentStatus", mode="before")
    @classmethod
    def check_payment_status(cls, v):
        return rules.one_of(v, PAYMENT_STATUSES, "Payment status")

    @field_validator("notes", mode="before")
    @classmethod
    def check_notes(cls, v):
        return rules.optional_text(v, "Notes", 500)


class PurchaseQuery(ListQuery):
    supplier: Optional[str] = None
    status: Optional[str] = None
    paymentStatus: Optional[str] = None

    @field_validator("supplier", mode="before")
    @classmethod
    def check_supplier(cls, v):
        return rules.object_id(v, "Supplier")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, PURCHASE_STATUSES, "Status")

    @field_validator("paymentStatus", mode="before")
    @classmethod
    def check_payment_status(cls, v):
        return rules.one_of(v, PAYMENT_STATUSES, "Payment status")


class PurchaseDocument(PurchaseCreate):
    purchaseID: str
    status: str = "pending"
    paymentStatus: str = "unpaid"
    purchaseDate: datetime = Field(default_factory=_now_utc)
    totalAmount: float = 0

    @model_validator(mode="after")
    def compute_total(self):
        self.totalAmount = round(sum(item.price * item.quantity for item in self.items), 2)
        return self


def transform_purchase(purchase):
    if not purchase:
        return None

    return {
        "purchase_Id": str(purchase["_id"]),
        "purchaseID": purchase.get("purchaseID"),
        "supplier": purchase.get("supplier"),
        "items": purchase.get("items"),
        "totalAmount": purchase.get("totalAmount"),
        "purchaseDate": purchase.get("purchaseDate"),
        "status": purchase.get("status"),
        "paymentStatus": purchase.get("paymentStatus"),
        "paymentDue": purchase.get("paymentDue"),
        "notes": purchase.get("notes"),
    }


PURCHASE_RESOURCE = ResourceConfig(
    entity="Purchase",
    plural="purchases",
    collection=COLLECTION_PURCHASES,
    prefix="PU-",
    domain_id_field="purchaseID",
    internal_id_key="purchase_Id",
    document_model=PurchaseDocument,
    transform=transform_purchase,
    filters={
        "supplier": FilterField("supplier"),
        "status": FilterField("status"),
        "paymentStatus": FilterField("paymentStatus"),
        **DATE_RANGE_FILTERS,
    },
    search_fields=("purchaseID", "status", "paymentStatus", "notes"),
    default_sort="-createdAt",
    sortable_fields=("purchaseDate", "totalAmount", "status", "paymentStatus", "paymentDue"),
)
