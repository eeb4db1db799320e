# app/models/order.py
"""
Customer orders. ``totalAmount`` is never taken from the client: the storage
schema recomputes it from the line items on every write.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.config import COLLECTION_ORDERS
from app.models import rules
from app.models.common import Address, ListQuery, RequestModel
from app.models.resource import DATE_RANGE_FILTERS, ResourceConfig
from app.utiles.custom_helpers import FilterField, _now_utc

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")


class OrderItem(BaseModel):
    product: str = Field(..., description="Product internal id")
    quantity: int = Field(..., examples=[2])
    priceAtOrder: float = Field(..., examples=[19.99])

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

    @field_validator("priceAtOrder")
    @classmethod
    def check_price(cls, v):
        return rules.non_negative(v, "Price")


class OrderCreate(RequestModel):
    customer: str = Field(..., description="Customer internal id")
    products: List[OrderItem] = Field(...)
    shippingAddress: Address = Field(...)
    orderDate: Optional[datetime] = None
    status: Optional[str] = Field(None, examples=["pending"])
    notes: Optional[str] = None

    @field_validator("customer", mode="before")
    @classmethod
    def check_customer(cls, v):
        if v is None:
            raise ValueError("Customer reference is required")
        return rules.object_id(v, "Customer")

    @field_validator("products", mode="before")
    @classmethod
    def check_products(cls, v):
        return rules.non_empty_list(v, "product")

    @field_validator("shippingAddress", mode="before")
    @classmethod
    def check_shipping_address(cls, v):
        return rules.required_value(v, "Shipping address")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, ORDER_STATUSES, "Status")

    @field_validator("notes", mode="before")
    @classmethod
    def check_notes(cls, v):
        return rules.optional_text(v, "Notes", 500)


class OrderUpdate(BaseModel):
    products: Optional[List[OrderItem]] = None
    shippingAddress: Optional[Address] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("products", mode="before")
    @classmethod
    def check_products(cls, v):
        if v is None:
            return v
        return rules.non_empty_list(v, "product")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, ORDER_STATUSES, "Status")

    @field_validator("notes", mode="before")
    @classmethod
    def check_notes(cls, v):
        return rules.optional_text(v, "Notes", 500)


class OrderQuery(ListQuery):
    customer: Optional[str] = None
    status: Optional[str] = None
    minTotal: Optional[float] = Field(None, ge=0)
    maxTotal: Optional[float] = Field(None, ge=0)

    @field_validator("customer", mode="before")
    @classmethod
    def check_customer(cls, v):
        return rules.object_id(v, "Customer")

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, ORDER_STATUSES, "Status")


class OrderDocument(OrderCreate):
    orderID: str
    status: str = "pending"
    orderDate: datetime = Field(default_factory=_now_utc)
    totalAmount: float = 0

    @model_validator(mode="after")
    def compute_total(self):
        self.totalAmount = round(sum(item.priceAtOrder * item.quantity for item in self.products), 2)
        return self


def transform_order(order):
    if not order:
        return None

    return {
        "order_Id": str(order["_id"]),
        "orderID": order.get("orderID"),
        "customer": order.get("customer"),
        "products": order.get("products"),
        "totalAmount": order.get("totalAmount"),
        "status": order.get("status"),
        "orderDate": order.get("orderDate"),
        "shippingAddress": order.get("shippingAddress"),
        "notes": order.get("notes"),
    }


ORDER_RESOURCE = ResourceConfig(
    entity="Order",
    plural="orders",
    collection=COLLECTION_ORDERS,
    prefix="OR-",
    domain_id_field="orderID",
    internal_id_key="order_Id",
    document_model=OrderDocument,
    transform=transform_order,
    filters={
        "customer": FilterField("customer"),
        "status": FilterField("status"),
        "minTotal": FilterField("totalAmount", "gte"),
        "maxTotal": FilterField("totalAmount", "lte"),
        **DATE_RANGE_FILTERS,
    },
    search_fields=("orderID", "status", "notes", "shippingAddress.city"),
    default_sort="-createdAt",
    sortable_fields=("orderDate", "totalAmount", "status"),
)
