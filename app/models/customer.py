from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.core.config import COLLECTION_CUSTOMERS
from app.models import rules
from app.models.common import Address, ListQuery, RequestModel
from app.models.resource import DATE_RANGE_FILTERS, ResourceConfig
from app.utiles.custom_helpers import FilterField


class CustomerCreate(RequestModel):
    name: str = Field(..., examples=["Globex Retail"])
    email: str = Field(..., examples=["orders@globex.com"])
    phone: Optional[str] = Field(None, examples=["5551234567"])
    address: Optional[Address] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return rules.required_text(v, "Customer name", 100)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return rules.email(v, required=True)

    @field_validator("phone", mode="before")
    @classmethod
    def check_phone(cls, v):
        return rules.phone(v)


class CustomerUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return rules.non_empty_text(v, "Customer name", 100)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return rules.email(v)

    @field_validator("phone", mode="before")
    @classmethod
    def check_phone(cls, v):
        return rules.phone(v)


class CustomerQuery(ListQuery):
    name: Optional[str] = None
    email: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class CustomerDocument(CustomerCreate):
    customerID: str


def transform_customer(customer):
    if not customer:
        return None

    return {
        "customer_Id": str(customer["_id"]),
        "customerID": customer.get("customerID"),
        "name": customer.get("name"),
        "email": customer.get("email"),
        "phone": customer.get("phone"),
        "address": customer.get("address"),
    }


CUSTOMER_RESOURCE = ResourceConfig(
    entity="Customer",
    plural="customers",
    collection=COLLECTION_CUSTOMERS,
    prefix="CU-",
    domain_id_field="customerID",
    internal_id_key="customer_Id",
    document_model=CustomerDocument,
    transform=transform_customer,
    filters={
        "name": FilterField("name", "regex"),
        "email": FilterField("email", "regex"),
        "city": FilterField("address.city", "regex"),
        "country": FilterField("address.country", "regex"),
        **DATE_RANGE_FILTERS,
    },
    search_fields=("name", "email", "address.city"),
    default_sort="name",
    sortable_fields=("name", "email", "address.city", "address.country"),
)
