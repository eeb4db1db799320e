from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.core.config import COLLECTION_SUPPLIERS
from app.models import rules
from app.models.common import Address, ContactInfo, ListQuery, RequestModel
from app.models.resource import DATE_RANGE_FILTERS, ResourceConfig
from app.utiles.custom_helpers import FilterField

SUPPLIER_STATUSES = ("Active", "Inactive", "Pending", "Blocked")


# ---------------------------
# Request Schemas
# ---------------------------
class SupplierCreate(RequestModel):
    name: str = Field(..., examples=["Acme Industrial Supply"])
    contact: Optional[ContactInfo] = None
    address: Optional[Address] = None
    status: Optional[str] = Field(None, examples=["Active"])

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return rules.required_text(v, "Supplier name", 100)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, SUPPLIER_STATUSES, "Status")


class SupplierUpdate(BaseModel):
    name: Optional[str] = None
    contact: Optional[ContactInfo] = None
    address: Optional[Address] = None
    status: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return rules.non_empty_text(v, "Supplier name", 100)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, SUPPLIER_STATUSES, "Status")


class SupplierQuery(ListQuery):
    name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    status: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return rules.one_of(v, SUPPLIER_STATUSES, "Status")


# ---------------------------
# DB Schema
# ---------------------------
class SupplierDocument(SupplierCreate):
    supplierID: str
    status: str = "Active"

    @field_validator("supplierID")
    @classmethod
    def check_supplier_id(cls, v):
        # Allocator may outgrow the padding, so storage accepts longer suffixes
        if not v.startswith("SP-") or not v[3:].isdigit():
            raise ValueError("Supplier ID must be in format SP-XXXXX")
        return v


# ---------------------------
# Output
# ---------------------------
def transform_supplier(supplier):
    """Public shape of a supplier. Status and timestamps stay internal."""
    if not supplier:
        return None

    return {
        "supplier_Id": str(supplier["_id"]),
        "supplierID": supplier.get("supplierID"),
        "name": supplier.get("name"),
        "contact": supplier.get("contact"),
        "address": supplier.get("address"),
    }


SUPPLIER_RESOURCE = ResourceConfig(
    entity="Supplier",
    plural="suppliers",
    collection=COLLECTION_SUPPLIERS,
    prefix="SP-",
    domain_id_field="supplierID",
    internal_id_key="supplier_Id",
    document_model=SupplierDocument,
    transform=transform_supplier,
    filters={
        "name": FilterField("name", "regex"),
        "city": FilterField("address.city", "regex"),
        "state": FilterField("address.state", "regex"),
        "country": FilterField("address.country", "regex"),
        "status": FilterField("status"),
        **DATE_RANGE_FILTERS,
    },
    search_fields=("name", "contact.email", "address.city"),
    default_sort="name",
    sortable_fields=("name", "status", "address.city", "address.country"),
)
