from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from app.core.config import COLLECTION_PRODUCTS
from app.models import rules
from app.models.common import ListQuery, RequestModel
from app.models.resource import DATE_RANGE_FILTERS, ResourceConfig
from app.utiles.custom_helpers import FilterField

PRODUCT_CATEGORIES = ("Electronics", "Clothing", "Food", "Furniture", "Other")


class ProductCreate(RequestModel):
    name: str = Field(..., examples=["Cordless Drill"])
    description: Optional[str] = None
    price: float = Field(..., examples=[129.99])
    quantity: int = Field(..., examples=[40])
    category: str = Field(..., examples=["Electronics"])
    supplier: str = Field(..., description="Supplier internal id (24 hex chars)")
    sku: Optional[str] = Field(None, examples=["DRL-18V-001"])

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return rules.required_text(v, "Product name", 100)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, v):
        return rules.optional_text(v, "Description", 500)

    @field_validator("price", "quantity", mode="before")
    @classmethod
    def check_present(cls, v, info: ValidationInfo):
        return rules.required_value(v, info.field_name.title())

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        return rules.non_negative(v, "Price")

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        return rules.non_negative(v, "Quantity")

    @field_validator("category", mode="before")
    @classmethod
    def check_category(cls, v):
        if v is None:
            raise ValueError("Category is required")
        return rules.one_of(v, PRODUCT_CATEGORIES, "Category")

    @field_validator("supplier", mode="before")
    @classmethod
    def check_supplier(cls, v):
        if v is None:
            raise ValueError("Supplier reference is required")
        return rules.object_id(v, "Supplier")

    @field_validator("sku", mode="before")
    @classmethod
    def check_sku(cls, v):
        v = rules.optional_text(v, "SKU", 50)
        return v.upper() if v else v


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[int] = None
    category: Optional[str] = None
    supplier: Optional[str] = None
    sku: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return rules.non_empty_text(v, "Product name", 100)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, v):
        return rules.optional_text(v, "Description", 500)

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        return rules.non_negative(v, "Price")

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        return rules.non_negative(v, "Quantity")

    @field_validator("category", mode="before")
    @classmethod
    def check_category(cls, v):
        return rules.one_of(v, PRODUCT_CATEGORIES, "Category")

    @field_validator("supplier", mode="before")
    @classmethod
    def check_supplier(cls, v):
        return rules.object_id(v, "Supplier")

    @field_validator("sku", mode="before")
    @classmethod
    def check_sku(cls, v):
        v = rules.optional_text(v, "SKU", 50)
        return v.upper() if v else v


class ProductQuery(ListQuery):
    name: Optional[str] = None
    category: Optional[str] = None
    supplier: Optional[str] = None
    minPrice: Optional[float] = Field(None, ge=0)
    maxPrice: Optional[float] = Field(None, ge=0)

    @field_validator("category", mode="before")
    @classmethod
    def check_category(cls, v):
        return rules.one_of(v, PRODUCT_CATEGORIES, "Category")

    @field_validator("supplier", mode="before")
    @classmethod
    def check_supplier(cls, v):
        return rules.object_id(v, "Supplier")


class ProductDocument(ProductCreate):
    productID: str


def transform_product(product):
    if not product:
        return None

    return {
        "product_Id": str(product["_id"]),
        "productID": product.get("productID"),
        "name": product.get("name"),
        "description": product.get("description"),
        "price": product.get("price"),
        "quantity": product.get("quantity"),
        "category": product.get("category"),
        "supplier": product.get("supplier"),
        "sku": product.get("sku"),
    }


PRODUCT_RESOURCE = ResourceConfig(
    entity="Product",
    plural="products",
    collection=COLLECTION_PRODUCTS,
    prefix="PR-",
    domain_id_field="productID",
    internal_id_key="product_Id",
    document_model=ProductDocument,
    transform=transform_product,
    filters={
        "name": FilterField("name", "regex"),
        "category": FilterField("category"),
        "supplier": FilterField("supplier"),
        "minPrice": FilterField("price", "gte"),
        "maxPrice": FilterField("price", "lte"),
        **DATE_RANGE_FILTERS,
    },
    search_fields=("name", "description", "sku"),
    default_sort="name",
    sortable_fields=("name", "price", "quantity", "category", "sku"),
)
