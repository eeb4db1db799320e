from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.config import settings
from app.models import rules


class RequestModel(BaseModel):
    """
    Base for create bodies. A missing required key is validated as None so the
    field's own rule reports it ("Supplier name is required") rather than
    pydantic's generic "Field required".
    """

    @model_validator(mode="before")
    @classmethod
    def fill_missing_required(cls, data):
        if isinstance(data, dict):
            missing = [
                name for name, info in cls.model_fields.items()
                if info.is_required() and name not in data
            ]
            if missing:
                data = {**data, **{name: None for name in missing}}
        return data


class Address(BaseModel):
    street: Optional[str] = Field(None, examples=["221B Baker Street"])
    city: Optional[str] = Field(None, examples=["London"])
    state: Optional[str] = Field(None, examples=["Greater London"])
    postalCode: Optional[str] = Field(None, examples=["NW1 6XE"])
    country: Optional[str] = Field(None, examples=["UK"])

    @field_validator("street", mode="before")
    @classmethod
    def check_street(cls, v):
        return rules.optional_text(v, "Street address", 100)

    @field_validator("city", mode="before")
    @classmethod
    def check_city(cls, v):
        return rules.optional_text(v, "City name", 50)

    @field_validator("state", mode="before")
    @classmethod
    def check_state(cls, v):
        return rules.optional_text(v, "State name", 50)

    @field_validator("postalCode", mode="before")
    @classmethod
    def check_postal_code(cls, v):
        return rules.optional_text(v, "Postal code", 20)

    @field_validator("country", mode="before")
    @classmethod
    def check_country(cls, v):
        return rules.optional_text(v, "Country name", 50)


class ContactInfo(BaseModel):
    phone: Optional[str] = Field(None, examples=["1234567890"])
    email: Optional[str] = Field(None, examples=["sales@acme.com"])

    @field_validator("phone", mode="before")
    @classmethod
    def check_phone(cls, v):
        return rules.phone(v)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return rules.email(v)


class ContactPerson(ContactInfo):
    name: Optional[str] = Field(None, examples=["Jane Doe"])

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        return rules.optional_text(v, "Contact name", 100)


class ListQuery(BaseModel):
    """Paging, sorting and creation-date range shared by every list endpoint."""
    page: Optional[int] = Field(None, ge=1)
    limit: Optional[int] = Field(None, ge=1, le=settings.MAX_PAGE_SIZE)
    sort: Optional[str] = Field(None, examples=["name,-createdAt"])
    createdFrom: Optional[datetime] = None
    createdTo: Optional[datetime] = None
