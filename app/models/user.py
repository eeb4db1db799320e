# app/models/user.py
"""
User accounts. Passwords arrive in clear text with a confirmation, are
checked for strength, then hashed (bcrypt) before they reach storage. The
hash is never returned by the API.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from app.core.config import COLLECTION_USERS
from app.core.security import get_password_hash
from app.models import rules
from app.models.common import ListQuery, RequestModel
from app.models.resource import DATE_RANGE_FILTERS, ResourceConfig
from app.utiles.custom_helpers import FilterField

USER_ROLES = ("USER", "SUPERVISOR", "MANAGER", "ADMIN", "SUPERADMIN")
PASSWORD_MISMATCH = "Passwords do not match"


def _username(v):
    v = rules.required_text(v, "Username", 30)
    if len(v) < 3:
        raise ValueError("Username must be at least 3 characters long")
    return v


class UserBase(RequestModel):
    username: str = Field(..., examples=["jdoe"])
    email: str = Field(..., examples=["jdoe@example.com"])
    fullName: Optional[str] = Field(None, examples=["Jane Doe"])
    role: Optional[str] = Field(None, examples=["USER"])
    isActive: Optional[bool] = None

    @field_validator("username", mode="before")
    @classmethod
    def check_username(cls, v):
        return _username(v)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return rules.email(v, required=True)

    @field_validator("fullName", mode="before")
    @classmethod
    def check_full_name(cls, v):
        return rules.optional_text(v, "Full name", 100)

    @field_validator("role", mode="before")
    @classmethod
    def check_role(cls, v):
        return rules.one_of(v, USER_ROLES, "Role")


class UserCreate(UserBase):
    password: str = Field(..., examples=["Secret@123"])
    confirmPassword: str = Field(..., examples=["Secret@123"])

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, v):
        rules.required_value(v, "Password")
        return rules.password(v)

    # Declared after password so info.data already holds it
    @field_validator("confirmPassword", mode="before")
    @classmethod
    def check_confirm_password(cls, v, info: ValidationInfo):
        rules.required_value(v, "Password confirmation")
        return rules.matches(v, info.data.get("password"), PASSWORD_MISMATCH)


class UserUpdate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    fullName: Optional[str] = None
    role: Optional[str] = None
    isActive: Optional[bool] = None
    password: Optional[str] = None
    # Validated even when omitted so a new password without confirmation fails
    confirmPassword: Optional[str] = Field(None, validate_default=True)

    @field_validator("username", mode="before")
    @classmethod
    def check_username(cls, v):
        return None if v is None else _username(v)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return rules.email(v)

    @field_validator("fullName", mode="before")
    @classmethod
    def check_full_name(cls, v):
        return rules.optional_text(v, "Full name", 100)

    @field_validator("role", mode="before")
    @classmethod
    def check_role(cls, v):
        return rules.one_of(v, USER_ROLES, "Role")

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, v):
        return rules.password(v)

    @field_validator("confirmPassword", mode="before")
    @classmethod
    def check_confirm_password(cls, v, info: ValidationInfo):
        if v is None and info.data.get("password") is None:
            return v
        return rules.matches(v, info.data.get("password"), PASSWORD_MISMATCH)


class UserQuery(ListQuery):
    username: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    isActive: Optional[bool] = None

    @field_validator("role", mode="before")
    @classmethod
    def check_role(cls, v):
        return rules.one_of(v, USER_ROLES, "Role")


class UserDocument(UserBase):
    """Stored shape: ``password`` holds the bcrypt hash."""
    userID: str
    password: str
    role: str = "USER"
    isActive: bool = True

    @field_validator("password", mode="before")
    @classmethod
    def check_password_hash(cls, v):
        return rules.required_value(v, "Password")


def hash_user_password(data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    data.pop("confirmPassword", None)
    if data.get("password"):
        data["password"] = get_password_hash(data["password"])
    return data


def transform_user(user):
    if not user:
        return None

    return {
        "user_Id": str(user["_id"]),
        "userID": user.get("userID"),
        "username": user.get("username"),
        "email": user.get("email"),
        "fullName": user.get("fullName"),
        "role": user.get("role"),
        "isActive": user.get("isActive"),
        "createdAt": user.get("createdAt"),
        "updatedAt": user.get("updatedAt"),
    }


USER_RESOURCE = ResourceConfig(
    entity="User",
    plural="users",
    collection=COLLECTION_USERS,
    prefix="USR-",
    domain_id_field="userID",
    internal_id_key="user_Id",
    document_model=UserDocument,
    transform=transform_user,
    filters={
        "username": FilterField("username", "regex"),
        "email": FilterField("email", "regex"),
        "role": FilterField("role"),
        "isActive": FilterField("isActive"),
        **DATE_RANGE_FILTERS,
    },
    search_fields=("userID", "username", "email", "fullName"),
    default_sort="username",
    sortable_fields=("username", "email", "fullName", "role"),
    before_write=hash_user_password,
)
