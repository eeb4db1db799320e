import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple, Type

from pydantic import BaseModel

from app.core.config import settings
from app.utiles.custom_helpers import FilterField

# Every list endpoint accepts a creation date range
DATE_RANGE_FILTERS = {
    "createdFrom": FilterField("createdAt", "gte"),
    "createdTo": FilterField("createdAt", "lte"),
}


@dataclass(frozen=True)
class ResourceConfig:
    """Everything the generic service and router need to know about one resource."""
    entity: str                      # "Supplier"
    plural: str                      # "suppliers"; also the list payload key
    collection: str
    prefix: str                      # "SP-"
    domain_id_field: str             # "supplierID"
    internal_id_key: str             # "supplier_Id"
    document_model: Type[BaseModel]  # storage-level schema
    transform: Callable[[Optional[Dict[str, Any]]], Optional[Dict[str, Any]]]
    filters: Dict[str, FilterField] = field(default_factory=dict)
    search_fields: Tuple[str, ...] = ("name",)
    default_sort: str = "name"
    sortable_fields: Tuple[str, ...] = ("name",)
    # Applied to create/update payloads after request validation (e.g. password hashing)
    before_write: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None

    @property
    def allowed_sort_fields(self) -> Tuple[str, ...]:
        """Client-sortable fields; the domain ID and timestamps always are."""
        extra = (self.domain_id_field, "createdAt", "updatedAt")
        return tuple(dict.fromkeys(self.sortable_fields + extra))

    @property
    def domain_id_regex(self) -> "re.Pattern":
        return re.compile(rf"^{re.escape(self.prefix)}\d{{{settings.ID_PAD_WIDTH}}}$")

    @property
    def domain_id_example(self) -> str:
        return f"{self.prefix}{'x' * settings.ID_PAD_WIDTH}"
