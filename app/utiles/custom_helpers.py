import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from app.core.errors import ValidationError

# Query keys consumed by pagination/sorting, never turned into filters
PAGING_KEYS = ("page", "limit", "sort")


# ----------------------------
# Helpers
# ----------------------------
def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class FilterField(NamedTuple):
    """Maps one query key onto a document field.

    op is one of "exact", "regex" (case-insensitive substring), "gte" or "lte".
    """
    field: str
    op: str = "exact"


def _contains(value: Any) -> Dict[str, str]:
    return {"$regex": re.escape(str(value)), "$options": "i"}


def build_filter(query: Dict[str, Any], filters: Dict[str, FilterField]) -> Dict[str, Any]:
    """Build a MongoDB filter from recognised query keys; unknown keys are dropped."""
    mongo_filter: Dict[str, Any] = {}
    for key, value in query.items():
        if key in PAGING_KEYS or value is None or value == "":
            continue
        field_spec = filters.get(key)
        if field_spec is None:
            continue

        if field_spec.op == "regex":
            condition = _contains(value)
        elif field_spec.op in ("gte", "lte"):
            condition = {f"${field_spec.op}": value}
        else:
            condition = value

        existing = mongo_filter.get(field_spec.field)
        # minX/maxX pairs target the same field and must be combined
        if isinstance(existing, dict) and isinstance(condition, dict):
            existing.update(condition)
        else:
            mongo_filter[field_spec.field] = condition
    return mongo_filter


def search_filter(term: str, fields: List[str]) -> Dict[str, Any]:
    return {"$or": [{field: _contains(term)} for field in fields]}


def _to_positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def get_pagination(query: Dict[str, Any], default_limit: int = 10) -> Dict[str, int]:
    page = _to_positive_int(query.get("page"), 1)
    limit = _to_positive_int(query.get("limit"), default_limit)
    return {"page": page, "limit": limit, "skip": (page - 1) * limit}


def get_sort(
    sort: Optional[str], default_sort: str, allowed: Optional[Sequence[str]] = None
) -> List[Tuple[str, int]]:
    """
    'name,-createdAt' -> [("name", 1), ("createdAt", -1)]

    With ``allowed`` set, any client field outside it (including an empty
    name such as a bare "-") is a 400 on ``sort``.
    """
    sort_spec = sort or default_sort
    fields = []
    for part in sort_spec.split(","):
        part = part.strip()
        if not part:
            continue
        name, direction = (part[1:], -1) if part.startswith("-") else (part, 1)
        if sort and allowed is not None and name not in allowed:
            raise ValidationError.single(
                "sort", sort, f"Cannot sort by '{name}'. Allowed fields: {', '.join(allowed)}"
            )
        fields.append((name, direction))
    if not fields and sort:
        return get_sort(None, default_sort)
    return fields


def pagination_result(total: int, page: int, limit: int) -> Dict[str, int]:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total / limit),
    }
