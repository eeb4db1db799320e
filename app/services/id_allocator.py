# app/services/id_allocator.py
import re

from app.core.config import settings
from app.db.repository import MongoRepository
from app.utiles.logger import get_logger

logger = get_logger(__name__)


def format_domain_id(prefix: str, number: int, width: int) -> str:
    """Zero-pad to width; larger numbers simply grow more digits."""
    return f"{prefix}{number:0{width}d}"


async def allocate_domain_id(repository: MongoRepository, field: str, prefix: str, width: int = None) -> str:
    """
    Compute the next sequential domain ID (e.g. SP-00005) for a collection.

    The highest existing ID is read back from storage on every call, so
    deleted IDs are never reused and no counter lives in the process.
    Read-only: the caller persists the result, and the unique index on
    ``field`` catches two callers that computed the same value.
    """
    width = width or settings.ID_PAD_WIDTH
    latest = await repository.find_one(
        {field: {"$regex": f"^{re.escape(prefix)}"}},
        sort=[(field, -1)],
    )

    next_number = 1
    if latest:
        suffix = str(latest.get(field, ""))[len(prefix):]
        if suffix.isdigit():
            next_number = int(suffix) + 1
        else:
            logger.warning("Ignoring malformed %s '%s' while allocating", field, latest.get(field))

    domain_id = format_domain_id(prefix, next_number, width)
    logger.debug("Allocated %s=%s", field, domain_id)
    return domain_id
