# app/services/resource_service.py
"""
Generic CRUD service shared by every resource.

One ``ResourceService`` per ``ResourceConfig``. Storage errors are not caught
here (the endpoints reclassify them); the only exception is ``create``, which
re-allocates the domain ID when a concurrent writer took the one it computed.
"""
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.db.repository import DuplicateKeyStorageError, MongoRepository
from app.models.resource import ResourceConfig
from app.services import id_allocator
from app.utiles.custom_helpers import (
    build_filter, get_pagination, get_sort, pagination_result, search_filter,
)
from app.utiles.logger import get_logger

logger = get_logger(__name__)


class ResourceService:
    def __init__(self, config: ResourceConfig, repository: Optional[MongoRepository] = None):
        self.config = config
        self.repository = repository or MongoRepository(config.collection, config.document_model)

    def _strip_domain_id(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(payload)
        if data.pop(self.config.domain_id_field, None) is not None:
            logger.warning("Discarded client-supplied %s", self.config.domain_id_field)
        return data

    def _prepare(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        data = self._strip_domain_id(payload)
        if self.config.before_write is not None:
            data = self.config.before_write(data)
        return data

    # --------------------------
    # Read
    # --------------------------
    async def list(self, query: Dict[str, Any]) -> Dict[str, Any]:
        """Filtered, sorted, paginated listing: {items, pagination}."""
        mongo_filter = build_filter(query, self.config.filters)
        paging = get_pagination(query, settings.DEFAULT_PAGE_SIZE)
        sort = get_sort(query.get("sort"), self.config.default_sort, self.config.allowed_sort_fields)
        logger.debug("Listing %s: filter=%s sort=%s paging=%s", self.config.plural, mongo_filter, sort, paging)

        items = await self.repository.find(mongo_filter, sort=sort, skip=paging["skip"], limit=paging["limit"])
        total = await self.repository.count_documents(mongo_filter)

        logger.info("Returning %d of %d %s", len(items), total, self.config.plural)
        return {
            "items": items,
            "pagination": pagination_result(total, paging["page"], paging["limit"]),
        }

    async def get_by_id(self, internal_id: str) -> Optional[Dict[str, Any]]:
        logger.debug("Fetching %s by _id=%s", self.config.entity, internal_id)
        return await self.repository.find_by_id(internal_id)

    async def get_by_domain_id(self, domain_id: str) -> Optional[Dict[str, Any]]:
        logger.debug("Fetching %s by %s=%s", self.config.entity, self.config.domain_id_field, domain_id)
        return await self.repository.find_one({self.config.domain_id_field: domain_id})

    async def search(self, term: str) -> List[Dict[str, Any]]:
        """Case-insensitive substring search, capped, without pagination metadata."""
        results = await self.repository.find(
            search_filter(term, list(self.config.search_fields)),
            sort=get_sort(None, self.config.default_sort),
            limit=settings.SEARCH_RESULT_LIMIT,
        )
        logger.info("Search '%s' matched %d %s", term, len(results), self.config.plural)
        return results

    # --------------------------
    # Write
    # --------------------------
    async def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        field = self.config.domain_id_field
        data = self._prepare(payload)

        attempt = 0
        while True:
            domain_id = await id_allocator.allocate_domain_id(self.repository, field, self.config.prefix)
            try:
                doc = await self.repository.create({**data, field: domain_id})
            except DuplicateKeyStorageError as e:
                # race: another request inserted the same domain ID first
                if attempt >= settings.ID_ALLOCATION_RETRIES or not await self._domain_id_taken(e, domain_id):
                    raise
                attempt += 1
                logger.warning("%s %s already taken, re-allocating (attempt %d)", field, domain_id, attempt)
                continue
            logger.info("%s created: %s=%s", self.config.entity, field, domain_id)
            return doc

    async def _domain_id_taken(self, error: DuplicateKeyStorageError, domain_id: str) -> bool:
        field = self.config.domain_id_field
        if error.field is not None:
            return error.field == field
        # Driver did not say which index fired; check the domain ID directly
        return await self.repository.find_one({field: domain_id}) is not None

    async def update(self, internal_id: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        changes = self._prepare(payload)
        doc = await self.repository.find_by_id_and_update(internal_id, changes)
        if doc:
            logger.info("%s updated: _id=%s fields=%s", self.config.entity, internal_id, sorted(changes))
        else:
            logger.warning("%s update matched nothing: _id=%s", self.config.entity, internal_id)
        return doc

    async def delete(self, internal_id: str) -> Dict[str, int]:
        deleted = await self.repository.delete_one(internal_id)
        logger.info("%s delete _id=%s deletedCount=%d", self.config.entity, internal_id, deleted)
        return {"deletedCount": deleted}

    async def delete_all(self) -> Dict[str, int]:
        deleted = await self.repository.delete_many({})
        logger.warning("Deleted ALL %s: deletedCount=%d", self.config.plural, deleted)
        return {"deletedCount": deleted}
