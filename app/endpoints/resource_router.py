# app/endpoints/resource_router.py

from typing import Annotated, Optional, Type

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel

from app.core.errors import NotFoundError, ValidationError
from app.core.security import require_api_key
from app.models import rules
from app.models.resource import ResourceConfig
from app.services.resource_service import ResourceService
from app.utiles.decoratores import handle_exceptions
from app.utiles.logger import get_logger
from app.utiles.response import send_response

# Logger instance for this module
logger = get_logger(__name__)


def build_resource_router(
    config: ResourceConfig,
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    query_model: Type[BaseModel],
    service: Optional[ResourceService] = None,
) -> APIRouter:
    """
    Build the eight CRUD/search endpoints for one resource.

    Every route requires an API key; every handler is wrapped by
    handle_exceptions so storage failures come out as AppErrors.
    """
    service = service or ResourceService(config)
    entity = config.entity
    plural = config.plural
    id_key = config.internal_id_key
    domain_field = config.domain_id_field

    router = APIRouter(
        prefix=f"/{plural}",
        tags=[f"{entity} Management"],
        dependencies=[Depends(require_api_key)],
    )
    guard = handle_exceptions(entity=entity, id_field=id_key)

    # ======================================================
    # Path / query checks (run before any handler)
    # ======================================================
    async def valid_internal_id(internal_id: str = Path(..., description=f"{entity} internal id (24 hex chars)")) -> str:
        if not rules.is_object_id(internal_id):
            raise ValidationError.single(id_key, internal_id, f"Invalid {entity} ID format")
        return internal_id

    async def valid_domain_id(domain_id: str = Path(..., description=f"{entity} ID ({config.domain_id_example})")) -> str:
        if not config.domain_id_regex.match(domain_id):
            raise ValidationError.single(
                domain_field, domain_id, f"{entity} ID should be in the format {config.domain_id_example}"
            )
        return domain_id

    async def valid_search_term(term: Optional[str] = Query(None, description="At least 2 characters")) -> str:
        try:
            return rules.search_term(term)
        except ValueError as e:
            raise ValidationError.single("term", term, str(e))

    # ---------------- List ----------------
    @router.get("")
    @guard
    async def list_resources(query: Annotated[query_model, Query()]):
        """
        Endpoint: List with filters, sorting and pagination.
        Calls service layer → ResourceService.list.
        """
        params = query.model_dump(exclude_none=True)
        logger.info("API Request → List %s: %s", plural, params)
        result = await service.list(params)
        items = [config.transform(doc) for doc in result["items"]]
        message = f"{plural.title()} retrieved successfully" if items else f"No {plural} found"
        logger.info("API Response → %d %s (total=%d)", len(items), plural, result["pagination"]["total"])
        return send_response(200, message, {plural: items, "pagination": result["pagination"]})

    # ---------------- Search ----------------
    @router.get("/search")
    @guard
    async def search_resources(term: str = Depends(valid_search_term)):
        """
        Endpoint: Substring search, max 20 results, no pagination.
        Calls service layer → ResourceService.search.
        """
        logger.info("API Request → Search %s: term=%s", plural, term)
        results = [config.transform(doc) for doc in await service.search(term)]
        if not results:
            logger.info("API Response → No %s matched '%s'", plural, term)
            return send_response(200, f"No {plural} found matching '{term}'", [])
        logger.info("API Response → Search completed. Found %s %s", len(results), plural)
        return send_response(200, "Search results retrieved successfully", results)

    # ---------------- Get by domain ID ----------------
    @router.get(f"/{domain_field}/{{domain_id}}")
    @guard
    async def get_by_domain_id(domain_id: str = Depends(valid_domain_id)):
        logger.info("API Request → Get %s by %s=%s", entity, domain_field, domain_id)
        doc = await service.get_by_domain_id(domain_id)
        if not doc:
            logger.warning("API Response → %s not found: %s=%s", entity, domain_field, domain_id)
            raise NotFoundError(entity, domain_field, domain_id)
        return send_response(200, f"{entity} retrieved successfully", config.transform(doc))

    # ---------------- Get by internal ID ----------------
    @router.get("/{internal_id}")
    @guard
    async def get_by_id(internal_id: str = Depends(valid_internal_id)):
        logger.info("API Request → Get %s by %s=%s", entity, id_key, internal_id)
        doc = await service.get_by_id(internal_id)
        if not doc:
            logger.warning("API Response → %s not found: %s=%s", entity, id_key, internal_id)
            raise NotFoundError(entity, id_key, internal_id)
        return send_response(200, f"{entity} retrieved successfully", config.transform(doc))

    # ---------------- Create ----------------
    @router.post("", status_code=201)
    @guard
    async def create_resource(payload: create_model):
        """
        Endpoint: Create. The domain ID is always generated server-side.
        Calls service layer → ResourceService.create.
        """
        data = payload.model_dump(exclude_none=True)
        data.pop(domain_field, None)
        logger.info("API Request → Create %s: name=%s", entity, data.get("name"))
        doc = await service.create(data)
        logger.info("API Response → %s created: %s=%s", entity, domain_field, doc.get(domain_field))
        return send_response(201, f"{entity} created successfully", config.transform(doc))

    # ---------------- Update ----------------
    @router.put("/{internal_id}")
    @guard
    async def update_resource(payload: update_model, internal_id: str = Depends(valid_internal_id)):
        """
        Endpoint: Partial update. The domain ID cannot be changed.
        Calls service layer → ResourceService.update.
        """
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        # An empty body still matches, like a no-op update
        changes.pop(domain_field, None)
        logger.info("API Request → Update %s: %s=%s fields=%s", entity, id_key, internal_id, sorted(changes))
        doc = await service.update(internal_id, changes)
        if not doc:
            raise NotFoundError(entity, id_key, internal_id)
        logger.info("API Response → %s updated successfully: %s=%s", entity, id_key, internal_id)
        return send_response(200, f"{entity} updated successfully", config.transform(doc))

    # ---------------- Delete ----------------
    @router.delete("/{internal_id}")
    @guard
    async def delete_resource(internal_id: str = Depends(valid_internal_id)):
        logger.info("API Request → Delete %s: %s=%s", entity, id_key, internal_id)
        result = await service.delete(internal_id)
        if result["deletedCount"] == 0:
            raise NotFoundError(entity, id_key, internal_id)
        logger.info("API Response → %s deleted successfully: %s=%s", entity, id_key, internal_id)
        return send_response(200, f"{entity} deleted successfully", result)

    # ---------------- Delete all ----------------
    @router.delete("")
    @guard
    async def delete_all_resources():
        """
        Endpoint: Delete every document of this resource. No confirmation step.
        Calls service layer → ResourceService.delete_all.
        """
        logger.warning("API Request → Delete ALL %s", plural)
        result = await service.delete_all()
        if result["deletedCount"]:
            message = f"{result['deletedCount']} {plural} deleted successfully"
        else:
            message = f"No {plural} to delete"
        return send_response(200, message, result)

    return router
