# app/db/repository.py
"""
Storage adapter around one Motor collection.

Exposes the handful of document-store operations the services need and turns
driver failures into typed storage errors:

- malformed ObjectId strings      -> CastError
- documents failing the schema    -> StorageValidationError
- unique index violations (11000) -> DuplicateKeyStorageError

Everything else raised by the driver propagates untouched.
"""
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.errors import FieldViolation, violations_from_pydantic
from app.db import mongodb
from app.utiles.custom_helpers import _now_utc
from app.utiles.logger import get_logger

logger = get_logger(__name__)

_DUP_KEY_RE = re.compile(r'dup key: \{\s*"?([\w.]+)"?\s*:\s*"?([^"}]*?)"?\s*\}')

# Fields the adapter owns; never taken from a payload
_MANAGED_FIELDS = ("_id", "createdAt", "updatedAt")


# ----------------------------
# Storage errors
# ----------------------------
class StorageError(Exception):
    """Base class for typed failures raised by the storage adapter."""


class CastError(StorageError):
    def __init__(self, path: str, value: Any, kind: str = "ObjectId"):
        super().__init__(f'Cast to {kind} failed for value "{value}" at path "{path}"')
        self.path = path
        self.value = value
        self.kind = kind


class StorageValidationError(StorageError):
    def __init__(self, violations: List[FieldViolation]):
        super().__init__("; ".join(f"{v.field}: {v.message}" for v in violations))
        self.violations = violations


class DuplicateKeyStorageError(StorageError):
    def __init__(self, field: Optional[str] = None, value: Any = None):
        super().__init__(f"E11000 duplicate key error on {field or 'unknown key'}")
        self.field = field
        self.value = value

    @classmethod
    def from_driver(cls, exc: Exception) -> "DuplicateKeyStorageError":
        details = getattr(exc, "details", None) or {}
        key_value = details.get("keyValue") or {}
        if key_value:
            field, value = next(iter(key_value.items()))
            return cls(field, value)
        key_pattern = details.get("keyPattern") or {}
        if key_pattern:
            return cls(next(iter(key_pattern)))
        match = _DUP_KEY_RE.search(str(exc))
        if match:
            return cls(match.group(1), match.group(2))
        return cls()


def to_object_id(value: Any, path: str = "_id") -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise CastError(path, value) from exc


def _deep_merge(base: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# ----------------------------
# Repository
# ----------------------------
class MongoRepository:
    """
    Thin async wrapper over ``mongodb.db[collection_name]``.

    ``document_model`` is the storage-level schema: every insert and every
    merged update is validated against it before it reaches MongoDB.
    """

    def __init__(self, collection_name: str, document_model: Type[BaseModel]):
        self.collection_name = collection_name
        self.document_model = document_model

    @property
    def collection(self):
        # Resolved per call so a swapped client (tests, reconnects) is picked up
        return mongodb.db[self.collection_name]

    def _validate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            model = self.document_model.model_validate(data)
        except PydanticValidationError as exc:
            violations = violations_from_pydantic(exc.errors())
            logger.warning("Schema validation failed on %s: %s", self.collection_name, violations)
            raise StorageValidationError(violations) from exc
        return model.model_dump(exclude_none=True)

    async def find(
        self,
        filter_: Dict[str, Any],
        sort: Optional[Sequence[Tuple[str, int]]] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        cursor = self.collection.find(filter_)
        if sort:
            cursor = cursor.sort(list(sort))
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [doc async for doc in cursor]

    async def find_one(
        self, filter_: Dict[str, Any], sort: Optional[Sequence[Tuple[str, int]]] = None
    ) -> Optional[Dict[str, Any]]:
        if sort:
            return await self.collection.find_one(filter_, sort=list(sort))
        return await self.collection.find_one(filter_)

    async def find_by_id(self, internal_id: Any) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"_id": to_object_id(internal_id)})

    async def count_documents(self, filter_: Dict[str, Any]) -> int:
        return await self.collection.count_documents(filter_)

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        payload = {k: v for k, v in data.items() if k not in _MANAGED_FIELDS}
        doc = self._validate(payload)
        now = _now_utc()
        doc["createdAt"] = now
        doc["updatedAt"] = now
        try:
            result = await self.collection.insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateKeyStorageError.from_driver(exc) from exc
        doc["_id"] = result.inserted_id
        logger.info("Inserted into %s: _id=%s", self.collection_name, result.inserted_id)
        return doc

    async def find_by_id_and_update(
        self, internal_id: Any, changes: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Apply a partial update; the merged document must still satisfy the schema."""
        object_id = to_object_id(internal_id)
        existing = await self.collection.find_one({"_id": object_id})
        if existing is None:
            return None

        current = {k: v for k, v in existing.items() if k not in _MANAGED_FIELDS}
        patch = {k: v for k, v in changes.items() if k not in _MANAGED_FIELDS}
        doc = self._validate(_deep_merge(current, patch))
        doc["updatedAt"] = _now_utc()
        try:
            return await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": doc},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            raise DuplicateKeyStorageError.from_driver(exc) from exc

    async def delete_one(self, internal_id: Any) -> int:
        result = await self.collection.delete_one({"_id": to_object_id(internal_id)})
        return result.deleted_count

    async def delete_many(self, filter_: Dict[str, Any]) -> int:
        result = await self.collection.delete_many(filter_)
        return result.deleted_count
