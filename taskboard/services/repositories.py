# taskboard/services/repositories.py
"""
Document repositories over MongoDB collections.

Repositories speak plain dicts with string ids. ObjectId conversion,
duplicate-key handling and connection failures stay in this module so
the services above never import pymongo.
"""
from contextlib import asynccontextmanager
from typing import Any, Dict, Iterable, List, Optional, Protocol
import logging

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from taskboard.core.exceptions import DuplicateRecordError, StoreUnavailableError, validation_error

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class DocumentRepository(Protocol):
    """Store operations the services rely on"""

    entity: str

    async def create(self, document: Document) -> Document: ...

    async def find_by_id(self, doc_id: str) -> Optional[Document]: ...

    async def find_one(self, query: Document) -> Optional[Document]: ...

    async def find_by_field(self, field: str, value: Any) -> Optional[Document]: ...

    async def find_many(self, query: Optional[Document] = None) -> List[Document]: ...

    async def find_by_ids(self, doc_ids: Iterable[str]) -> List[Document]: ...

    async def update_by_id(self, doc_id: str, changes: Document) -> Optional[Document]: ...

    async def delete_by_id(self, doc_id: str) -> bool: ...


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a string id, returning None when it cannot be an ObjectId"""
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would generate a fresh id
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except InvalidId:
        return None


class MongoRepository:
    """
    CRUD over one collection.

    Args:
        collection: Motor collection
        entity: Singular entity name used in errors and logs
        ref_fields: Fields holding ids of other documents, stored as ObjectId
    """

    def __init__(self, collection: Any, entity: str, ref_fields: Iterable[str] = ()):
        self.collection = collection
        self.entity = entity
        self.ref_fields = tuple(ref_fields)

    @asynccontextmanager
    async def _store_errors(self, operation: str):
        try:
            yield
        except DuplicateKeyError as e:
            logger.info(f"Duplicate key on {self.entity} {operation}")
            raise DuplicateRecordError(
                f"Duplicate {self.entity}",
                collection=getattr(self.collection, "name", None),
                details={"key": (e.details or {}).get("keyValue")}
            ) from e
        except ConnectionFailure as e:
            logger.error(f"MongoDB unavailable during {self.entity} {operation}: {type(e).__name__}")
            raise StoreUnavailableError(operation=f"{self.entity}.{operation}") from e

    def _to_storage(self, document: Document) -> Document:
        stored = dict(document)
        for field in self.ref_fields:
            if field in stored and stored[field] is not None:
                oid = to_object_id(stored[field])
                if oid is None:
                    raise validation_error(f"{field} is not a valid id", field, stored[field])
                stored[field] = oid
        return stored

    def _from_storage(self, document: Optional[Document]) -> Optional[Document]:
        if document is None:
            return None
        loaded = dict(document)
        loaded["_id"] = str(loaded["_id"])
        for field in self.ref_fields:
            if isinstance(loaded.get(field), ObjectId):
                loaded[field] = str(loaded[field])
        return loaded

    def _to_filter(self, query: Optional[Document]) -> Optional[Document]:
        """Convert id values in a query; None means nothing can match"""
        if not query:
            return {}
        converted = dict(query)
        for field in ("_id",) + self.ref_fields:
            if field in converted:
                oid = to_object_id(converted[field])
                if oid is None:
                    return None
                converted[field] = oid
        return converted

    async def create(self, document: Document) -> Document:
        stored = self._to_storage(document)
        async with self._store_errors("create"):
            result = await self.collection.insert_one(stored)
        stored["_id"] = result.inserted_id
        return self._from_storage(stored)

    async def find_by_id(self, doc_id: str) -> Optional[Document]:
        return await self.find_one({"_id": doc_id})

    async def find_one(self, query: Document) -> Optional[Document]:
        mongo_filter = self._to_filter(query)
        if mongo_filter is None:
            return None
        async with self._store_errors("find_one"):
            document = await self.collection.find_one(mongo_filter)
        return self._from_storage(document)

    async def find_by_field(self, field: str, value: Any) -> Optional[Document]:
        return await self.find_one({field: value})

    async def find_many(self, query: Optional[Document] = None) -> List[Document]:
        mongo_filter = self._to_filter(query)
        if mongo_filter is None:
            return []
        async with self._store_errors("find_many"):
            documents = await self.collection.find(mongo_filter).to_list(length=None)
        return [self._from_storage(d) for d in documents]

    async def find_by_ids(self, doc_ids: Iterable[str]) -> List[Document]:
        oids = [oid for oid in (to_object_id(i) for i in set(doc_ids)) if oid is not None]
        if not oids:
            return []
        async with self._store_errors("find_by_ids"):
            documents = await self.collection.find({"_id": {"$in": oids}}).to_list(length=None)
        return [self._from_storage(d) for d in documents]

    async def update_by_id(self, doc_id: str, changes: Document) -> Optional[Document]:
        """Apply ``changes`` with $set and return the updated document"""
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        if not changes:
            return await self.find_by_id(doc_id)
        async with self._store_errors("update"):
            document = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": self._to_storage(changes)},
                return_document=ReturnDocument.AFTER,
            )
        return self._from_storage(document)

    async def delete_by_id(self, doc_id: str) -> bool:
        oid = to_object_id(doc_id)
        if oid is None:
            return False
        async with self._store_errors("delete"):
            result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0
