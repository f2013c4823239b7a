"""
Petora Backend - Entity Store
==============================

What:  Create / find / replace / delete for each record kind, with optional
       reference expansion on reads.
How:   One `EntityStore` per MongoDB collection. Driver errors are translated
       at this boundary: a unique-index violation becomes DuplicateKeyError,
       every other PyMongoError becomes DatabaseError.
Who:   Used by the domain services; never by route handlers directly.

Identity rules:
    - Record identities are ObjectIds, exposed to clients as 24-hex strings.
    - An identity that is not a well-formed ObjectId matches nothing, so
      find/replace/delete return None ("not found") rather than failing.

Reference expansion:
    `expand={"shelterId": stores.shelters}` replaces the stored ObjectId in
    each returned document with the referenced document, or None when the
    reference does not resolve. References are not checked on write, so
    dangling ones are expected. For lists, all references of one field are
    resolved with a single `$in` query.

Timestamps:
    createdAt / updatedAt are set here. Replace keeps createdAt and
    refreshes updatedAt.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from pymongo.errors import PyMongoError

from petora import database as db
from petora.database import MongoDatabase
from petora.exceptions import DatabaseError, DuplicateKeyError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """ObjectId for a well-formed identity, None for anything else."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def _utcnow() -> datetime:
    # BSON dates hold milliseconds; truncate so create agrees with later reads
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class EntityStore:
    """
    Persistence operations for one collection.

    Args:
        database:        Connected MongoDatabase
        collection_name: Collection backing this entity kind
        entity_name:     Human-readable name used in error messages
    """

    def __init__(self, database: MongoDatabase, collection_name: str, entity_name: str):
        self.database = database
        self.collection_name = collection_name
        self.entity_name = entity_name

    @property
    def collection(self):
        return self.database.collection(self.collection_name)

    @contextmanager
    def _driver_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except MongoDuplicateKeyError as e:
            key_value = (e.details or {}).get("keyValue") or {}
            key = next(iter(key_value), None)
            logger.info("%s %s rejected: duplicate %s", self.entity_name, operation, key or "key")
            raise DuplicateKeyError(
                message=f"{self.entity_name} with this {key or 'value'} already exists.",
                key=key,
            ) from e
        except PyMongoError as e:
            logger.error(
                "MongoDB error during %s.%s: %s", self.collection_name, operation, str(e)
            )
            raise DatabaseError(
                context={
                    "collection": self.collection_name,
                    "operation": operation,
                    "error_type": type(e).__name__,
                },
            ) from e

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, document: Mapping[str, Any]) -> Document:
        now = _utcnow()
        # Both stamps share one instant on insert
        record = {**document, "createdAt": now, "updatedAt": now}
        with self._driver_errors("create"):
            result = await self.collection.insert_one(record)
        record["_id"] = result.inserted_id
        logger.debug("%s created: %s", self.entity_name, record["_id"])
        return record

    async def replace_by_id(self, entity_id: Any, document: Mapping[str, Any]) -> Optional[Document]:
        """
        Overwrite every schema field of the record with `document`.

        Returns the stored record after the write, or None if no record has
        that identity.
        """
        oid = parse_object_id(entity_id)
        if oid is None:
            return None
        # _id and createdAt are fixed at insert
        fields = {k: v for k, v in document.items() if k not in ("_id", "createdAt")}
        fields["updatedAt"] = _utcnow()
        with self._driver_errors("replace"):
            return await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )

    async def delete_by_id(self, entity_id: Any) -> Optional[Document]:
        """Remove the record; returns it, or None if it did not exist."""
        oid = parse_object_id(entity_id)
        if oid is None:
            return None
        with self._driver_errors("delete"):
            return await self.collection.find_one_and_delete({"_id": oid})

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        expand: Optional[Mapping[str, "EntityStore"]] = None,
    ) -> List[Document]:
        """All records whose fields equal every value in `filters`."""
        with self._driver_errors("find"):
            documents = await self.collection.find(dict(filters or {})).to_list(length=None)
        if expand:
            await self._expand(documents, expand)
        return documents

    async def find_one(self, filters: Mapping[str, Any]) -> Optional[Document]:
        with self._driver_errors("find_one"):
            return await self.collection.find_one(dict(filters))

    async def find_by_id(
        self,
        entity_id: Any,
        expand: Optional[Mapping[str, "EntityStore"]] = None,
    ) -> Optional[Document]:
        oid = parse_object_id(entity_id)
        if oid is None:
            return None
        with self._driver_errors("find_by_id"):
            document = await self.collection.find_one({"_id": oid})
        if document is not None and expand:
            await self._expand([document], expand)
        return document

    async def find_by_ids(self, ids: Iterable[ObjectId]) -> Dict[ObjectId, Document]:
        # Duplicates collapse; ObjectId is hashable
        unique_ids = list(set(ids))
        if not unique_ids:
            return {}
        with self._driver_errors("find_by_ids"):
            documents = await self.collection.find(
                {"_id": {"$in": unique_ids}}
            ).to_list(length=None)
        return {document["_id"]: document for document in documents}

    async def _expand(
        self,
        documents: List[Document],
        expand: Mapping[str, "EntityStore"],
    ) -> None:
        for field, target in expand.items():
            # One $in query per field, however many documents share it
            references = [doc.get(field) for doc in documents]
            resolved = await target.find_by_ids(
                ref for ref in references if isinstance(ref, ObjectId)
            )
            for doc in documents:
                if field not in doc:
                    continue
                ref = doc[field]
                # Unresolvable references expand to None
                doc[field] = resolved.get(ref) if isinstance(ref, ObjectId) else None


@dataclass
class Stores:
    """The four entity stores, built once per application."""

    shelters: EntityStore
    users: EntityStore
    pets: EntityStore
    applications: EntityStore

    @classmethod
    def for_database(cls, database: MongoDatabase) -> "Stores":
        return cls(
            shelters=EntityStore(database, db.SHELTERS, "Shelter"),
            users=EntityStore(database, db.USERS, "User"),
            pets=EntityStore(database, db.PETS, "Pet"),
            applications=EntityStore(database, db.APPLICATIONS, "Application"),
        )
