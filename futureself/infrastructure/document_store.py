"""
In-memory document store.

A small document collection with create/read/update/delete, UUID
identifiers and optional unique indexes. It raises storage-level
failures (malformed id, duplicate key) in the shapes the error
normalizer recognises; it never raises AppError itself.

Documents are copied on the way in and out so callers cannot mutate
stored state by accident.
"""

import copy
import logging
import threading
from typing import Any, Callable, Iterable, Optional, Union
from uuid import UUID

logger = logging.getLogger(__name__)

Document = dict[str, Any]
DUPLICATE_KEY_CODE = 11000


class DocumentIdCastError(ValueError):
    """A value could not be parsed into a document id."""

    name = "CastError"

    def __init__(self, value: Any) -> None:
        super().__init__(f"Cast to UUID failed for value {value!r}")
        self.value = value


class DuplicateKeyError(Exception):
    """A write would duplicate a value held under a unique index."""

    code = DUPLICATE_KEY_CODE

    def __init__(self, collection: str, key_value: dict[str, Any]) -> None:
        super().__init__(
            f"E11000 duplicate key error collection: {collection} dup key: {key_value}"
        )
        self.collection = collection
        self.key_value = key_value


def parse_id(value: Union[str, UUID]) -> UUID:
    """Parse a raw identifier.

    Raises:
        DocumentIdCastError: If the value is not a UUID.
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as exc:
        raise DocumentIdCastError(value) from exc


class DocumentCollection:
    """A named set of documents keyed by their ``id`` field.

    Attributes:
        name: Collection name, used in failure messages and logs.
        unique_fields: Top-level fields that must be unique across documents.
    """

    def __init__(self, name: str, unique_fields: Iterable[str] = ()) -> None:
        self.name = name
        self.unique_fields = tuple(unique_fields)
        self._documents: dict[UUID, Document] = {}
        self._lock = threading.Lock()

    def insert(self, document: Document) -> Document:
        """Store a new document. Its ``id`` must not already exist."""
        doc_id = parse_id(document["id"])
        with self._lock:
            if doc_id in self._documents:
                raise DuplicateKeyError(self.name, {"id": str(doc_id)})
            self._check_unique(document, exclude=None)
            self._documents[doc_id] = copy.deepcopy(document)
        logger.debug("Inserted document into %s: id=%s", self.name, doc_id)
        return copy.deepcopy(document)

    def find_by_id(self, raw_id: Union[str, UUID]) -> Optional[Document]:
        doc_id = parse_id(raw_id)
        with self._lock:
            document = self._documents.get(doc_id)
            return copy.deepcopy(document) if document is not None else None

    def find(self, predicate: Callable[[Document], bool]) -> list[Document]:
        """Return copies of matching documents in insertion order."""
        with self._lock:
            return [
                copy.deepcopy(document)
                for document in self._documents.values()
                if predicate(document)
            ]

    def replace(self, document: Document) -> Document:
        """Overwrite an existing document.

        Raises:
            KeyError: If no document has this id.
        """
        doc_id = parse_id(document["id"])
        with self._lock:
            if doc_id not in self._documents:
                raise KeyError(f"No document {doc_id} in {self.name}")
            self._check_unique(document, exclude=doc_id)
            self._documents[doc_id] = copy.deepcopy(document)
        logger.debug("Replaced document in %s: id=%s", self.name, doc_id)
        return copy.deepcopy(document)

    def delete(self, raw_id: Union[str, UUID]) -> bool:
        doc_id = parse_id(raw_id)
        with self._lock:
            return self._documents.pop(doc_id, None) is not None

    def _check_unique(self, document: Document, exclude: Optional[UUID]) -> None:
        for field_name in self.unique_fields:
            value = document.get(field_name)
            if value is None:
                continue
            for other_id, other in self._documents.items():
                if other_id != exclude and other.get(field_name) == value:
                    raise DuplicateKeyError(self.name, {field_name: value})


class InMemoryDocumentStore:
    """Holds named collections for the lifetime of the process."""

    def __init__(self) -> None:
        self._collections: dict[str, DocumentCollection] = {}
        self._lock = threading.Lock()

    def collection(
        self, name: str, unique_fields: Iterable[str] = ()
    ) -> DocumentCollection:
        """Return the named collection, creating it on first use."""
        with self._lock:
            if name not in self._collections:
                self._collections[name] = DocumentCollection(name, unique_fields)
            return self._collections[name]
