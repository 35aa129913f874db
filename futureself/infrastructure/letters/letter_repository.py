"""
Adapter: Letter persistence.

Implements the LetterRepository port on top of a document collection.
Letters are validated against LetterDocument on every write.
"""

import dataclasses
import logging
from typing import Any, Optional
from uuid import UUID

from futureself.domain.letters.entities import (
    Goal,
    GoalRef,
    Letter,
    Reflection,
    Song,
)
from futureself.domain.letters.ports import LetterId, LetterRepository
from futureself.infrastructure.document_store import DocumentCollection, parse_id
from futureself.infrastructure.letters.documents import LetterDocument

logger = logging.getLogger(__name__)

LETTERS_COLLECTION = "letters"


def to_document(letter: Letter) -> dict[str, Any]:
    """Validate a letter and return its stored form.

    Raises:
        pydantic.ValidationError: If any field breaks its constraint.
    """
    validated = LetterDocument.model_validate(dataclasses.asdict(letter))
    return validated.model_dump()


def _goal_ref(data: Optional[dict[str, Any]]) -> Optional[GoalRef]:
    if data is None:
        return None
    return GoalRef(letter_id=data["letter_id"], goal_id=data["goal_id"])


def from_document(document: dict[str, Any]) -> Letter:
    """Rebuild a Letter entity from its stored form."""
    data = dict(document)
    data["goals"] = [
        Goal(
            **{
                **goal,
                "carried_forward_to": _goal_ref(goal.get("carried_forward_to")),
                "carried_forward_from": _goal_ref(goal.get("carried_forward_from")),
            }
        )
        for goal in document.get("goals", [])
    ]
    data["reflections"] = [Reflection(**item) for item in document.get("reflections", [])]
    data["song"] = Song(**document["song"]) if document.get("song") else None
    return Letter(**data)


class DocumentLetterRepository(LetterRepository):
    """Concrete LetterRepository backed by a document collection."""

    def __init__(self, collection: DocumentCollection) -> None:
        self._collection = collection

    def add(self, letter: Letter) -> Letter:
        stored = self._collection.insert(to_document(letter))
        logger.info("Letter stored: id=%s user=%s", letter.id, letter.user_id)
        return from_document(stored)

    def get(self, letter_id: LetterId) -> Optional[Letter]:
        document = self._collection.find_by_id(letter_id)
        return from_document(document) if document is not None else None

    def list_for_user(self, user_id: UUID) -> list[Letter]:
        documents = self._collection.find(lambda doc: doc["user_id"] == user_id)
        return sorted(
            (from_document(doc) for doc in documents), key=lambda item: item.created_at
        )

    def update(self, letter: Letter) -> Letter:
        stored = self._collection.replace(to_document(letter))
        return from_document(stored)

    def delete(self, letter_id: LetterId) -> bool:
        deleted = self._collection.delete(parse_id(letter_id))
        if deleted:
            logger.info("Letter deleted: id=%s", letter_id)
        return deleted
