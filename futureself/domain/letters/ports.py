"""
Port interfaces (ABCs) for the letters bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from futureself.domain.letters.entities import Letter

LetterId = Union[str, UUID]


class LetterRepository(ABC):
    """Port for storing and retrieving letters.

    Identifiers may arrive as raw strings straight from a URL; parsing
    them is the store's job, and a malformed id is a store failure.
    """

    @abstractmethod
    def add(self, letter: Letter) -> Letter:
        """Persist a new letter and return it as stored."""
        raise NotImplementedError

    @abstractmethod
    def get(self, letter_id: LetterId) -> Optional[Letter]:
        """Return a letter by id, or None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def list_for_user(self, user_id: UUID) -> list[Letter]:
        """Return all letters written by a user, oldest first."""
        raise NotImplementedError

    @abstractmethod
    def update(self, letter: Letter) -> Letter:
        """Replace a stored letter and return it as stored."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, letter_id: LetterId) -> bool:
        """Delete a letter. Returns False if it did not exist."""
        raise NotImplementedError


class ReflectionAssistantPort(ABC):
    """Port for the AI service that helps the writer reflect.

    Implementations raise whatever their client raises; callers wrap
    failures into AI_SERVICE errors.
    """

    @abstractmethod
    def suggest_prompt(self, letter: Letter) -> str:
        """Return a short question inviting the writer to reflect."""
        raise NotImplementedError
