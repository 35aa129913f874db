"""
Use cases: Read one letter, list a writer's letters.

Input: LetterQuery / user id
Output: Letter / list of Letter
Side effects: Reading a letter whose date has passed delivers it.
Failure cases: NOT_FOUND, FORBIDDEN (not the author, or still sealed),
    INVALID_ID.
"""

import logging
from datetime import datetime
from typing import Callable
from uuid import UUID

from futureself.application.letters.common import (
    ensure_delivered,
    load_owned_letter,
    save_letter,
)
from futureself.application.letters.dtos import LetterQuery
from futureself.domain.letters.entities import Letter, utc_now
from futureself.domain.letters.ports import LetterRepository

logger = logging.getLogger(__name__)


def deliver(repo: LetterRepository, letter: Letter, now: datetime) -> Letter:
    """Mark a due letter delivered. The delivery date rule is not rechecked."""
    letter.is_delivered = True
    stored = save_letter(
        repo, letter, now, is_new=False, previous_delivered_at=letter.delivered_at
    )
    logger.info("Letter delivered: id=%s", stored.id)
    return stored


class GetLetterUseCase:
    """Opens a letter for its author once it has been delivered."""

    def __init__(
        self,
        letter_repo: LetterRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._letter_repo = letter_repo
        self._clock = clock

    def execute(self, query: LetterQuery) -> Letter:
        letter = load_owned_letter(self._letter_repo, query.letter_id, query.user_id)
        now = self._clock()
        if letter.is_due(now):
            letter = deliver(self._letter_repo, letter, now)
        ensure_delivered(letter)
        return letter


class ListLettersUseCase:
    """Lists a writer's letters, sealed ones included."""

    def __init__(self, letter_repo: LetterRepository) -> None:
        self._letter_repo = letter_repo

    def execute(self, user_id: UUID) -> list[Letter]:
        return self._letter_repo.list_for_user(user_id)


class DeliverDueLettersUseCase:
    """Delivers every letter of a writer whose date has passed."""

    def __init__(
        self,
        letter_repo: LetterRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._letter_repo = letter_repo
        self._clock = clock

    def execute(self, user_id: UUID) -> list[Letter]:
        """Return the letters delivered by this call."""
        now = self._clock()
        return [
            deliver(self._letter_repo, letter, now)
            for letter in self._letter_repo.list_for_user(user_id)
            if letter.is_due(now)
        ]
