"""
Helpers shared by the letter use cases: ownership checks and the
single write path that applies the delivery date gate.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from futureself.domain.letters.delivery import as_utc, check_delivery_date
from futureself.domain.letters.entities import MAX_GOALS_PER_LETTER, Letter
from futureself.domain.letters.ports import LetterRepository
from futureself.shared.errors import AppError

SEALED_MESSAGE = "This letter has not been delivered yet"


def load_owned_letter(
    repo: LetterRepository, letter_id: str, user_id: UUID
) -> Letter:
    """Fetch a letter and check that ``user_id`` wrote it.

    Raises:
        AppError: NOT_FOUND if missing, FORBIDDEN if owned by someone else.
    """
    letter = repo.get(letter_id)
    if letter is None:
        raise AppError.not_found("Letter not found")
    if letter.user_id != user_id:
        raise AppError.forbidden()
    return letter


def ensure_delivered(letter: Letter) -> None:
    if not letter.is_delivered:
        raise AppError.forbidden(SEALED_MESSAGE)


def ensure_goal_capacity(letter: Letter, adding: int = 1) -> None:
    if len(letter.goals) + adding > MAX_GOALS_PER_LETTER:
        message = f"A letter can have at most {MAX_GOALS_PER_LETTER} goals"
        raise AppError.validation(message, fields={"goals": message})


def parse_goal_id(raw: str) -> UUID:
    try:
        return UUID(str(raw))
    except ValueError as exc:
        raise AppError.invalid_id() from exc


def save_letter(
    repo: LetterRepository,
    letter: Letter,
    now: datetime,
    *,
    is_new: bool,
    previous_delivered_at: Optional[datetime] = None,
) -> Letter:
    """Write a letter, enforcing the delivery date rule when it applies.

    The rule fires for new letters and for writes that change
    ``delivered_at``; any other update skips it.
    """
    letter.delivered_at = as_utc(letter.delivered_at)
    check_delivery_date(
        letter.delivered_at, now, is_new=is_new, previous=previous_delivered_at
    )
    letter.updated_at = now
    if is_new:
        return repo.add(letter)
    return repo.update(letter)
