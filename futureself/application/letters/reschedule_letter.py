"""
Use case: Move a sealed letter's delivery date.

Input: RescheduleLetterCommand
Output: Letter (as stored)
Side effects: One letter updated.
Failure cases: VALIDATION (already delivered, date under a week away),
    NOT_FOUND, FORBIDDEN, INVALID_ID.
"""

import logging
from datetime import datetime
from typing import Callable

from futureself.application.letters.common import load_owned_letter, save_letter
from futureself.application.letters.create_letter import MISSING_DATE_MESSAGE
from futureself.application.letters.dtos import RescheduleLetterCommand
from futureself.domain.letters.entities import Letter, utc_now
from futureself.domain.letters.intervals import compute_delivery_date
from futureself.domain.letters.ports import LetterRepository
from futureself.shared.errors import AppError

logger = logging.getLogger(__name__)

ALREADY_DELIVERED_MESSAGE = "Delivered letters cannot be rescheduled"


class RescheduleLetterUseCase:
    """Picks a new delivery date, counted from today."""

    def __init__(
        self,
        letter_repo: LetterRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._letter_repo = letter_repo
        self._clock = clock

    def execute(self, command: RescheduleLetterCommand) -> Letter:
        letter = load_owned_letter(
            self._letter_repo, command.letter_id, command.user_id
        )
        if letter.is_delivered:
            raise AppError.validation(
                ALREADY_DELIVERED_MESSAGE,
                fields={"delivered_at": ALREADY_DELIVERED_MESSAGE},
            )

        now = self._clock()
        delivered_at = compute_delivery_date(command.delivery_interval, now)
        if delivered_at is None:
            delivered_at = command.delivered_at
        if delivered_at is None:
            raise AppError.validation(
                MISSING_DATE_MESSAGE, fields={"delivered_at": MISSING_DATE_MESSAGE}
            )

        previous = letter.delivered_at
        letter.delivery_interval = command.delivery_interval
        letter.delivered_at = delivered_at
        stored = save_letter(
            self._letter_repo, letter, now, is_new=False, previous_delivered_at=previous
        )
        logger.info(
            "Letter rescheduled: id=%s interval=%s", stored.id, stored.delivery_interval
        )
        return stored
