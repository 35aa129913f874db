"""
Use case: Write a new letter to the future.

Input: CreateLetterCommand
Output: Letter (as stored)
Side effects: One letter written.
Failure cases: VALIDATION (fields, delivery too soon, too many goals).
"""

import logging
from datetime import datetime
from typing import Callable

from futureself.application.letters.common import ensure_goal_capacity, save_letter
from futureself.application.letters.dtos import CreateLetterCommand
from futureself.domain.letters.entities import (
    DEFAULT_TITLE,
    Goal,
    Letter,
    Song,
    utc_now,
)
from futureself.domain.letters.intervals import compute_delivery_date
from futureself.domain.letters.ports import LetterRepository
from futureself.shared.errors import AppError

logger = logging.getLogger(__name__)

MISSING_DATE_MESSAGE = "Please choose a delivery date"


class CreateLetterUseCase:
    """Schedules and stores a new letter.

    The delivery date comes from the chosen interval, or from the
    writer for the custom interval, and must be a week out.
    """

    def __init__(
        self,
        letter_repo: LetterRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._letter_repo = letter_repo
        self._clock = clock

    def execute(self, command: CreateLetterCommand) -> Letter:
        """Run the create-letter use case.

        Args:
            command: Letter content, context and schedule.

        Returns:
            The stored letter.

        Raises:
            AppError: VALIDATION for bad input or a date under a week away.
        """
        now = self._clock()
        delivered_at = compute_delivery_date(command.delivery_interval, now)
        if delivered_at is None:
            delivered_at = command.delivered_at
        if delivered_at is None:
            raise AppError.validation(
                MISSING_DATE_MESSAGE, fields={"delivered_at": MISSING_DATE_MESSAGE}
            )

        letter = Letter(
            user_id=command.user_id,
            content=command.content,
            delivery_interval=command.delivery_interval,
            delivered_at=delivered_at,
            title=command.title or DEFAULT_TITLE,
            mood=command.mood,
            weather=command.weather,
            temperature=command.temperature,
            current_song=command.current_song,
            song=Song(**vars(command.song)) if command.song else None,
            top_headline=command.top_headline,
            location=command.location,
            drawing=command.drawing,
            created_at=now,
        )
        ensure_goal_capacity(letter, adding=len(command.goals))
        letter.goals = [Goal(text=text) for text in command.goals]

        stored = save_letter(self._letter_repo, letter, now, is_new=True)
        logger.info(
            "Letter created: id=%s user=%s interval=%s goals=%d",
            stored.id,
            stored.user_id,
            stored.delivery_interval,
            len(stored.goals),
        )
        return stored
