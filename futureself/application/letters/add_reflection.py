"""
Use cases: Respond to a delivered letter.

AddReflectionUseCase appends a written reflection;
UpdateOverlayDrawingUseCase sets the drawing layered over the original.
Both require the letter to be delivered and leave the schedule alone.
"""

import logging
from datetime import datetime
from typing import Callable

from futureself.application.letters.common import (
    ensure_delivered,
    load_owned_letter,
    save_letter,
)
from futureself.application.letters.dtos import (
    AddReflectionCommand,
    UpdateOverlayDrawingCommand,
)
from futureself.domain.letters.entities import Letter, Reflection, utc_now
from futureself.domain.letters.ports import LetterRepository

logger = logging.getLogger(__name__)


class AddReflectionUseCase:
    """Adds a reflection of at least 50 characters to a delivered letter."""

    def __init__(
        self,
        letter_repo: LetterRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._letter_repo = letter_repo
        self._clock = clock

    def execute(self, command: AddReflectionCommand) -> Letter:
        letter = load_owned_letter(
            self._letter_repo, command.letter_id, command.user_id
        )
        ensure_delivered(letter)

        now = self._clock()
        letter.reflections.append(Reflection(reflection=command.reflection, date=now))
        stored = save_letter(
            self._letter_repo,
            letter,
            now,
            is_new=False,
            previous_delivered_at=letter.delivered_at,
        )
        logger.info(
            "Reflection added: letter=%s count=%d", stored.id, len(stored.reflections)
        )
        return stored


class UpdateOverlayDrawingUseCase:
    def __init__(
        self,
        letter_repo: LetterRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._letter_repo = letter_repo
        self._clock = clock

    def execute(self, command: UpdateOverlayDrawingCommand) -> Letter:
        letter = load_owned_letter(
            self._letter_repo, command.letter_id, command.user_id
        )
        ensure_delivered(letter)
        letter.overlay_drawing = command.overlay_drawing
        return save_letter(
            self._letter_repo,
            letter,
            self._clock(),
            is_new=False,
            previous_delivered_at=letter.delivered_at,
        )
