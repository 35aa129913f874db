"""
Use case: Update a goal after the letter arrives.

Input: UpdateGoalCommand
Output: Letter (as stored)
Side effects: One letter updated.
Failure cases: VALIDATION (unknown or disallowed status), NOT_FOUND,
    FORBIDDEN (not the author, or letter still sealed), INVALID_ID.
"""

import logging
from datetime import datetime
from typing import Callable

from futureself.application.letters.common import (
    ensure_delivered,
    load_owned_letter,
    parse_goal_id,
    save_letter,
)
from futureself.application.letters.dtos import UpdateGoalCommand
from futureself.domain.letters.entities import GoalStatus, Letter, utc_now
from futureself.domain.letters.goals import transition_goal
from futureself.domain.letters.ports import LetterRepository
from futureself.shared.errors import AppError

logger = logging.getLogger(__name__)


def parse_status(raw: str) -> GoalStatus:
    try:
        return GoalStatus(raw)
    except ValueError as exc:
        message = f"{raw} is not a valid goal status"
        raise AppError.validation(message, fields={"status": message}) from exc


class UpdateGoalUseCase:
    """Changes a goal's status and/or its reflection."""

    def __init__(
        self,
        letter_repo: LetterRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._letter_repo = letter_repo
        self._clock = clock

    def execute(self, command: UpdateGoalCommand) -> Letter:
        letter = load_owned_letter(
            self._letter_repo, command.letter_id, command.user_id
        )
        ensure_delivered(letter)

        goal = letter.find_goal(parse_goal_id(command.goal_id))
        if goal is None:
            raise AppError.not_found("Goal not found")

        now = self._clock()
        if command.status is not None:
            target = parse_status(command.status)
            if target is not goal.status:
                transition_goal(goal, target, now)
                logger.info(
                    "Goal status changed: letter=%s goal=%s status=%s",
                    letter.id,
                    goal.id,
                    target.value,
                )
        if command.reflection is not None:
            goal.reflection = command.reflection

        return save_letter(
            self._letter_repo,
            letter,
            now,
            is_new=False,
            previous_delivered_at=letter.delivered_at,
        )
