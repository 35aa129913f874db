"""
Use case: Carry an unfinished goal into another letter.

Input: CarryForwardGoalCommand
Output: CarryForwardResult
Side effects: Two letters updated, destination first, then origin.
Failure cases: VALIDATION (goal finished, destination full, same letter),
    NOT_FOUND, FORBIDDEN, INVALID_ID, INTERNAL (partially saved).

The two writes are not atomic. If the origin write fails after the
destination was saved, the destination keeps a goal whose origin does
not point back to it. This is reported as its own INTERNAL error and
not repaired.
"""

import logging
from datetime import datetime
from typing import Callable

from futureself.application.letters.common import (
    ensure_delivered,
    ensure_goal_capacity,
    load_owned_letter,
    parse_goal_id,
    save_letter,
)
from futureself.application.letters.dtos import (
    CarryForwardGoalCommand,
    CarryForwardResult,
)
from futureself.domain.letters.entities import utc_now
from futureself.domain.letters.goals import carry_forward
from futureself.domain.letters.ports import LetterRepository
from futureself.shared.errors import AppError

logger = logging.getLogger(__name__)

PARTIAL_SAVE_MESSAGE = "Goal carry-forward was only partially saved"


class CarryForwardGoalUseCase:
    """Links a goal to a pending successor in another of the writer's letters."""

    def __init__(
        self,
        letter_repo: LetterRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._letter_repo = letter_repo
        self._clock = clock

    def execute(self, command: CarryForwardGoalCommand) -> CarryForwardResult:
        """Run the carry-forward use case.

        Raises:
            AppError: see module docstring.
        """
        origin = load_owned_letter(
            self._letter_repo, command.letter_id, command.user_id
        )
        ensure_delivered(origin)
        destination = load_owned_letter(
            self._letter_repo, command.destination_letter_id, command.user_id
        )
        ensure_goal_capacity(destination)

        now = self._clock()
        goal_id = parse_goal_id(command.goal_id)
        successor = carry_forward(origin, goal_id, destination, now)

        save_letter(
            self._letter_repo,
            destination,
            now,
            is_new=False,
            previous_delivered_at=destination.delivered_at,
        )
        try:
            save_letter(
                self._letter_repo,
                origin,
                now,
                is_new=False,
                previous_delivered_at=origin.delivered_at,
            )
        except Exception as exc:
            logger.error(
                "Carry-forward left a one-sided link: origin=%s/%s destination=%s/%s",
                origin.id,
                goal_id,
                destination.id,
                successor.id,
                exc_info=True,
            )
            raise AppError.internal(
                PARTIAL_SAVE_MESSAGE,
                fields={"carried_forward_to": f"{destination.id}/{successor.id}"},
            ) from exc

        logger.info(
            "Goal carried forward: %s/%s -> %s/%s",
            origin.id,
            goal_id,
            destination.id,
            successor.id,
        )
        return CarryForwardResult(
            origin_letter_id=origin.id,
            origin_goal_id=goal_id,
            destination_letter_id=destination.id,
            destination_goal_id=successor.id,
        )
