"""
Goal status lifecycle.

    pending     -> accomplished | inProgress | abandoned | carriedForward
    inProgress  -> accomplished | abandoned | carriedForward

accomplished and abandoned are terminal. carriedForward is terminal for
the origin goal and creates exactly one pending successor in another
letter, with references on both sides.

These functions mutate in-memory entities only. Persisting the two
letters touched by a carry-forward is the caller's job, and the two
writes are not atomic.
"""

from datetime import datetime
from uuid import UUID

from futureself.domain.letters.entities import Goal, GoalRef, GoalStatus, Letter
from futureself.shared.errors import AppError

ALLOWED_TRANSITIONS: dict[GoalStatus, frozenset[GoalStatus]] = {
    GoalStatus.PENDING: frozenset(
        {
            GoalStatus.ACCOMPLISHED,
            GoalStatus.IN_PROGRESS,
            GoalStatus.ABANDONED,
            GoalStatus.CARRIED_FORWARD,
        }
    ),
    GoalStatus.IN_PROGRESS: frozenset(
        {
            GoalStatus.ACCOMPLISHED,
            GoalStatus.ABANDONED,
            GoalStatus.CARRIED_FORWARD,
        }
    ),
    GoalStatus.ACCOMPLISHED: frozenset(),
    GoalStatus.ABANDONED: frozenset(),
    GoalStatus.CARRIED_FORWARD: frozenset(),
}


def can_transition(current: GoalStatus, target: GoalStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def _ensure_transition(goal: Goal, target: GoalStatus) -> None:
    if not can_transition(goal.status, target):
        message = (
            f"Cannot change goal status from {goal.status.value} to {target.value}"
        )
        raise AppError.validation(message, fields={"status": message})


def transition_goal(goal: Goal, target: GoalStatus, at: datetime) -> Goal:
    """Move a goal to a new status and stamp the change.

    carriedForward is refused here; use ``carry_forward`` so the
    successor goal exists.

    Raises:
        AppError: VALIDATION for a disallowed transition.
    """
    if target is GoalStatus.CARRIED_FORWARD:
        message = "Use carry-forward to continue a goal in another letter"
        raise AppError.validation(message, fields={"status": message})
    _ensure_transition(goal, target)
    goal.status = target
    goal.status_updated_at = at
    return goal


def carry_forward(
    origin: Letter, goal_id: UUID, destination: Letter, at: datetime
) -> Goal:
    """Continue a goal in another letter.

    Appends a pending copy of the goal to ``destination`` and links the
    two goals both ways.

    Returns:
        The new goal in ``destination``.

    Raises:
        AppError: NOT_FOUND if the goal is not in ``origin``; VALIDATION if
            the goal cannot be carried or the letters are the same.
    """
    if origin.id == destination.id:
        message = "A goal must be carried forward into a different letter"
        raise AppError.validation(message, fields={"carried_forward_to": message})

    goal = origin.find_goal(goal_id)
    if goal is None:
        raise AppError.not_found("Goal not found")
    _ensure_transition(goal, GoalStatus.CARRIED_FORWARD)

    successor = Goal(
        text=goal.text,
        status=GoalStatus.PENDING,
        carried_forward_from=GoalRef(letter_id=origin.id, goal_id=goal.id),
        status_updated_at=at,
    )
    destination.goals.append(successor)

    goal.status = GoalStatus.CARRIED_FORWARD
    goal.carried_forward_to = GoalRef(letter_id=destination.id, goal_id=successor.id)
    goal.status_updated_at = at
    return successor
