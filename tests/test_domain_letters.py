"""
Tests for the letters domain layer.

Delivery scheduling, intervals and the goal lifecycle, in isolation.
Time is always passed in explicitly; nothing here reads the clock.
"""

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from futureself.domain.letters.delivery import (
    TOO_SOON_MESSAGE,
    check_delivery_date,
    minimum_delivery_date,
    utc_midnight,
    validate_delivery_date,
)
from futureself.domain.letters.entities import Goal, GoalRef, GoalStatus, Letter
from futureself.domain.letters.goals import (
    ALLOWED_TRANSITIONS,
    can_transition,
    carry_forward,
    transition_goal,
)
from futureself.domain.letters.intervals import (
    VALID_INTERVALS,
    compute_delivery_date,
)
from futureself.shared.errors import AppError, ErrorKind

UTC = timezone.utc
NOW = datetime(2026, 3, 10, 15, 30, tzinfo=UTC)


def _letter(**overrides) -> Letter:
    defaults = dict(
        user_id=uuid4(),
        content="Dear future me",
        delivery_interval="1month",
        delivered_at=NOW + timedelta(days=30),
    )
    defaults.update(overrides)
    return Letter(**defaults)


# ══════════════════════════════════════════════════════════════════════
# Delivery policy
# ══════════════════════════════════════════════════════════════════════


class TestUtcMidnight:
    def test_drops_time_of_day(self) -> None:
        assert utc_midnight(NOW) == datetime(2026, 3, 10, tzinfo=UTC)

    def test_converts_to_utc_first(self) -> None:
        tokyo = timezone(timedelta(hours=9))
        value = datetime(2026, 3, 11, 2, 0, tzinfo=tokyo)  # 2026-03-10 17:00 UTC
        assert utc_midnight(value) == datetime(2026, 3, 10, tzinfo=UTC)

    def test_naive_is_treated_as_utc(self) -> None:
        assert utc_midnight(datetime(2026, 3, 10, 23, 59)) == datetime(
            2026, 3, 10, tzinfo=UTC
        )

    def test_accepts_plain_date(self) -> None:
        assert utc_midnight(date(2026, 3, 10)) == datetime(2026, 3, 10, tzinfo=UTC)


class TestValidateDeliveryDate:
    def test_minimum_is_seven_days_from_today(self) -> None:
        assert minimum_delivery_date(NOW) == datetime(2026, 3, 17, tzinfo=UTC)

    def test_exactly_seven_days_is_accepted(self) -> None:
        validate_delivery_date(datetime(2026, 3, 17, tzinfo=UTC), NOW)

    def test_earlier_time_than_now_on_day_seven_is_accepted(self) -> None:
        validate_delivery_date(datetime(2026, 3, 17, 0, 1, tzinfo=UTC), NOW)

    def test_six_days_is_rejected(self) -> None:
        with pytest.raises(AppError) as info:
            validate_delivery_date(datetime(2026, 3, 16, 23, 59, tzinfo=UTC), NOW)
        assert info.value.kind is ErrorKind.VALIDATION
        assert info.value.message == TOO_SOON_MESSAGE
        assert info.value.fields == {"delivered_at": TOO_SOON_MESSAGE}

    def test_past_date_is_rejected(self) -> None:
        with pytest.raises(AppError):
            validate_delivery_date(NOW - timedelta(days=1), NOW)

    def test_late_evening_now_does_not_shift_minimum(self) -> None:
        late = datetime(2026, 3, 10, 23, 59, 59, tzinfo=UTC)
        validate_delivery_date(date(2026, 3, 17), late)

    def test_offset_value_compared_on_utc_day(self) -> None:
        plus_five = timezone(timedelta(hours=5))
        # 2026-03-17 01:00 +05:00 is still 2026-03-16 in UTC
        with pytest.raises(AppError):
            validate_delivery_date(datetime(2026, 3, 17, 1, 0, tzinfo=plus_five), NOW)

    @pytest.mark.parametrize("days, accepted", [(0, False), (6, False), (7, True), (8, True), (365, True)])
    def test_accepts_iff_on_or_after_minimum(self, days, accepted) -> None:
        value = utc_midnight(NOW) + timedelta(days=days, hours=12)
        if accepted:
            validate_delivery_date(value, NOW)
        else:
            with pytest.raises(AppError):
                validate_delivery_date(value, NOW)


class TestCheckDeliveryDate:
    def test_new_letter_is_validated(self) -> None:
        with pytest.raises(AppError):
            check_delivery_date(NOW + timedelta(days=2), NOW, is_new=True)

    def test_unchanged_date_on_existing_letter_is_skipped(self) -> None:
        stale = NOW - timedelta(days=3)
        check_delivery_date(stale, NOW, is_new=False, previous=stale)

    def test_same_instant_in_other_offset_is_unchanged(self) -> None:
        previous = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
        same = previous.astimezone(timezone(timedelta(hours=-4)))
        check_delivery_date(same, NOW, is_new=False, previous=previous)

    def test_rescheduling_is_validated(self) -> None:
        previous = NOW + timedelta(days=30)
        with pytest.raises(AppError):
            check_delivery_date(NOW + timedelta(days=3), NOW, is_new=False, previous=previous)

    def test_rescheduling_far_enough_passes(self) -> None:
        previous = NOW + timedelta(days=30)
        check_delivery_date(NOW + timedelta(days=60), NOW, is_new=False, previous=previous)


# ══════════════════════════════════════════════════════════════════════
# Intervals
# ══════════════════════════════════════════════════════════════════════


class TestIntervals:
    def test_valid_intervals(self) -> None:
        assert VALID_INTERVALS == ("1week", "1month", "6months", "1year", "5years", "custom")

    def test_one_week(self) -> None:
        assert compute_delivery_date("1week", NOW) == NOW + timedelta(days=7)

    def test_month_end_is_clamped(self) -> None:
        jan_31 = datetime(2026, 1, 31, 9, 0, tzinfo=UTC)
        assert compute_delivery_date("1month", jan_31) == datetime(2026, 2, 28, 9, 0, tzinfo=UTC)

    def test_five_years(self) -> None:
        assert compute_delivery_date("5years", NOW).year == 2031

    def test_custom_has_no_computed_date(self) -> None:
        assert compute_delivery_date("custom", NOW) is None

    def test_unknown_interval_rejected(self) -> None:
        with pytest.raises(AppError) as info:
            compute_delivery_date("2days", NOW)
        assert "is not a valid delivery interval" in info.value.message
        assert "delivery_interval" in info.value.fields

    def test_every_computed_interval_satisfies_delivery_rule(self) -> None:
        for interval in VALID_INTERVALS[:-1]:
            validate_delivery_date(compute_delivery_date(interval, NOW), NOW)


# ══════════════════════════════════════════════════════════════════════
# Goal lifecycle
# ══════════════════════════════════════════════════════════════════════


class TestGoalTransitions:
    @pytest.mark.parametrize(
        "target",
        [GoalStatus.ACCOMPLISHED, GoalStatus.IN_PROGRESS, GoalStatus.ABANDONED],
    )
    def test_pending_moves_on(self, target) -> None:
        goal = Goal(text="Run a marathon")
        transition_goal(goal, target, NOW)
        assert goal.status is target
        assert goal.status_updated_at == NOW

    def test_in_progress_to_accomplished(self) -> None:
        goal = Goal(text="Learn piano", status=GoalStatus.IN_PROGRESS)
        transition_goal(goal, GoalStatus.ACCOMPLISHED, NOW)
        assert goal.status is GoalStatus.ACCOMPLISHED

    def test_in_progress_cannot_return_to_pending(self) -> None:
        goal = Goal(text="Learn piano", status=GoalStatus.IN_PROGRESS)
        with pytest.raises(AppError):
            transition_goal(goal, GoalStatus.PENDING, NOW)

    @pytest.mark.parametrize("terminal", [GoalStatus.ACCOMPLISHED, GoalStatus.ABANDONED, GoalStatus.CARRIED_FORWARD])
    def test_terminal_states_have_no_exit(self, terminal) -> None:
        assert ALLOWED_TRANSITIONS[terminal] == frozenset()
        goal = Goal(text="Done", status=terminal)
        with pytest.raises(AppError) as info:
            transition_goal(goal, GoalStatus.IN_PROGRESS, NOW)
        assert info.value.kind is ErrorKind.VALIDATION
        assert goal.status is terminal
        assert goal.status_updated_at is None

    def test_carried_forward_requires_carry_forward(self) -> None:
        goal = Goal(text="Read more")
        with pytest.raises(AppError):
            transition_goal(goal, GoalStatus.CARRIED_FORWARD, NOW)
        assert goal.status is GoalStatus.PENDING

    def test_can_transition(self) -> None:
        assert can_transition(GoalStatus.PENDING, GoalStatus.CARRIED_FORWARD)
        assert not can_transition(GoalStatus.ABANDONED, GoalStatus.PENDING)


class TestCarryForward:
    def test_links_both_sides(self) -> None:
        goal = Goal(text="Save for a trip")
        origin = _letter(goals=[goal])
        destination = _letter()

        successor = carry_forward(origin, goal.id, destination, NOW)

        assert goal.status is GoalStatus.CARRIED_FORWARD
        assert goal.carried_forward_to == GoalRef(destination.id, successor.id)
        assert goal.status_updated_at == NOW
        assert successor in destination.goals
        assert successor.status is GoalStatus.PENDING
        assert successor.text == "Save for a trip"
        assert successor.carried_forward_from == GoalRef(origin.id, goal.id)

    def test_in_progress_goal_can_be_carried(self) -> None:
        goal = Goal(text="Write a novel", status=GoalStatus.IN_PROGRESS)
        origin, destination = _letter(goals=[goal]), _letter()
        carry_forward(origin, goal.id, destination, NOW)
        assert goal.carried_forward_to is not None

    def test_only_one_successor(self) -> None:
        goal = Goal(text="Save for a trip")
        origin, first, second = _letter(goals=[goal]), _letter(), _letter()
        carry_forward(origin, goal.id, first, NOW)
        with pytest.raises(AppError):
            carry_forward(origin, goal.id, second, NOW)
        assert second.goals == []

    def test_finished_goal_cannot_be_carried(self) -> None:
        goal = Goal(text="Done already", status=GoalStatus.ACCOMPLISHED)
        origin, destination = _letter(goals=[goal]), _letter()
        with pytest.raises(AppError):
            carry_forward(origin, goal.id, destination, NOW)
        assert destination.goals == []

    def test_same_letter_refused(self) -> None:
        goal = Goal(text="Loop")
        origin = _letter(goals=[goal])
        with pytest.raises(AppError) as info:
            carry_forward(origin, goal.id, origin, NOW)
        assert info.value.kind is ErrorKind.VALIDATION

    def test_unknown_goal(self) -> None:
        with pytest.raises(AppError) as info:
            carry_forward(_letter(), uuid4(), _letter(), NOW)
        assert info.value.kind is ErrorKind.NOT_FOUND


class TestLetterEntity:
    def test_is_due(self) -> None:
        letter = _letter(delivered_at=NOW - timedelta(minutes=1))
        assert letter.is_due(NOW)
        letter.is_delivered = True
        assert not letter.is_due(NOW)

    def test_defaults(self) -> None:
        letter = _letter()
        assert letter.title == "Untitled"
        assert letter.is_delivered is False
        assert letter.goals == [] and letter.reflections == []
