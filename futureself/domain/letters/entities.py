"""
Domain entities for the letters bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

MOODS = ("", "☺️", "😢", "😰", "🤩", "🙏", "😫")
DEFAULT_TITLE = "Untitled"
MAX_GOALS_PER_LETTER = 3


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class GoalStatus(Enum):
    """Progress of a goal the writer set for their future self."""

    PENDING = "pending"
    ACCOMPLISHED = "accomplished"
    IN_PROGRESS = "inProgress"
    ABANDONED = "abandoned"
    CARRIED_FORWARD = "carriedForward"


@dataclass(frozen=True)
class GoalRef:
    """Weak reference to a goal inside another letter. Lookup only."""

    letter_id: UUID
    goal_id: UUID

    def __str__(self) -> str:
        return f"{self.letter_id}/{self.goal_id}"


@dataclass
class Goal:
    """A personal objective attached to a letter.

    A goal in CARRIED_FORWARD always has ``carried_forward_to``; a goal
    created by a carry-forward always has ``carried_forward_from``.
    """

    text: str
    id: UUID = field(default_factory=uuid4)
    status: GoalStatus = GoalStatus.PENDING
    reflection: Optional[str] = None
    carried_forward_to: Optional[GoalRef] = None
    carried_forward_from: Optional[GoalRef] = None
    status_updated_at: Optional[datetime] = None


@dataclass
class Reflection:
    """A thought added by the writer after the letter was delivered."""

    reflection: str
    date: datetime = field(default_factory=utc_now)


@dataclass
class Song:
    """Track the writer was listening to."""

    track_name: Optional[str] = None
    artist_name: Optional[str] = None
    artwork_url: Optional[str] = None
    preview_url: Optional[str] = None


@dataclass
class Letter:
    """A letter to the writer's future self.

    Readable only once ``is_delivered`` is set, which happens after
    ``delivered_at`` has passed.
    """

    user_id: UUID
    content: str
    delivery_interval: str
    delivered_at: datetime
    id: UUID = field(default_factory=uuid4)
    title: str = DEFAULT_TITLE
    mood: Optional[str] = None
    weather: Optional[str] = None
    temperature: Optional[float] = None
    current_song: Optional[str] = None
    song: Optional[Song] = None
    top_headline: Optional[str] = None
    location: Optional[str] = None
    goals: list[Goal] = field(default_factory=list)
    drawing: Optional[str] = None
    overlay_drawing: Optional[str] = None
    is_delivered: bool = False
    reflections: list[Reflection] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def find_goal(self, goal_id: UUID) -> Optional[Goal]:
        """Return the goal with this id, or None."""
        return next((goal for goal in self.goals if goal.id == goal_id), None)

    def is_due(self, now: datetime) -> bool:
        """True once the scheduled delivery time has been reached."""
        return not self.is_delivered and self.delivered_at <= now
