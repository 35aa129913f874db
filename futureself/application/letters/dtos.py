"""
Data Transfer Objects for the letters application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior. Letter and goal ids are
kept as the raw strings the client sent; parsing them is part of the
use case.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class SongInput:
    track_name: Optional[str] = None
    artist_name: Optional[str] = None
    artwork_url: Optional[str] = None
    preview_url: Optional[str] = None


@dataclass(frozen=True)
class CreateLetterCommand:
    """Input DTO for writing a new letter.

    Attributes:
        user_id: Author.
        content: Letter body.
        delivery_interval: One of VALID_INTERVALS.
        delivered_at: Required for the custom interval, ignored otherwise.
        goals: Goal texts, at most three.
    """

    user_id: UUID
    content: str
    delivery_interval: str
    delivered_at: Optional[datetime] = None
    title: Optional[str] = None
    mood: Optional[str] = None
    weather: Optional[str] = None
    temperature: Optional[float] = None
    current_song: Optional[str] = None
    song: Optional[SongInput] = None
    top_headline: Optional[str] = None
    location: Optional[str] = None
    goals: tuple[str, ...] = field(default_factory=tuple)
    drawing: Optional[str] = None


@dataclass(frozen=True)
class LetterQuery:
    """Identifies one letter on behalf of a user."""

    user_id: UUID
    letter_id: str


@dataclass(frozen=True)
class RescheduleLetterCommand:
    """Input DTO for moving a letter's delivery date."""

    user_id: UUID
    letter_id: str
    delivery_interval: str
    delivered_at: Optional[datetime] = None


@dataclass(frozen=True)
class AddReflectionCommand:
    user_id: UUID
    letter_id: str
    reflection: str


@dataclass(frozen=True)
class UpdateOverlayDrawingCommand:
    user_id: UUID
    letter_id: str
    overlay_drawing: Optional[str]


@dataclass(frozen=True)
class UpdateGoalCommand:
    """Input DTO for changing a goal's status and/or reflection.

    Attributes:
        status: New status value (e.g. "accomplished"), or None to keep it.
        reflection: New goal reflection, or None to keep it.
    """

    user_id: UUID
    letter_id: str
    goal_id: str
    status: Optional[str] = None
    reflection: Optional[str] = None


@dataclass(frozen=True)
class CarryForwardGoalCommand:
    """Input DTO for continuing a goal in another letter."""

    user_id: UUID
    letter_id: str
    goal_id: str
    destination_letter_id: str


@dataclass(frozen=True)
class CarryForwardResult:
    """Both letters touched by a carry-forward, as stored."""

    origin_letter_id: UUID
    origin_goal_id: UUID
    destination_letter_id: UUID
    destination_goal_id: UUID
