"""
Stored shape of a letter.

Every letter passes through LetterDocument before it is written, so
field constraints are enforced at write time whichever use case is
writing. A violation surfaces as pydantic's ValidationError, with one
entry per offending field.

The delivery date rule is not here: it depends on whether the write
creates or reschedules the letter, which the schema cannot know.
"""

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic_core import PydanticCustomError

from futureself.domain.letters.entities import DEFAULT_TITLE, MOODS, GoalStatus
from futureself.domain.letters.intervals import VALID_INTERVALS, invalid_interval_message

MAX_TITLE_LENGTH = 100
MAX_CONTENT_LENGTH = 5000
MAX_GOAL_TEXT_LENGTH = 150
MAX_GOAL_REFLECTION_LENGTH = 500
MIN_REFLECTION_LENGTH = 50


def _required(message: str) -> AfterValidator:
    def check(value: str) -> str:
        if not value:
            raise PydanticCustomError("required", message)
        return value

    return AfterValidator(check)


def _max_length(limit: int, message: str) -> AfterValidator:
    def check(value: Optional[str]) -> Optional[str]:
        if value is not None and len(value) > limit:
            raise PydanticCustomError("max_length", message)
        return value

    return AfterValidator(check)


def _min_length(limit: int, message: str) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) < limit:
            raise PydanticCustomError("min_length", message)
        return value

    return AfterValidator(check)


def _valid_mood(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in MOODS:
        raise PydanticCustomError(
            "enum", "{value} is not a valid mood", {"value": value}
        )
    return value


def _valid_interval(value: str) -> str:
    if value not in VALID_INTERVALS:
        raise PydanticCustomError("enum", invalid_interval_message(value))
    return value


class _Document(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class GoalRefDocument(_Document):
    letter_id: UUID
    goal_id: UUID


class GoalDocument(_Document):
    id: UUID
    text: Annotated[
        str,
        _required("Goal text is required"),
        _max_length(MAX_GOAL_TEXT_LENGTH, "Goal cannot exceed 150 characters"),
    ]
    status: GoalStatus = GoalStatus.PENDING
    reflection: Annotated[
        Optional[str],
        _max_length(
            MAX_GOAL_REFLECTION_LENGTH, "Goal reflection cannot exceed 500 characters"
        ),
    ] = None
    carried_forward_to: Optional[GoalRefDocument] = None
    carried_forward_from: Optional[GoalRefDocument] = None
    status_updated_at: Optional[datetime] = None


class ReflectionDocument(_Document):
    reflection: Annotated[
        str,
        _required("Reflection content is required"),
        _min_length(
            MIN_REFLECTION_LENGTH, "Reflection must be at least 50 characters long"
        ),
    ]
    date: datetime


class SongDocument(_Document):
    track_name: Optional[str] = None
    artist_name: Optional[str] = None
    artwork_url: Optional[str] = None
    preview_url: Optional[str] = None


class LetterDocument(_Document):
    """Validated letter as written to the ``letters`` collection."""

    id: UUID
    user_id: UUID
    title: Annotated[
        str, _max_length(MAX_TITLE_LENGTH, "Title cannot exceed 100 characters")
    ] = DEFAULT_TITLE
    mood: Annotated[Optional[str], AfterValidator(_valid_mood)] = None
    weather: Optional[str] = None
    temperature: Optional[float] = None
    current_song: Optional[str] = None
    song: Optional[SongDocument] = None
    top_headline: Optional[str] = None
    location: Optional[str] = None
    content: Annotated[
        str,
        _required("Letter content is required"),
        _max_length(MAX_CONTENT_LENGTH, "Letter is too long (max 5000 chars)"),
    ]
    goals: list[GoalDocument] = Field(default_factory=list)
    drawing: Optional[str] = None
    overlay_drawing: Optional[str] = None
    delivery_interval: Annotated[str, AfterValidator(_valid_interval)]
    delivered_at: datetime
    is_delivered: bool = False
    reflections: list[ReflectionDocument] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
