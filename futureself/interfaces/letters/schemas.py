"""
Pydantic schemas for letters API request/response validation.

Requests are typed but carry no length rules: field constraints are
enforced once, when the letter is written, so the same messages come
back whichever endpoint wrote the letter.
No business logic belongs here.
"""

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from futureself.domain.letters.entities import Goal, GoalRef, Letter, Reflection, Song


class ErrorBody(BaseModel):
    code: str
    message: str
    fields: Optional[dict[str, str]] = None
    stack: Optional[str] = None


class ErrorResponse(BaseModel):
    """Body of every error response."""

    success: Literal[False] = False
    error: ErrorBody


ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


class SongSchema(BaseModel):
    track_name: Optional[str] = None
    artist_name: Optional[str] = None
    artwork_url: Optional[str] = None
    preview_url: Optional[str] = None

    @classmethod
    def from_entity(cls, song: Optional[Song]) -> Optional["SongSchema"]:
        if song is None:
            return None
        return cls(**vars(song))


class CreateLetterRequest(BaseModel):
    """Request schema for writing a letter.

    Attributes:
        delivery_interval: 1week, 1month, 6months, 1year, 5years or custom.
        delivered_at: Required when delivery_interval is custom; ignored otherwise.
        goals: Up to three goal texts.
    """

    content: str
    delivery_interval: str
    delivered_at: Optional[datetime] = None
    title: Optional[str] = None
    mood: Optional[str] = None
    weather: Optional[str] = None
    temperature: Optional[float] = None
    current_song: Optional[str] = None
    song: Optional[SongSchema] = None
    top_headline: Optional[str] = None
    location: Optional[str] = None
    goals: list[str] = Field(default_factory=list)
    drawing: Optional[str] = None


class RescheduleLetterRequest(BaseModel):
    delivery_interval: str
    delivered_at: Optional[datetime] = None


class AddReflectionRequest(BaseModel):
    reflection: str


class UpdateOverlayRequest(BaseModel):
    overlay_drawing: Optional[str] = None


class UpdateGoalRequest(BaseModel):
    """Either field may be omitted to leave it unchanged."""

    status: Optional[str] = Field(
        default=None, description="pending, inProgress, accomplished or abandoned"
    )
    reflection: Optional[str] = None


class CarryForwardRequest(BaseModel):
    destination_letter_id: str


class GoalRefSchema(BaseModel):
    letter_id: UUID
    goal_id: UUID

    @classmethod
    def from_entity(cls, ref: Optional[GoalRef]) -> Optional["GoalRefSchema"]:
        if ref is None:
            return None
        return cls(letter_id=ref.letter_id, goal_id=ref.goal_id)


class GoalResponse(BaseModel):
    id: UUID
    text: str
    status: str
    reflection: Optional[str] = None
    carried_forward_to: Optional[GoalRefSchema] = None
    carried_forward_from: Optional[GoalRefSchema] = None
    status_updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, goal: Goal) -> "GoalResponse":
        return cls(
            id=goal.id,
            text=goal.text,
            status=goal.status.value,
            reflection=goal.reflection,
            carried_forward_to=GoalRefSchema.from_entity(goal.carried_forward_to),
            carried_forward_from=GoalRefSchema.from_entity(goal.carried_forward_from),
            status_updated_at=goal.status_updated_at,
        )


class ReflectionResponse(BaseModel):
    reflection: str
    date: datetime

    @classmethod
    def from_entity(cls, reflection: Reflection) -> "ReflectionResponse":
        return cls(reflection=reflection.reflection, date=reflection.date)


class LetterSummary(BaseModel):
    """What a writer may see of any of their letters, sealed or not."""

    id: UUID
    title: str
    mood: Optional[str] = None
    delivery_interval: str
    delivered_at: datetime
    is_delivered: bool
    goal_count: int
    created_at: datetime

    @classmethod
    def from_entity(cls, letter: Letter) -> "LetterSummary":
        return cls(
            id=letter.id,
            title=letter.title,
            mood=letter.mood,
            delivery_interval=letter.delivery_interval,
            delivered_at=letter.delivered_at,
            is_delivered=letter.is_delivered,
            goal_count=len(letter.goals),
            created_at=letter.created_at,
        )


class LetterResponse(LetterSummary):
    """A delivered letter, or one just written by its author."""

    content: str
    weather: Optional[str] = None
    temperature: Optional[float] = None
    current_song: Optional[str] = None
    song: Optional[SongSchema] = None
    top_headline: Optional[str] = None
    location: Optional[str] = None
    goals: list[GoalResponse]
    drawing: Optional[str] = None
    overlay_drawing: Optional[str] = None
    reflections: list[ReflectionResponse]
    updated_at: datetime

    @classmethod
    def from_entity(cls, letter: Letter) -> "LetterResponse":
        return cls(
            **LetterSummary.from_entity(letter).model_dump(),
            content=letter.content,
            weather=letter.weather,
            temperature=letter.temperature,
            current_song=letter.current_song,
            song=SongSchema.from_entity(letter.song),
            top_headline=letter.top_headline,
            location=letter.location,
            goals=[GoalResponse.from_entity(goal) for goal in letter.goals],
            drawing=letter.drawing,
            overlay_drawing=letter.overlay_drawing,
            reflections=[ReflectionResponse.from_entity(r) for r in letter.reflections],
            updated_at=letter.updated_at,
        )


class LetterListResponse(BaseModel):
    letters: list[LetterSummary]


class DeliverDueResponse(BaseModel):
    delivered: list[LetterSummary]


class CarryForwardResponse(BaseModel):
    origin: GoalRefSchema
    destination: GoalRefSchema


class ReflectionPromptResponse(BaseModel):
    prompt: str
