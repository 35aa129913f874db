"""
FastAPI router for the letters bounded context.

All routes delegate to use cases. No business logic here.
Failures propagate to the error boundary; routes never format errors.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from futureself.application.letters.add_reflection import (
    AddReflectionUseCase,
    UpdateOverlayDrawingUseCase,
)
from futureself.application.letters.carry_forward_goal import CarryForwardGoalUseCase
from futureself.application.letters.create_letter import CreateLetterUseCase
from futureself.application.letters.delete_letter import DeleteLetterUseCase
from futureself.application.letters.dtos import (
    AddReflectionCommand,
    CarryForwardGoalCommand,
    CreateLetterCommand,
    LetterQuery,
    RescheduleLetterCommand,
    SongInput,
    UpdateGoalCommand,
    UpdateOverlayDrawingCommand,
)
from futureself.application.letters.read_letters import (
    DeliverDueLettersUseCase,
    GetLetterUseCase,
    ListLettersUseCase,
)
from futureself.application.letters.reflection_prompt import (
    GenerateReflectionPromptUseCase,
)
from futureself.application.letters.reschedule_letter import RescheduleLetterUseCase
from futureself.application.letters.update_goal import UpdateGoalUseCase
from futureself.interfaces.letters.dependencies import (
    get_add_reflection_use_case,
    get_carry_forward_goal_use_case,
    get_create_letter_use_case,
    get_current_user_id,
    get_delete_letter_use_case,
    get_deliver_due_letters_use_case,
    get_letter_use_case,
    get_list_letters_use_case,
    get_reflection_prompt_use_case,
    get_reschedule_letter_use_case,
    get_update_goal_use_case,
    get_update_overlay_drawing_use_case,
)
from futureself.interfaces.letters.schemas import (
    ERROR_RESPONSES,
    AddReflectionRequest,
    CarryForwardRequest,
    CarryForwardResponse,
    CreateLetterRequest,
    DeliverDueResponse,
    ErrorResponse,
    GoalRefSchema,
    LetterListResponse,
    LetterResponse,
    LetterSummary,
    ReflectionPromptResponse,
    RescheduleLetterRequest,
    UpdateGoalRequest,
    UpdateOverlayRequest,
)

router = APIRouter(prefix="/letters", tags=["letters"], responses=ERROR_RESPONSES)


@router.post(
    "",
    response_model=LetterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Write a letter",
    description="Seal a letter to your future self, delivered at least a week from today.",
)
def create_letter(
    request: CreateLetterRequest,
    user_id: UUID = Depends(get_current_user_id),
    use_case: CreateLetterUseCase = Depends(get_create_letter_use_case),
) -> LetterResponse:
    command = CreateLetterCommand(
        user_id=user_id,
        content=request.content,
        delivery_interval=request.delivery_interval,
        delivered_at=request.delivered_at,
        title=request.title,
        mood=request.mood,
        weather=request.weather,
        temperature=request.temperature,
        current_song=request.current_song,
        song=SongInput(**request.song.model_dump()) if request.song else None,
        top_headline=request.top_headline,
        location=request.location,
        goals=tuple(request.goals),
        drawing=request.drawing,
    )
    return LetterResponse.from_entity(use_case.execute(command))


@router.get("", response_model=LetterListResponse, summary="List your letters")
def list_letters(
    user_id: UUID = Depends(get_current_user_id),
    use_case: ListLettersUseCase = Depends(get_list_letters_use_case),
) -> LetterListResponse:
    letters = use_case.execute(user_id)
    return LetterListResponse(
        letters=[LetterSummary.from_entity(letter) for letter in letters]
    )


@router.post(
    "/deliver-due",
    response_model=DeliverDueResponse,
    summary="Deliver letters whose date has passed",
)
def deliver_due_letters(
    user_id: UUID = Depends(get_current_user_id),
    use_case: DeliverDueLettersUseCase = Depends(get_deliver_due_letters_use_case),
) -> DeliverDueResponse:
    delivered = use_case.execute(user_id)
    return DeliverDueResponse(
        delivered=[LetterSummary.from_entity(letter) for letter in delivered]
    )


@router.get(
    "/{letter_id}",
    response_model=LetterResponse,
    summary="Open a letter",
    description="Returns the letter once delivered; sealed letters are refused.",
)
def get_letter(
    letter_id: str,
    user_id: UUID = Depends(get_current_user_id),
    use_case: GetLetterUseCase = Depends(get_letter_use_case),
) -> LetterResponse:
    letter = use_case.execute(LetterQuery(user_id=user_id, letter_id=letter_id))
    return LetterResponse.from_entity(letter)


@router.patch(
    "/{letter_id}/delivery",
    response_model=LetterSummary,
    summary="Reschedule a sealed letter",
)
def reschedule_letter(
    letter_id: str,
    request: RescheduleLetterRequest,
    user_id: UUID = Depends(get_current_user_id),
    use_case: RescheduleLetterUseCase = Depends(get_reschedule_letter_use_case),
) -> LetterSummary:
    command = RescheduleLetterCommand(
        user_id=user_id,
        letter_id=letter_id,
        delivery_interval=request.delivery_interval,
        delivered_at=request.delivered_at,
    )
    return LetterSummary.from_entity(use_case.execute(command))


@router.post(
    "/{letter_id}/reflections",
    response_model=LetterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Reflect on a delivered letter",
)
def add_reflection(
    letter_id: str,
    request: AddReflectionRequest,
    user_id: UUID = Depends(get_current_user_id),
    use_case: AddReflectionUseCase = Depends(get_add_reflection_use_case),
) -> LetterResponse:
    command = AddReflectionCommand(
        user_id=user_id, letter_id=letter_id, reflection=request.reflection
    )
    return LetterResponse.from_entity(use_case.execute(command))


@router.patch(
    "/{letter_id}/overlay",
    response_model=LetterResponse,
    summary="Draw over a delivered letter",
)
def update_overlay_drawing(
    letter_id: str,
    request: UpdateOverlayRequest,
    user_id: UUID = Depends(get_current_user_id),
    use_case: UpdateOverlayDrawingUseCase = Depends(
        get_update_overlay_drawing_use_case
    ),
) -> LetterResponse:
    command = UpdateOverlayDrawingCommand(
        user_id=user_id, letter_id=letter_id, overlay_drawing=request.overlay_drawing
    )
    return LetterResponse.from_entity(use_case.execute(command))


@router.patch(
    "/{letter_id}/goals/{goal_id}",
    response_model=LetterResponse,
    summary="Update a goal",
)
def update_goal(
    letter_id: str,
    goal_id: str,
    request: UpdateGoalRequest,
    user_id: UUID = Depends(get_current_user_id),
    use_case: UpdateGoalUseCase = Depends(get_update_goal_use_case),
) -> LetterResponse:
    command = UpdateGoalCommand(
        user_id=user_id,
        letter_id=letter_id,
        goal_id=goal_id,
        status=request.status,
        reflection=request.reflection,
    )
    return LetterResponse.from_entity(use_case.execute(command))


@router.post(
    "/{letter_id}/goals/{goal_id}/carry-forward",
    response_model=CarryForwardResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Continue a goal in another letter",
)
def carry_forward_goal(
    letter_id: str,
    goal_id: str,
    request: CarryForwardRequest,
    user_id: UUID = Depends(get_current_user_id),
    use_case: CarryForwardGoalUseCase = Depends(get_carry_forward_goal_use_case),
) -> CarryForwardResponse:
    command = CarryForwardGoalCommand(
        user_id=user_id,
        letter_id=letter_id,
        goal_id=goal_id,
        destination_letter_id=request.destination_letter_id,
    )
    result = use_case.execute(command)
    return CarryForwardResponse(
        origin=GoalRefSchema(
            letter_id=result.origin_letter_id, goal_id=result.origin_goal_id
        ),
        destination=GoalRefSchema(
            letter_id=result.destination_letter_id, goal_id=result.destination_goal_id
        ),
    )


@router.post(
    "/{letter_id}/reflection-prompt",
    response_model=ReflectionPromptResponse,
    responses={503: {"model": ErrorResponse}},
    summary="Get an AI reflection question",
)
def reflection_prompt(
    letter_id: str,
    user_id: UUID = Depends(get_current_user_id),
    use_case: GenerateReflectionPromptUseCase = Depends(get_reflection_prompt_use_case),
) -> ReflectionPromptResponse:
    prompt = use_case.execute(LetterQuery(user_id=user_id, letter_id=letter_id))
    return ReflectionPromptResponse(prompt=prompt)


@router.delete(
    "/{letter_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a letter",
)
def delete_letter(
    letter_id: str,
    user_id: UUID = Depends(get_current_user_id),
    use_case: DeleteLetterUseCase = Depends(get_delete_letter_use_case),
) -> Response:
    use_case.execute(LetterQuery(user_id=user_id, letter_id=letter_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
