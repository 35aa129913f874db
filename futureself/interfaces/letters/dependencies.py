"""
Dependency injection for the letters bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the letters context.
"""

from datetime import datetime
from functools import lru_cache
from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends, Header

from futureself.application.letters.add_reflection import (
    AddReflectionUseCase,
    UpdateOverlayDrawingUseCase,
)
from futureself.application.letters.carry_forward_goal import CarryForwardGoalUseCase
from futureself.application.letters.create_letter import CreateLetterUseCase
from futureself.application.letters.delete_letter import DeleteLetterUseCase
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
from futureself.core.config import settings
from futureself.domain.letters.entities import utc_now
from futureself.domain.letters.ports import LetterRepository, ReflectionAssistantPort
from futureself.infrastructure.document_store import InMemoryDocumentStore
from futureself.infrastructure.letters.letter_repository import (
    LETTERS_COLLECTION,
    DocumentLetterRepository,
)
from futureself.infrastructure.letters.reflection_assistant import (
    HttpReflectionAssistant,
)
from futureself.shared.errors import AppError

Clock = Callable[[], datetime]


@lru_cache
def get_document_store() -> InMemoryDocumentStore:
    """Process-wide document store."""
    return InMemoryDocumentStore()


def get_letter_repository() -> LetterRepository:
    collection = get_document_store().collection(LETTERS_COLLECTION)
    return DocumentLetterRepository(collection)


def get_reflection_assistant() -> ReflectionAssistantPort:
    return HttpReflectionAssistant(
        api_url=settings.ai_api_url,
        api_key=settings.ai_api_key,
        model=settings.ai_model,
        timeout=settings.ai_timeout_seconds,
    )


def get_clock() -> Clock:
    return utc_now


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> UUID:
    """Identity of the caller, set by the authentication layer in front of us.

    Raises:
        AppError: UNAUTHORIZED if the header is missing or malformed.
    """
    if not x_user_id:
        raise AppError.unauthorized()
    try:
        return UUID(x_user_id)
    except ValueError as exc:
        raise AppError.unauthorized("Invalid authentication credentials") from exc


def get_create_letter_use_case(
    repo: LetterRepository = Depends(get_letter_repository),
    clock: Clock = Depends(get_clock),
) -> CreateLetterUseCase:
    return CreateLetterUseCase(letter_repo=repo, clock=clock)


def get_letter_use_case(
    repo: LetterRepository = Depends(get_letter_repository),
    clock: Clock = Depends(get_clock),
) -> GetLetterUseCase:
    return GetLetterUseCase(letter_repo=repo, clock=clock)


def get_list_letters_use_case(
    repo: LetterRepository = Depends(get_letter_repository),
) -> ListLettersUseCase:
    return ListLettersUseCase(letter_repo=repo)


def get_deliver_due_letters_use_case(
    repo: LetterRepository = Depends(get_letter_repository),
    clock: Clock = Depends(get_clock),
) -> DeliverDueLettersUseCase:
    return DeliverDueLettersUseCase(letter_repo=repo, clock=clock)


def get_reschedule_letter_use_case(
    repo: LetterRepository = Depends(get_letter_repository),
    clock: Clock = Depends(get_clock),
) -> RescheduleLetterUseCase:
    return RescheduleLetterUseCase(letter_repo=repo, clock=clock)


def get_add_reflection_use_case(
    repo: LetterRepository = Depends(get_letter_repository),
    clock: Clock = Depends(get_clock),
) -> AddReflectionUseCase:
    return AddReflectionUseCase(letter_repo=repo, clock=clock)


def get_update_overlay_drawing_use_case(
    repo: LetterRepository = Depends(get_letter_repository),
    clock: Clock = Depends(get_clock),
) -> UpdateOverlayDrawingUseCase:
    return UpdateOverlayDrawingUseCase(letter_repo=repo, clock=clock)


def get_update_goal_use_case(
    repo: LetterRepository = Depends(get_letter_repository),
    clock: Clock = Depends(get_clock),
) -> UpdateGoalUseCase:
    return UpdateGoalUseCase(letter_repo=repo, clock=clock)


def get_carry_forward_goal_use_case(
    repo: LetterRepository = Depends(get_letter_repository),
    clock: Clock = Depends(get_clock),
) -> CarryForwardGoalUseCase:
    return CarryForwardGoalUseCase(letter_repo=repo, clock=clock)


def get_reflection_prompt_use_case(
    repo: LetterRepository = Depends(get_letter_repository),
    assistant: ReflectionAssistantPort = Depends(get_reflection_assistant),
) -> GenerateReflectionPromptUseCase:
    return GenerateReflectionPromptUseCase(letter_repo=repo, assistant=assistant)


def get_delete_letter_use_case(
    repo: LetterRepository = Depends(get_letter_repository),
) -> DeleteLetterUseCase:
    return DeleteLetterUseCase(letter_repo=repo)
