"""
Use case: Ask the AI assistant for a reflection question.

Input: LetterQuery
Output: str
Side effects: One call to the reflection assistant.
Failure cases: AI_SERVICE (any assistant failure), NOT_FOUND, FORBIDDEN,
    INVALID_ID.
"""

import logging

from futureself.application.letters.common import ensure_delivered, load_owned_letter
from futureself.application.letters.dtos import LetterQuery
from futureself.domain.letters.ports import LetterRepository, ReflectionAssistantPort
from futureself.shared.errors import AppError

logger = logging.getLogger(__name__)

FRIENDLY_MESSAGE = "We couldn't come up with a reflection prompt right now. Please try again later."


class GenerateReflectionPromptUseCase:
    """Delegates to the assistant; every assistant failure becomes AI_SERVICE."""

    def __init__(
        self,
        letter_repo: LetterRepository,
        assistant: ReflectionAssistantPort,
    ) -> None:
        self._letter_repo = letter_repo
        self._assistant = assistant

    def execute(self, query: LetterQuery) -> str:
        letter = load_owned_letter(self._letter_repo, query.letter_id, query.user_id)
        ensure_delivered(letter)
        try:
            return self._assistant.suggest_prompt(letter)
        except Exception as exc:
            logger.warning(
                "Reflection assistant failed for letter=%s: %s",
                letter.id,
                type(exc).__name__,
            )
            raise AppError.ai_service(FRIENDLY_MESSAGE, original=exc) from exc
