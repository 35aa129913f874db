"""
Use case: Delete a letter.

Goals in other letters that were carried from or into this one keep
their references; references are weak and may dangle.
"""

import logging

from futureself.application.letters.common import load_owned_letter
from futureself.application.letters.dtos import LetterQuery
from futureself.domain.letters.ports import LetterRepository

logger = logging.getLogger(__name__)


class DeleteLetterUseCase:
    def __init__(self, letter_repo: LetterRepository) -> None:
        self._letter_repo = letter_repo

    def execute(self, query: LetterQuery) -> None:
        letter = load_owned_letter(self._letter_repo, query.letter_id, query.user_id)
        self._letter_repo.delete(letter.id)
        logger.info("Letter deleted by author: id=%s", letter.id)
