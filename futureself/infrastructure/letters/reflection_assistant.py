"""
Adapter: AI reflection assistant.

Implements ReflectionAssistantPort against an OpenAI-compatible
chat-completions endpoint (OpenRouter by default). Failures from the
HTTP client are raised unchanged; the use case classifies them.
"""

import json
import logging
from typing import Optional

import requests

from futureself.domain.letters.entities import Letter
from futureself.domain.letters.ports import ReflectionAssistantPort

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You help people reflect on a letter they wrote to their future self. "
    "Reply with one warm, open question of at most 40 words. "
    "Do not quote the letter back."
)


class ReflectionAssistantUnavailable(RuntimeError):
    """The assistant is not configured or returned an unusable reply."""


class HttpReflectionAssistant(ReflectionAssistantPort):
    """Chat-completions client for reflection prompts.

    Attributes:
        api_url: Completions endpoint.
        api_key: Bearer token; None disables the assistant.
        model: Model identifier sent with each request.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        api_url: str,
        api_key: Optional[str],
        model: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._session = session or requests.Session()

    def _build_user_prompt(self, letter: Letter) -> str:
        goals = "; ".join(f"{goal.text} ({goal.status.value})" for goal in letter.goals)
        lines = [f"Title: {letter.title}", f"Letter: {letter.content}"]
        if letter.mood:
            lines.append(f"Mood when writing: {letter.mood}")
        if goals:
            lines.append(f"Goals: {goals}")
        return "\n".join(lines)

    def suggest_prompt(self, letter: Letter) -> str:
        """Ask the model for one reflection question about the letter.

        Raises:
            ReflectionAssistantUnavailable: If no API key is configured or
                the reply has no content.
            requests.RequestException: On transport or HTTP errors.
        """
        if not self.api_key:
            raise ReflectionAssistantUnavailable("Reflection assistant is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": self._build_user_prompt(letter)},
            ],
            "temperature": 0.7,
            "max_tokens": 120,
        }
        response = self._session.post(
            url=self.api_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            data=json.dumps(payload),
            timeout=self.timeout,
        )
        response.raise_for_status()
        result = response.json()

        try:
            prompt = result["choices"][0]["message"]["content"].strip()
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise ReflectionAssistantUnavailable("Malformed completion response") from exc
        if not prompt:
            raise ReflectionAssistantUnavailable("Empty completion response")

        logger.debug("Reflection prompt generated for letter=%s", letter.id)
        return prompt
