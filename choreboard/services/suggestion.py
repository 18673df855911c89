"""
Chore-name suggestions from an OpenAI chat model.
Always returns a name: fixed fallbacks cover a missing key, an empty answer,
and any API failure.
"""
import logging
from typing import Optional

import openai

from choreboard.config import (
    DEFAULT_SUGGESTION_MODEL,
    SUGGESTION_EMPTY_FALLBACK,
    SUGGESTION_ERROR_FALLBACK,
    SUGGESTION_UNCONFIGURED_FALLBACK,
)

logger = logging.getLogger(__name__)

PROMPT = (
    "Suggest one new simple household chore for a child. "
    "Answer with the chore name only, no introduction and no quotes. "
    "For example: 'Put away your toys'."
)


class ChoreSuggester:
    def __init__(self, api_key: Optional[str], model: str = DEFAULT_SUGGESTION_MODEL, client=None):
        self.model = model
        if client is not None:
            self._client = client
        elif api_key:
            self._client = openai.OpenAI(api_key=api_key)
        else:
            logger.warning("OPENAI_API_KEY is not set, chore suggestions will use a fixed name")
            self._client = None

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def suggest(self) -> str:
        if self._client is None:
            return SUGGESTION_UNCONFIGURED_FALLBACK

        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": PROMPT}],
                temperature=0.8,
                max_tokens=20,
            )
            content = response.choices[0].message.content or ""
        except Exception as exc:
            logger.error("Chore suggestion failed: %s", exc)
            return SUGGESTION_ERROR_FALLBACK

        text = content.strip().replace('"', "")
        return text or SUGGESTION_EMPTY_FALLBACK
