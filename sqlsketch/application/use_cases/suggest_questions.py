from __future__ import annotations

import logging

from ...domain.exceptions import NetworkError, ParseError
from ...domain.models import SessionState, SuggestionList
from ...infrastructure.llm.factory import GenerationClient
from ..services.prompt_builder import PromptMode, build_prompt
from ..services.response_interpreter import interpret_suggestions

logger = logging.getLogger("sqlsketch.suggestions")


class SuggestQuestionsUseCase:
    def __init__(self, client: GenerationClient, count: int = 3):
        self.client = client
        self.count = count

    async def execute(self, state: SessionState) -> SuggestionList:
        """Regenerate the session's suggestions; a failure becomes the list's error item."""
        prompt = build_prompt(state.schema, PromptMode.SUGGESTIONS, count=self.count)
        try:
            text = await self.client.generate(prompt)
            suggestions = interpret_suggestions(text)
        except (NetworkError, ParseError) as e:
            logger.warning("Suggestion generation failed: %s", e.message)
            suggestions = SuggestionList(error=e.message)
        state.replace_suggestions(suggestions)
        return suggestions
