from __future__ import annotations

import logging
from typing import Optional

from ...domain.models import GenerationResult, SessionState
from ...infrastructure.llm.factory import GenerationClient
from ..services.prompt_builder import PromptMode, build_prompt
from ..services.response_interpreter import interpret_answer
from ..services.result_renderer import to_chart_spec, to_table_view

logger = logging.getLogger("sqlsketch.ask")


class AskQuestionUseCase:
    def __init__(self, client: GenerationClient, max_rows: int = 5):
        self.client = client
        self.max_rows = max_rows

    async def execute(self, state: SessionState, question: str) -> Optional[GenerationResult]:
        """
        Answer ``question`` against the session schema and make the result current.
        Returns None without calling the service when the question is blank.
        NetworkError and ParseError propagate and leave the state untouched.
        """
        question = (question or "").strip()
        if not question:
            return None

        prompt = build_prompt(state.schema, PromptMode.ANSWER, question, max_rows=self.max_rows)
        text = await self.client.generate(prompt)
        result = interpret_answer(text)
        state.replace_result(result, to_table_view(result), to_chart_spec(result))
        logger.info("Answered question with %d row(s), chart=%s", len(result.rows), result.chart_type.value)
        return result
