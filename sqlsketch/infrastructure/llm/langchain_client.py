from __future__ import annotations

import logging
from typing import Optional

from langchain_openai import ChatOpenAI

from ...domain.exceptions import NetworkError

logger = logging.getLogger("sqlsketch.llm.openai")


class LangChainClient:
    """Same contract as GeminiClient, backed by a LangChain chat model."""

    def __init__(self, api_key: Optional[str], model: str, timeout_s: Optional[float] = None):
        self.api_key = api_key
        self.model = model
        self.timeout_s = timeout_s

    def _llm(self) -> ChatOpenAI:
        return ChatOpenAI(
            model=self.model,
            temperature=0.0,
            api_key=self.api_key,
            timeout=self.timeout_s,
            max_retries=0,
        )

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise NetworkError("Generation service API key is not configured.")

        logger.info("ainvoke model=%s prompt_chars=%d", self.model, len(prompt))
        try:
            resp = await self._llm().ainvoke([{"role": "user", "content": prompt}])
        except Exception as e:
            logger.warning("Generation request failed: %s", type(e).__name__)
            raise NetworkError(str(e) or "API Request Failed") from e
        content = getattr(resp, "content", "") or ""
        return content if isinstance(content, str) else str(content)
