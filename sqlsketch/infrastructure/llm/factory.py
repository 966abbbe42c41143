from __future__ import annotations

from typing import Protocol

from ..settings import Settings, settings as default_settings
from .gemini_client import GeminiClient
from .langchain_client import LangChainClient


class GenerationClient(Protocol):
    async def generate(self, prompt: str) -> str: ...


def build_generation_client(cfg: Settings | None = None) -> GenerationClient:
    cfg = cfg or default_settings
    if cfg.llm_provider == "openai":
        return LangChainClient(
            api_key=cfg.openai_api_key,
            model=cfg.openai_model,
            timeout_s=cfg.generation_timeout_s,
        )
    return GeminiClient(
        api_key=cfg.google_api_key,
        model=cfg.gemini_model,
        base_url=cfg.gemini_base_url,
        timeout_s=cfg.generation_timeout_s,
    )
