"""
Pytest configuration and fixtures
"""
import os
from typing import List

import pytest

# Settings are read at import time; keep tests off real credentials
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ["LLM_PROVIDER"] = "gemini"
os.environ["GOOGLE_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""

from sqlsketch.domain.models import SessionState


class FakeClient:
    """Generation client returning canned text (or raising) and recording prompts."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def state() -> SessionState:
    return SessionState()
