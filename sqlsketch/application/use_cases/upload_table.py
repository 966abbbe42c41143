from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from ...domain.models import SchemaDescription, SessionState, SuggestionList
from ...infrastructure.data.schema_reader import decode_upload, read_columns, read_preview
from .suggest_questions import SuggestQuestionsUseCase

logger = logging.getLogger("sqlsketch.upload")


@dataclass(frozen=True)
class UploadOutcome:
    schema: SchemaDescription
    preview: List[Dict[str, Any]]
    suggestions: SuggestionList


def describe_upload(filename: str, text: str) -> SchemaDescription:
    return SchemaDescription(filename=filename, columns=tuple(read_columns(filename, text)))


class UploadTableUseCase:
    def __init__(self, suggester: SuggestQuestionsUseCase, max_preview_rows: int = 5):
        self.suggester = suggester
        self.max_preview_rows = max_preview_rows

    async def execute(self, state: SessionState, filename: str, content: bytes) -> UploadOutcome:
        text = decode_upload(content)
        schema = describe_upload(filename, text)
        preview = read_preview(filename, text, self.max_preview_rows)
        logger.info("Loaded %s with %d column(s)", filename, len(schema.columns))
        state.replace_schema(schema, preview)
        suggestions = await self.suggester.execute(state)
        return UploadOutcome(schema=schema, preview=preview, suggestions=suggestions)
