"""
Turns free-form model output into typed results.

Extraction is a bracket-matching heuristic, not a JSON grammar: it takes the span
from the first ``{`` to the last ``}`` (else first ``[`` to last ``]``). A brace or
bracket inside a string value, or an object nested in an array payload, selects the
wrong span and the parse fails or yields the wrong shape. Payloads here are always
the outermost structure, so this is accepted as-is.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from ...domain.exceptions import ParseError
from ...domain.models import (
    DEFAULT_EXPLANATION,
    ChartType,
    GenerationResult,
    SuggestionList,
)

logger = logging.getLogger("sqlsketch.interpreter")


def _span(text: str, open_ch: str, close_ch: str) -> Optional[Tuple[int, int]]:
    start = text.find(open_ch)
    end = text.rfind(close_ch)
    if start == -1 or end == -1 or end < start:
        return None
    return start, end + 1


def extract_candidate_json(text: str) -> str:
    """Pick the substring of ``text`` most likely to be the JSON payload."""
    for open_ch, close_ch in (("{", "}"), ("[", "]")):
        span = _span(text, open_ch, close_ch)
        if span:
            return text[span[0]:span[1]]
    return text


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse(text: str) -> Tuple[Any, str]:
    candidate = extract_candidate_json(text)
    try:
        return json.loads(candidate, parse_constant=_reject_constant), candidate
    except ValueError as e:
        logger.warning("Model output is not valid JSON: %r", text[:200])
        raise ParseError(f"Could not parse JSON from model output: {e}", raw_text=text, candidate=candidate) from e


def parse_candidate(text: str) -> Any:
    return _parse(text)[0]


def _rows(value: Any, text: str, candidate: str) -> Tuple[dict, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ParseError("'result_data' must be an array of objects.", raw_text=text, candidate=candidate)
    rows: List[dict] = []
    for row in value:
        if not isinstance(row, Mapping):
            raise ParseError("'result_data' must be an array of objects.", raw_text=text, candidate=candidate)
        rows.append(dict(row))
    return tuple(rows)


def interpret_answer(text: str) -> GenerationResult:
    data, candidate = _parse(text)
    if not isinstance(data, dict):
        raise ParseError("Expected a JSON object in model output.", raw_text=text, candidate=candidate)

    sql_query = data.get("sql_query")
    if not isinstance(sql_query, str):
        raise ParseError("Model output is missing 'sql_query'.", raw_text=text, candidate=candidate)

    explanation = data.get("explanation")
    if not explanation:
        explanation = DEFAULT_EXPLANATION

    return GenerationResult(
        sql_query=sql_query,
        rows=_rows(data.get("result_data"), text, candidate),
        explanation=str(explanation),
        chart_type=ChartType.normalize(data.get("chart_type")),
    )


def interpret_suggestions(text: str) -> SuggestionList:
    data, candidate = _parse(text)
    if not isinstance(data, list):
        raise ParseError("Expected a JSON array of questions in model output.", raw_text=text, candidate=candidate)
    return SuggestionList(questions=tuple(data))
