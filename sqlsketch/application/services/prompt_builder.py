from __future__ import annotations

from enum import Enum

from ...domain.models import SchemaDescription


class PromptMode(str, Enum):
    SUGGESTIONS = "suggestions"
    ANSWER = "answer"


SUGGESTIONS_TMPL = """\
Context: {schema}.
Task: Suggest {count} simple analytical questions about this data.
Output: a JSON array of exactly {count} short question strings ONLY. No Markdown, no code fences, no other text.
Example: ["Question 1", "Question 2", "Question 3"]
"""

ANSWER_TMPL = """\
Role: SQL Engine & Data Simulator.
Context: {schema}.
Question: "{question}"

Requirements:
1. A valid SQL query answering the question.
2. Realistic mock data for the query result (at most {max_rows} rows, flat objects only).
3. A brief explanation.
4. A chart type for the result: "bar" or "pie".

Output Format: a single JSON object ONLY. No Markdown, no code fences, no text before or after it.
{{
    "sql_query": "SELECT * FROM ...",
    "result_data": [ {{"col": "val"}} ],
    "explanation": "text...",
    "chart_type": "bar"
}}
"""


def build_suggestions_prompt(schema: SchemaDescription, count: int = 3) -> str:
    return SUGGESTIONS_TMPL.format(schema=schema.text, count=count)


def build_answer_prompt(schema: SchemaDescription, question: str, max_rows: int = 5) -> str:
    return ANSWER_TMPL.format(schema=schema.text, question=question, max_rows=max_rows)


def build_prompt(
    schema: SchemaDescription,
    mode: PromptMode,
    question: str = "",
    *,
    count: int = 3,
    max_rows: int = 5,
) -> str:
    if mode is PromptMode.SUGGESTIONS:
        return build_suggestions_prompt(schema, count=count)
    return build_answer_prompt(schema, question, max_rows=max_rows)
