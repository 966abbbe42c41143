from __future__ import annotations

import json
from typing import Any, List, Optional

import numpy as np
import pandas as pd

from ...domain.models import EMPTY_TABLE_MESSAGE, ChartSpec, GenerationResult, TableView


def format_cell(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def to_table_view(result: GenerationResult) -> TableView:
    if result.is_empty:
        return TableView(headers=[], rows=[], empty_message=EMPTY_TABLE_MESSAGE)
    headers = list(result.rows[0].keys())
    rows = [[format_cell(v) for v in row.values()] for row in result.rows]
    return TableView(headers=headers, rows=rows)


def _numeric(values: List[Any]) -> List[Optional[float]]:
    series = pd.to_numeric(pd.Series(values, dtype=object), errors="coerce")
    series = series.astype(float)
    return [float(v) if np.isfinite(v) else None for v in series]


def to_chart_spec(result: GenerationResult) -> Optional[ChartSpec]:
    """Categorical labels from the first column, one series from the second."""
    if result.is_empty:
        return None
    keys = list(result.rows[0].keys())
    label_key = keys[0] if keys else None
    value_key = keys[1] if len(keys) > 1 else None
    return ChartSpec(
        chart_type=result.chart_type,
        labels=[row.get(label_key) for row in result.rows],
        series_label=value_key,
        values=_numeric([row.get(value_key) for row in result.rows]),
    )
