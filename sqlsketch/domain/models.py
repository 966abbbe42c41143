from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

NO_FILE_SCHEMA = "No file uploaded. User is asking general questions."
EMPTY_TABLE_MESSAGE = "No data generated"
DEFAULT_EXPLANATION = "Done."
CHART_COLORS = ("#3b82f6", "#10b981", "#f59e0b", "#ef4444")


class ChartType(str, Enum):
    BAR = "bar"
    PIE = "pie"

    @classmethod
    def normalize(cls, value: Any) -> "ChartType":
        """Only an exact ``"pie"`` selects a pie chart; anything else is a bar chart."""
        return cls.PIE if value == cls.PIE.value else cls.BAR


@dataclass(frozen=True)
class SchemaDescription:
    filename: Optional[str] = None
    columns: Tuple[str, ...] = ()

    @property
    def has_file(self) -> bool:
        return self.filename is not None

    @property
    def text(self) -> str:
        if self.filename is None:
            return NO_FILE_SCHEMA
        return f"Table: {self.filename}, Columns: {', '.join(self.columns)}"


@dataclass(frozen=True)
class GenerationResult:
    sql_query: str
    rows: Tuple[Dict[str, Any], ...]
    explanation: str
    chart_type: ChartType = ChartType.BAR

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class SuggestionList:
    questions: Tuple[Any, ...] = ()
    error: Optional[str] = None

    @property
    def display_items(self) -> List[str]:
        if self.error is not None:
            return [f"Error: {self.error}"]
        return [q if isinstance(q, str) else str(q) for q in self.questions]


@dataclass(frozen=True)
class TableView:
    headers: List[str]
    rows: List[List[str]]
    empty_message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.empty_message is not None


@dataclass(frozen=True)
class ChartSpec:
    chart_type: ChartType
    labels: List[Any]
    series_label: Optional[str]
    values: List[Optional[float]]
    colors: Tuple[str, ...] = CHART_COLORS

    def as_dict(self) -> Dict[str, Any]:
        return {
            "type": self.chart_type.value,
            "labels": self.labels,
            "series_label": self.series_label,
            "values": self.values,
            "colors": list(self.colors),
        }


@dataclass
class SessionState:
    """Everything that is "current" for one browser session. Nothing is kept once replaced."""
    schema: SchemaDescription = field(default_factory=SchemaDescription)
    preview: List[Dict[str, Any]] = field(default_factory=list)
    suggestions: SuggestionList = field(default_factory=SuggestionList)
    result: Optional[GenerationResult] = None
    table: Optional[TableView] = None
    chart: Optional[ChartSpec] = None

    def replace_schema(self, schema: SchemaDescription, preview: List[Dict[str, Any]]) -> None:
        self.schema = schema
        self.preview = preview

    def replace_suggestions(self, suggestions: SuggestionList) -> None:
        self.suggestions = suggestions

    def replace_result(
        self,
        result: GenerationResult,
        table: TableView,
        chart: Optional[ChartSpec],
    ) -> None:
        self.release_chart()
        self.result = result
        self.table = table
        self.chart = chart

    def release_chart(self) -> None:
        self.chart = None
