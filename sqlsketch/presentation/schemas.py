from pydantic import BaseModel
from typing import List, Dict, Any, Optional

class SchemaOut(BaseModel):
    filename: Optional[str]
    columns: List[str]
    description: str

class SuggestionsOut(BaseModel):
    questions: List[Any]
    error: Optional[str] = None
    items: List[str]

class UploadResponse(BaseModel):
    table: SchemaOut
    preview: List[Dict[str, Any]]
    suggestions: SuggestionsOut

class AskRequest(BaseModel):
    question: str = ""

class TableOut(BaseModel):
    headers: List[str]
    rows: List[List[str]]
    empty_message: Optional[str] = None

class ChartOut(BaseModel):
    type: str
    labels: List[Any]
    series_label: Optional[str]
    values: List[Optional[float]]
    colors: List[str]

class AskResponse(BaseModel):
    sql_query: str
    explanation: str
    chart_type: str
    table: TableOut
    chart: Optional[ChartOut] = None

class StateResponse(BaseModel):
    table: SchemaOut
    preview: List[Dict[str, Any]]
    suggestions: SuggestionsOut
    result: Optional[AskResponse] = None
