from __future__ import annotations

import secrets
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, Response, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..application.use_cases.ask_question import AskQuestionUseCase
from ..application.use_cases.suggest_questions import SuggestQuestionsUseCase
from ..application.use_cases.upload_table import UploadTableUseCase
from ..domain.exceptions import DomainError, NetworkError, ParseError, UnsupportedFileError
from ..domain.models import SchemaDescription, SessionState, SuggestionList
from ..infrastructure.data.session_repo import InMemorySessionRepository
from ..infrastructure.llm.factory import GenerationClient, build_generation_client
from ..infrastructure.settings import settings
from .schemas import (
    AskRequest,
    AskResponse,
    SchemaOut,
    StateResponse,
    SuggestionsOut,
    UploadResponse,
)

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).parent / "web" / "templates"))

_repo = InMemorySessionRepository(max_sessions=settings.max_sessions)


def get_session_id(request: Request) -> str:
    sid = request.session.get("sid")
    if not sid:
        sid = secrets.token_hex(16)
        request.session["sid"] = sid
    return sid


def get_state(request: Request) -> SessionState:
    return _repo.get(get_session_id(request))


def _drop_session(request: Request) -> None:
    sid = request.session.pop("sid", None)
    if sid:
        _repo.clear(sid)


def get_generation_client() -> GenerationClient:
    return build_generation_client(settings)


def _suggester(client: GenerationClient) -> SuggestQuestionsUseCase:
    return SuggestQuestionsUseCase(client, count=settings.suggestion_count)


# ---------- serialization ----------

def _schema_out(schema: SchemaDescription) -> SchemaOut:
    return SchemaOut(filename=schema.filename, columns=list(schema.columns), description=schema.text)


def _suggestions_out(suggestions: SuggestionList) -> SuggestionsOut:
    return SuggestionsOut(
        questions=list(suggestions.questions),
        error=suggestions.error,
        items=suggestions.display_items,
    )


def _result_out(state: SessionState) -> Optional[AskResponse]:
    if state.result is None or state.table is None:
        return None
    return AskResponse(
        sql_query=state.result.sql_query,
        explanation=state.result.explanation,
        chart_type=state.result.chart_type.value,
        table=state.table.__dict__,
        chart=state.chart.as_dict() if state.chart else None,
    )


def _state_out(state: SessionState) -> StateResponse:
    return StateResponse(
        table=_schema_out(state.schema),
        preview=state.preview,
        suggestions=_suggestions_out(state.suggestions),
        result=_result_out(state),
    )


def _http_error(e: DomainError) -> HTTPException:
    if isinstance(e, ParseError):
        return HTTPException(status_code=422, detail={"message": e.message, "raw_text": e.raw_text})
    if isinstance(e, NetworkError):
        return HTTPException(status_code=502, detail=e.message)
    return HTTPException(status_code=400, detail=str(e))


def _render(request: Request, state: SessionState, alert: Optional[str] = None, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "index.html",
        {"state": _state_out(state), "alert": alert},
        status_code=status_code,
    )


# ---------- page ----------

@router.get("/", response_class=HTMLResponse)
async def index(request: Request, state: SessionState = Depends(get_state)):
    return _render(request, state)


@router.post("/upload", response_class=HTMLResponse)
async def upload_form(
    request: Request,
    file: UploadFile = File(...),
    state: SessionState = Depends(get_state),
    client: GenerationClient = Depends(get_generation_client),
):
    uc = UploadTableUseCase(_suggester(client), max_preview_rows=settings.max_preview_rows)
    try:
        await uc.execute(state, file.filename or "", await file.read())
    except UnsupportedFileError as e:
        return _render(request, state, alert=str(e), status_code=400)
    return RedirectResponse("/", status_code=303)


@router.post("/suggestions", response_class=HTMLResponse)
async def suggestions_form(
    state: SessionState = Depends(get_state),
    client: GenerationClient = Depends(get_generation_client),
):
    await _suggester(client).execute(state)
    return RedirectResponse("/", status_code=303)


@router.post("/ask", response_class=HTMLResponse)
async def ask_form(
    request: Request,
    question: str = Form(""),
    state: SessionState = Depends(get_state),
    client: GenerationClient = Depends(get_generation_client),
):
    uc = AskQuestionUseCase(client, max_rows=settings.max_result_rows)
    try:
        await uc.execute(state, question)
    except (NetworkError, ParseError) as e:
        return _render(request, state, alert=f"Generation error: {e.message}", status_code=_http_error(e).status_code)
    return RedirectResponse("/", status_code=303)


@router.post("/reset", response_class=HTMLResponse)
async def reset_form(request: Request):
    _drop_session(request)
    return RedirectResponse("/", status_code=303)


# ---------- JSON API ----------

@router.get("/api/state", response_model=StateResponse)
async def current_state(state: SessionState = Depends(get_state)):
    return _state_out(state)


@router.post("/api/upload", response_model=UploadResponse)
async def upload(
    file: UploadFile = File(...),
    state: SessionState = Depends(get_state),
    client: GenerationClient = Depends(get_generation_client),
):
    uc = UploadTableUseCase(_suggester(client), max_preview_rows=settings.max_preview_rows)
    try:
        outcome = await uc.execute(state, file.filename or "", await file.read())
    except UnsupportedFileError as e:
        raise _http_error(e) from e
    return UploadResponse(
        table=_schema_out(outcome.schema),
        preview=outcome.preview,
        suggestions=_suggestions_out(outcome.suggestions),
    )


@router.post("/api/suggestions", response_model=SuggestionsOut)
async def suggestions(
    state: SessionState = Depends(get_state),
    client: GenerationClient = Depends(get_generation_client),
):
    return _suggestions_out(await _suggester(client).execute(state))


@router.post("/api/ask", response_model=AskResponse, responses={204: {"description": "Blank question, nothing asked"}})
async def ask(
    payload: AskRequest,
    state: SessionState = Depends(get_state),
    client: GenerationClient = Depends(get_generation_client),
):
    uc = AskQuestionUseCase(client, max_rows=settings.max_result_rows)
    try:
        result = await uc.execute(state, payload.question)
    except (NetworkError, ParseError) as e:
        raise _http_error(e) from e
    if result is None:
        return Response(status_code=204)
    return _result_out(state)


@router.post("/api/reset", status_code=204)
async def reset(request: Request):
    """Drop the session's state; the next request starts from the "no file" schema."""
    _drop_session(request)
    return Response(status_code=204)
