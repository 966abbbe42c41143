from __future__ import annotations

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from .presentation.api import router
from .infrastructure.settings import settings
from .infrastructure.logging_config import setup_logging

logger = setup_logging()

app = FastAPI(title=settings.app_name)
app.add_middleware(SessionMiddleware, secret_key=settings.secret_key)
app.include_router(router)

logger.info("Generation provider: %s", settings.llm_provider)

@app.get("/health")
async def health():
    return {"status": "ok"}
