from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "SQL Sketch"
    secret_key: str
    log_level: str = "INFO"

    llm_provider: Literal["gemini", "openai"] = "gemini"
    google_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    generation_timeout_s: float | None = None   # None: wait indefinitely

    max_result_rows: int = 5
    suggestion_count: int = 3
    max_preview_rows: int = 5
    max_sessions: int = 1000


settings = Settings()
