from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ...domain.exceptions import NetworkError

logger = logging.getLogger("sqlsketch.llm.gemini")

DEFAULT_ERROR_MESSAGE = "API Request Failed"


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of the service's error envelope."""
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_ERROR_MESSAGE
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return DEFAULT_ERROR_MESSAGE


def _generated_text(body: Any) -> str:
    try:
        return body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise NetworkError("Generation service returned an unexpected response envelope.")


class GeminiClient:
    """
    Text-in/text-out call to the Gemini ``generateContent`` endpoint.
    One POST per prompt; no retries, no timeout unless one is configured.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise NetworkError("Generation service API key is not configured.")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        logger.info("POST generateContent model=%s prompt_chars=%d", self.model, len(prompt))
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_s),
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.url,
                    params={"key": self.api_key},
                    json=payload,
                )
        except httpx.HTTPError as e:
            logger.warning("Generation request failed: %s", type(e).__name__)
            raise NetworkError(str(e) or DEFAULT_ERROR_MESSAGE) from e

        if not response.is_success:
            message = _error_message(response)
            logger.warning("Generation service answered %d: %s", response.status_code, message)
            raise NetworkError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise NetworkError("Generation service returned a non-JSON body.") from e
        return _generated_text(body)
