import json

import httpx
import pytest

from sqlsketch.domain.exceptions import NetworkError
from sqlsketch.infrastructure.llm.factory import build_generation_client
from sqlsketch.infrastructure.llm.gemini_client import GeminiClient
from sqlsketch.infrastructure.llm.langchain_client import LangChainClient
from sqlsketch.infrastructure.settings import Settings


def _client(handler, api_key="k-123"):
    return GeminiClient(
        api_key=api_key,
        model="gemini-2.0-flash",
        base_url="https://example.test/v1beta/",
        transport=httpx.MockTransport(handler),
    )


def _ok(text):
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


@pytest.mark.asyncio
async def test_generate_posts_envelope_and_returns_text():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return _ok('["q1"]')

    text = await _client(handler).generate("hello")

    assert text == '["q1"]'
    assert seen["url"].path == "/v1beta/models/gemini-2.0-flash:generateContent"
    assert seen["url"].params["key"] == "k-123"
    assert seen["body"] == {"contents": [{"parts": [{"text": "hello"}]}]}


@pytest.mark.asyncio
async def test_error_envelope_message():
    def handler(request):
        return httpx.Response(400, json={"error": {"code": 400, "message": "API key not valid."}})

    with pytest.raises(NetworkError) as exc:
        await _client(handler).generate("x")
    assert exc.value.message == "API key not valid."
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_error_without_envelope_uses_default_message():
    def handler(request):
        return httpx.Response(503, text="upstream down")

    with pytest.raises(NetworkError) as exc:
        await _client(handler).generate("x")
    assert exc.value.message == "API Request Failed"


@pytest.mark.asyncio
async def test_transport_failure_is_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        await _client(handler).generate("x")


@pytest.mark.asyncio
async def test_unexpected_envelope_is_network_error():
    with pytest.raises(NetworkError):
        await _client(lambda request: httpx.Response(200, json={"candidates": []})).generate("x")


@pytest.mark.asyncio
async def test_missing_api_key():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(NetworkError):
        await _client(handler, api_key="").generate("x")


def test_factory_selects_provider():
    gemini = build_generation_client(Settings(secret_key="s", google_api_key="g"))
    assert isinstance(gemini, GeminiClient)
    assert gemini.api_key == "g"
    openai = build_generation_client(Settings(secret_key="s", llm_provider="openai", openai_model="gpt-4o-mini"))
    assert isinstance(openai, LangChainClient)
    assert openai.model == "gpt-4o-mini"


@pytest.mark.asyncio
async def test_langchain_client_requires_key():
    with pytest.raises(NetworkError):
        await LangChainClient(api_key=None, model="gpt-4o-mini").generate("x")
