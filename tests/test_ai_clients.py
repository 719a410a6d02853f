"""Unit tests for Groq/Ollama clients and the client factory."""

from __future__ import annotations

import json
from types import SimpleNamespace

import httpx
import openai
import pytest

from ai import GroqClient, OllamaClient, get_ai_client
from config import GroqSettings, OllamaSettings, ScrapeCreatorsSettings, Settings


GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"


class _FakeCompletions:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self._error is not None:
            raise self._error
        return self._response


def _groq_with(completions: _FakeCompletions) -> GroqClient:
    client = GroqClient(api_key="gsk-test")
    client._async_client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return client


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.mark.asyncio
async def test_groq_without_key_is_unavailable_and_makes_no_call():
    completions = _FakeCompletions(response=_completion("hi"))
    client = _groq_with(completions)
    client.api_key = None

    result = await client.generate("hello")

    assert not client.is_available()
    assert not result.ok
    assert result.error == "GROQ_API_KEY not configured"
    assert completions.kwargs is None


@pytest.mark.asyncio
async def test_groq_success_sends_single_user_message():
    completions = _FakeCompletions(response=_completion("Here is a summary."))
    client = _groq_with(completions)

    result = await client.generate("Summarize", temperature=0.1, max_tokens=64)

    assert result.ok
    assert result.text == "Here is a summary."
    assert completions.kwargs["model"] == "llama-3.3-70b-versatile"
    assert completions.kwargs["messages"] == [{"role": "user", "content": "Summarize"}]
    assert completions.kwargs["temperature"] == 0.1
    assert completions.kwargs["max_tokens"] == 64


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [_completion(""), _completion(None), SimpleNamespace(choices=[])])
async def test_groq_empty_content_is_a_failure(response):
    client = _groq_with(_FakeCompletions(response=response))

    result = await client.generate("Summarize")

    assert not result.ok
    assert "Invalid response from Groq API" in result.error


@pytest.mark.asyncio
async def test_groq_status_error_reports_code_and_message():
    response = httpx.Response(429, request=httpx.Request("POST", GROQ_URL))
    error = openai.APIStatusError(
        "rate limited",
        response=response,
        body={"error": {"message": "Rate limit reached"}},
    )
    client = _groq_with(_FakeCompletions(error=error))

    result = await client.generate("Summarize")

    assert result.error == "Groq API error: 429 - Rate limit reached"


@pytest.mark.asyncio
async def test_groq_connection_error_is_a_failure():
    error = openai.APIConnectionError(request=httpx.Request("POST", GROQ_URL))
    client = _groq_with(_FakeCompletions(error=error))

    result = await client.generate("Summarize")

    assert not result.ok
    assert result.error.startswith("Groq API connection error")


@pytest.mark.asyncio
async def test_groq_sdk_client_has_retries_disabled():
    client = GroqClient(api_key="gsk-test", timeout=12.0)

    sdk_client = client._get_async_client()
    try:
        assert sdk_client.max_retries == 0
        assert str(sdk_client.base_url).startswith("https://api.groq.com/openai/v1")
    finally:
        await client.aclose()
    assert client._async_client is None


@pytest.mark.asyncio
async def test_ollama_success_posts_generate_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"model": "llama3.1:8b", "response": "Backup summary", "done": True})

    client = OllamaClient(base_url="http://ollama.test:11434/", transport=httpx.MockTransport(handler))

    result = await client.generate("Summarize", temperature=0.5, max_tokens=256)

    assert result.ok
    assert result.text == "Backup summary"
    assert seen["url"] == "http://ollama.test:11434/api/generate"
    assert seen["body"] == {
        "model": "llama3.1:8b",
        "prompt": "Summarize",
        "stream": False,
        "options": {"temperature": 0.5, "num_predict": 256, "num_ctx": 8192},
    }


@pytest.mark.asyncio
async def test_ollama_connection_refused_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    client = OllamaClient(transport=httpx.MockTransport(handler))

    result = await client.generate("Summarize")

    assert not result.ok
    assert "Ollama service unavailable at http://localhost:11434" in result.error


@pytest.mark.asyncio
async def test_ollama_timeout_is_reported():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out")

    client = OllamaClient(timeout=5.0, transport=httpx.MockTransport(handler))

    result = await client.generate("Summarize")

    assert "timed out after 5s" in result.error


@pytest.mark.asyncio
async def test_ollama_error_status_includes_error_field():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "model 'llama3.1:8b' not found"})

    client = OllamaClient(transport=httpx.MockTransport(handler))

    result = await client.generate("Summarize")

    assert result.error == "Ollama API error: 404 - model 'llama3.1:8b' not found"


@pytest.mark.asyncio
async def test_ollama_empty_response_is_a_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"response": "  ", "done": True})

    client = OllamaClient(transport=httpx.MockTransport(handler))

    result = await client.generate("Summarize")

    assert not result.ok
    assert "empty response" in result.error


def test_ollama_without_base_url_is_unavailable():
    client = OllamaClient(base_url="")

    assert not client.is_available()
    assert client.unavailable_reason == "OLLAMA_BASE_URL not configured"


def test_factory_builds_clients_from_settings():
    settings = Settings(
        scrapecreators=ScrapeCreatorsSettings(api_key=None),
        groq=GroqSettings(api_key="gsk-test", model="llama-3.1-70b-versatile"),
        ollama=OllamaSettings(base_url="http://ollama.test:11434", model="llama3.1:8b"),
    )

    groq = get_ai_client("groq", settings=settings)
    ollama = get_ai_client("ollama", settings=settings, model="mistral")

    assert isinstance(groq, GroqClient)
    assert groq.model == "llama-3.1-70b-versatile"
    assert groq.is_available()
    assert isinstance(ollama, OllamaClient)
    assert ollama.model == "mistral"
    assert ollama.base_url == "http://ollama.test:11434"

    with pytest.raises(ValueError):
        get_ai_client("anthropic", settings=settings)
