# backend/tests/test_gemini_client.py
from __future__ import annotations

import json

import httpx
import pytest

from society_billing.domain.billing import EnrichmentUnavailableError
from society_billing.integrations.gemini_client import GeminiClient, GeminiConfig, extract_text


def _client(handler, **cfg) -> GeminiClient:
    return GeminiClient(GeminiConfig(api_key="test-key", **cfg), transport=httpx.MockTransport(handler))


def _completion(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def test_generate_posts_prompt_and_returns_text():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion('{"total": 1}'))

    out = _client(handler, model="gemini-1.5-flash").generate("bill please")
    assert out == '{"total": 1}'
    assert seen["url"].endswith("/models/gemini-1.5-flash:generateContent")
    assert seen["key"] == "test-key"
    assert seen["body"]["contents"][0]["parts"][0]["text"] == "bill please"


def test_disabled_client_never_calls_network():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=_completion("x"))

    c = GeminiClient(GeminiConfig(api_key=None), transport=httpx.MockTransport(handler))
    assert c.enabled() is False
    with pytest.raises(EnrichmentUnavailableError):
        c.generate("x")
    assert calls == []


def test_timeout_becomes_enrichment_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(EnrichmentUnavailableError) as ei:
        _client(handler, timeout_seconds=2.0).generate("x")
    assert ei.value.reason.startswith("gemini_timeout")


def test_connect_error_becomes_enrichment_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    with pytest.raises(EnrichmentUnavailableError) as ei:
        _client(handler).generate("x")
    assert ei.value.reason == "gemini_transport:ConnectError"


def test_http_error_status_becomes_enrichment_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": {"message": "quota"}})

    with pytest.raises(EnrichmentUnavailableError) as ei:
        _client(handler).generate("x")
    assert ei.value.reason == "gemini_http_429"


def test_non_json_body_becomes_enrichment_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(EnrichmentUnavailableError) as ei:
        _client(handler).generate("x")
    assert ei.value.reason == "gemini_non_json_body"


def test_extract_text_joins_parts_and_reports_blocks():
    data = {"candidates": [{"content": {"parts": [{"text": "```json\n"}, {"text": '{"total": 5}'}, {"text": "\n```"}]}}]}
    assert extract_text(data) == '```json\n{"total": 5}\n```'

    with pytest.raises(EnrichmentUnavailableError) as ei:
        extract_text({"promptFeedback": {"blockReason": "SAFETY"}})
    assert ei.value.reason == "gemini_no_candidates:SAFETY"

    with pytest.raises(EnrichmentUnavailableError):
        extract_text({"candidates": [{"content": {"parts": [{"text": "   "}]}}]})
