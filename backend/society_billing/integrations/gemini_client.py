# backend/society_billing/integrations/gemini_client.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ..domain.billing.errors import EnrichmentUnavailableError


@dataclass(frozen=True)
class GeminiConfig:
    """
    Gemini exposes text generation at:
      POST {base_url}/models/{model}:generateContent
    with the API key in the x-goog-api-key header.
    """
    api_key: Optional[str] = None
    model: str = "gemini-1.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = 5.0
    temperature: float = 0.1


class TextGenerator:
    """
    Anything that turns a prompt into completion text.
    Implementations raise EnrichmentUnavailableError for every failure.
    """
    def generate(self, prompt: str) -> str:
        raise NotImplementedError


class GeminiClient(TextGenerator):
    def __init__(self, cfg: Optional[GeminiConfig] = None, *, transport: Optional[httpx.BaseTransport] = None):
        self.cfg = cfg or GeminiConfig()
        self.base = self.cfg.base_url.rstrip("/")
        self._transport = transport

    def enabled(self) -> bool:
        return bool(self.cfg.api_key)

    def _url(self) -> str:
        return f"{self.base}/models/{self.cfg.model}:generateContent"

    def _payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": float(self.cfg.temperature),
                "responseMimeType": "application/json",
            },
        }

    def generate(self, prompt: str) -> str:
        """
        Single round trip, no retry. The timeout bounds connect + read.
        """
        if not self.cfg.api_key:
            raise EnrichmentUnavailableError("gemini_api_key not set")

        headers = {"x-goog-api-key": self.cfg.api_key}

        try:
            with httpx.Client(timeout=self.cfg.timeout_seconds, transport=self._transport) as client:
                r = client.post(self._url(), json=self._payload(prompt), headers=headers)
                r.raise_for_status()
                data = r.json()
        except httpx.TimeoutException:
            raise EnrichmentUnavailableError(f"gemini_timeout:{self.cfg.timeout_seconds}s")
        except httpx.HTTPStatusError as e:
            raise EnrichmentUnavailableError(f"gemini_http_{e.response.status_code}")
        except httpx.HTTPError as e:
            raise EnrichmentUnavailableError(f"gemini_transport:{type(e).__name__}")
        except ValueError:
            # r.json() on a non-JSON body
            raise EnrichmentUnavailableError("gemini_non_json_body")

        return extract_text(data)


def extract_text(data: Any) -> str:
    """
    generateContent shape:
      {"candidates":[{"content":{"parts":[{"text":"..."}, ...]}}], ...}
    A prompt blocked by safety filters comes back with no candidates.
    """
    if not isinstance(data, dict):
        raise EnrichmentUnavailableError("gemini_unexpected_shape")

    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        feedback = data.get("promptFeedback") or {}
        block = feedback.get("blockReason") if isinstance(feedback, dict) else None
        raise EnrichmentUnavailableError(f"gemini_no_candidates:{block}" if block else "gemini_no_candidates")

    first = candidates[0] if isinstance(candidates[0], dict) else {}
    content = first.get("content") if isinstance(first.get("content"), dict) else {}
    parts = content.get("parts")
    if not isinstance(parts, list):
        raise EnrichmentUnavailableError("gemini_unexpected_shape")

    text = "".join(p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str))
    if not text.strip():
        raise EnrichmentUnavailableError("gemini_empty_text")
    return text
