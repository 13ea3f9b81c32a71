"""Remote text generation used for the admin request summary."""
from __future__ import annotations

from typing import Any, Protocol

import httpx


class SummarizerError(RuntimeError):
    """Raised when no summary text could be produced."""


class Summarizer(Protocol):
    async def generate(self, prompt: str) -> str:
        """Return generated text for ``prompt``."""


class NoOpSummarizer:
    """Used when no API key is configured."""

    async def generate(self, prompt: str) -> str:
        raise SummarizerError("summarizer not configured")


class GeminiSummarizer:
    """Client for the Generative Language ``generateContent`` endpoint."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gemini-2.5-flash",
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self._api_key = api_key
        self._model = model
        self._request_url = f"{api_base.rstrip('/')}/models/{model}:generateContent"
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None

    @property
    def model(self) -> str:
        return self._model

    @staticmethod
    def _extract_text(payload: Any) -> str:
        candidates = payload.get("candidates") if isinstance(payload, dict) else None
        if not candidates:
            return ""
        parts = ((candidates[0] or {}).get("content") or {}).get("parts") or []
        return "".join(str(part.get("text") or "") for part in parts if isinstance(part, dict))

    async def generate(self, prompt: str) -> str:
        body = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        try:
            response = await self._client.post(
                self._request_url,
                headers={"x-goog-api-key": self._api_key},
                json=body,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise SummarizerError(f"summary request failed: {exc}") from exc

        text = self._extract_text(payload).strip()
        if not text:
            raise SummarizerError("summary response contained no text")
        return text

    async def aclose(self) -> None:  # pragma: no cover - best effort cleanup
        if self._owns_client:
            await self._client.aclose()


_summarizer: Summarizer = NoOpSummarizer()


def configure_summarizer(summarizer: Summarizer) -> None:
    global _summarizer
    _summarizer = summarizer


def get_summarizer() -> Summarizer:
    return _summarizer


__all__ = [
    "GeminiSummarizer",
    "NoOpSummarizer",
    "Summarizer",
    "SummarizerError",
    "configure_summarizer",
    "get_summarizer",
]
