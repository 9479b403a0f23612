"""Reply summarization through an external text-generation provider.

This module provides:

- `SummarizerClient`, an HTTP client for the Gemini `generateContent` API
- `SummaryService`, which turns a post's reply texts into a summary and
  falls back to fixed messages whenever the provider cannot answer
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from threadline.core.errors import SummarizerError
from threadline.core.settings import settings

# Configure logger for this module
logger = logging.getLogger(__name__)

SUMMARY_FAILED = "Summary unavailable."
SUMMARY_EMPTY = "No summary available."


@dataclass(frozen=True)
class SummarizerConfig:
    """Immutable configuration for the summarization provider."""

    api_key: str | None
    base_url: str
    model: str
    timeout_seconds: float
    prompt: str


def load_summarizer_config() -> SummarizerConfig:
    """Build configuration object from global settings."""

    return SummarizerConfig(
        api_key=settings.summarizer_api_key,
        base_url=settings.summarizer_base_url,
        model=settings.summarizer_model,
        timeout_seconds=float(settings.summarizer_timeout_seconds),
        prompt=settings.summarizer_prompt,
    )


def _first_candidate_text(body: Any) -> str | None:
    if not isinstance(body, dict):
        raise SummarizerError("Summarizer response is not a JSON object")
    candidates = body.get("candidates") or []
    if not isinstance(candidates, list):
        raise SummarizerError("Summarizer candidates are not a list")
    if not candidates:
        return None
    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    if not isinstance(parts, list):
        raise SummarizerError("Summarizer content parts are not a list")
    if not parts:
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) else None


class SummarizerClient:
    """HTTP client wrapper for the text-generation provider."""

    def __init__(
        self,
        config: SummarizerConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_summarizer_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self.config.api_key)

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    def build_payload(self, text: str) -> dict[str, Any]:
        """Return the request body asking for a summary of `text`."""
        return {
            "contents": [
                {"parts": [{"text": f"{self.config.prompt}\n{text}"}]},
            ],
        }

    async def generate(self, text: str) -> str | None:
        """Ask the provider to summarize `text`.

        Returns:
            The first candidate's text, or None when the provider returned no candidate.

        Raises:
            SummarizerError: If no API key is configured, the request fails,
                the provider answers with an error status or the body cannot be decoded.
        """
        if not self.enabled:
            raise SummarizerError("Summarizer API key is not configured")

        client = await self._ensure_client()
        path = f"/v1beta/models/{self.config.model}:generateContent"
        try:
            response = await client.post(
                path,
                params={"key": self.config.api_key},
                json=self.build_payload(text),
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            raise SummarizerError(
                f"Summarizer responded with {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SummarizerError(f"Summarizer request failed: {exc}") from exc
        except ValueError as exc:
            raise SummarizerError("Summarizer returned malformed JSON") from exc

        try:
            return _first_candidate_text(body)
        except (AttributeError, IndexError, KeyError, TypeError) as exc:
            raise SummarizerError("Summarizer response has an unexpected shape") from exc

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class SummaryService:
    """Summarizes reply threads, never failing the caller."""

    def __init__(self, client: SummarizerClient) -> None:
        self.client = client

    async def summarize(self, texts: Sequence[str]) -> str:
        """Return a summary of `texts` joined by newlines in the given order.

        Returns `SUMMARY_EMPTY` when there is nothing to summarize or the
        provider produced no text, and `SUMMARY_FAILED` when the provider
        call failed.
        """
        joined = "\n".join(texts)
        if not joined.strip():
            return SUMMARY_EMPTY

        try:
            summary = await self.client.generate(joined)
        except SummarizerError as exc:
            logger.warning("Summarization failed: %s", exc)
            return SUMMARY_FAILED

        if not summary or not summary.strip():
            return SUMMARY_EMPTY
        return summary


class _SummarizerClientSingleton:
    """Holder for the process-wide summarizer client."""

    _instance: SummarizerClient | None = None

    @classmethod
    def get_instance(cls) -> SummarizerClient:
        if cls._instance is None:
            cls._instance = SummarizerClient()
        return cls._instance

    @classmethod
    def peek(cls) -> SummarizerClient | None:
        return cls._instance


def get_summarizer_client() -> SummarizerClient:
    """Return a singleton summarizer client instance."""
    return _SummarizerClientSingleton.get_instance()


async def get_summary_service() -> SummaryService:
    """Return a summary service bound to the shared client.

    Resolved on the event loop, so the shared client is created at most once.
    """
    return SummaryService(get_summarizer_client())


async def close_summarizer_client() -> None:
    """Close the shared client if one was created."""
    client = _SummarizerClientSingleton.peek()
    if client is not None:
        await client.close()
