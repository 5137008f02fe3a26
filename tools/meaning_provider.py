"""Providers that turn an English word into a Japanese explanation.

Every provider implements ``generate_meaning(word, detailed)`` and raises
:class:`UpstreamError` when no text could be produced.  The flashcard client
only depends on that capability, so the real proxy and the offline mock can
be swapped freely.
"""
from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from dotenv import load_dotenv

load_dotenv()
MEANING_PROVIDER = os.environ.get("MEANING_PROVIDER", "mock")
PROXY_URL = os.environ.get("PROXY_URL", "http://localhost:8000/api/gemini-proxy")
PROXY_TIMEOUT = float(os.environ.get("UPSTREAM_TIMEOUT", "60"))

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """The text-generation service failed or returned nothing usable."""

    def __init__(self, message: str, status: Optional[int] = None, details: str = ""):
        super().__init__(message)
        self.status = status
        self.details = details


def extract_generated_text(data: Dict[str, Any]) -> str:
    """Return the first candidate's text from a ``generateContent`` response."""
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise UpstreamError("Response did not contain generated text") from None


class MeaningProvider(ABC):

    @abstractmethod
    def generate_meaning(self, word: str, detailed: bool = False) -> str:
        """Return explanatory text for ``word``."""

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
        return False


class MockMeaningProvider(MeaningProvider):
    """Answers every word with a canned sentence, no network involved."""

    TEMPLATE = "{word}は、「テスト」や「挑戦」を意味する名詞・動詞です。"

    def generate_meaning(self, word: str, detailed: bool = False) -> str:
        mock_response = {
            "candidates": [
                {"content": {"parts": [{"text": self.TEMPLATE.format(word=word)}]}}
            ]
        }
        return extract_generated_text(mock_response)


class ProxyMeaningProvider(MeaningProvider):
    """Asks the Gemini proxy endpoint for the explanation."""

    def __init__(
        self,
        url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = PROXY_TIMEOUT,
    ):
        self.url = url or PROXY_URL
        self.client = client or httpx.Client(timeout=timeout)

    def generate_meaning(self, word: str, detailed: bool = False) -> str:
        try:
            response = self.client.post(
                self.url, json={"word": word, "detailed": detailed}
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Proxy request failed: {exc}") from exc

        if not response.is_success:
            message, details = self._error_fields(response)
            raise UpstreamError(message, status=response.status_code, details=details)

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError(f"Invalid JSON from proxy: {exc}") from exc
        return extract_generated_text(data)

    @staticmethod
    def _error_fields(response: httpx.Response) -> tuple[str, str]:
        try:
            body = response.json()
        except ValueError:
            return f"API Error: {response.status_code}", response.text
        if not isinstance(body, dict):
            return f"API Error: {response.status_code}", response.text
        message = body.get("error") or f"API Error: {response.status_code}"
        return message, body.get("details", "")

    def close(self) -> None:
        self.client.close()


def get_meaning_provider(name: Optional[str] = None) -> MeaningProvider:
    """Build the provider selected by ``name`` or ``MEANING_PROVIDER``."""
    name = (name or MEANING_PROVIDER).lower()
    if name == "mock":
        return MockMeaningProvider()
    if name == "proxy":
        return ProxyMeaningProvider()
    raise ValueError(f"Unknown meaning provider: {name}")
