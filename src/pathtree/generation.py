from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import requests

from .config import Settings
from .errors import UpstreamError

logger = logging.getLogger(__name__)


class GenerationClient(Protocol):
    model: str

    def generate(self, prompt: str, temperature: float, json_mode: bool = False) -> str: ...


class _HTTPClient:
    def __init__(self, base_url: str, model: str, timeout: int = 120) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

    def _post(self, path: str, payload: dict[str, object], headers: dict[str, str] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = requests.post(url, json=payload, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            logger.error("Generation request to %s failed: %s", url, exc)
            raise UpstreamError(f"Generation service unavailable: {exc}") from exc
        except ValueError as exc:
            logger.error("Generation service at %s returned a non-JSON body", url)
            raise UpstreamError("Generation service returned an unreadable response") from exc


class OllamaClient(_HTTPClient):
    def generate(self, prompt: str, temperature: float, json_mode: bool = False) -> str:
        payload: dict[str, object] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": temperature},
        }
        if json_mode:
            payload["format"] = "json"
        body = self._post("/api/generate", payload)
        if not isinstance(body, dict):
            return ""
        return body.get("response") or ""


class MistralClient(_HTTPClient):
    def __init__(self, base_url: str, model: str, api_key: str, timeout: int = 120) -> None:
        if not api_key:
            raise ValueError("MISTRAL_API_KEY is not set")
        super().__init__(base_url, model, timeout)
        self.api_key = api_key

    def generate(self, prompt: str, temperature: float, json_mode: bool = False) -> str:
        payload: dict[str, object] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}
        body = self._post(
            "/v1/chat/completions",
            payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )
        try:
            content = body["choices"][0]["message"].get("content")
        except (KeyError, IndexError, TypeError, AttributeError):
            content = None

        if content is None:
            return ""
        # chunked content arrives as a list of parts
        return content if isinstance(content, str) else json.dumps(content)


def build_client(settings: Settings) -> GenerationClient:
    if settings.provider == "ollama":
        return OllamaClient(settings.ollama_base_url, settings.ollama_model, settings.timeout)
    if settings.provider == "mistral":
        return MistralClient(
            settings.mistral_base_url,
            settings.mistral_model,
            settings.mistral_api_key,
            settings.timeout,
        )
    raise ValueError(f"Unknown generation provider: {settings.provider}")
