"""HTTP client for a local Ollama language-model server."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable
from urllib.parse import urljoin, urlsplit

import requests

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_MODEL = "phi4:latest"
TOP_P = 0.9
TOP_K = 40


class OllamaError(Exception):
    """Raised when the Ollama server cannot be reached or answers badly."""


@dataclass
class OllamaConfig:
    """Connection and sampling settings for an Ollama server."""

    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    temperature: float = 0.7
    max_tokens: int | None = 2048
    timeout: float = 60.0


@dataclass
class ChatMessage:
    """One message of a conversation."""

    role: str
    content: str

    @classmethod
    def system(cls, content: str) -> ChatMessage:
        return cls("system", content)

    @classmethod
    def user(cls, content: str) -> ChatMessage:
        return cls("user", content)

    @classmethod
    def assistant(cls, content: str) -> ChatMessage:
        return cls("assistant", content)


_ROLE_LABELS = {"system": "System", "user": "User", "assistant": "Assistant"}


class OllamaClient:
    """Sends prompts to an Ollama server and returns the generated text."""

    def __init__(self, config: OllamaConfig | None = None) -> None:
        self._config = config if config is not None else OllamaConfig()
        parts = urlsplit(self._config.base_url)
        if not parts.scheme or not parts.netloc:
            raise OllamaError(f"Invalid Ollama base URL: {self._config.base_url}")
        self._session = requests.Session()
        log.info("Initialized Ollama client for model: %s", self._config.model)

    @property
    def model(self) -> str:
        return self._config.model

    @model.setter
    def model(self, name: str) -> None:
        log.info("Switching Ollama model from %s to %s", self._config.model, name)
        self._config.model = name

    def _url(self, path: str) -> str:
        return urljoin(self._config.base_url, path)

    def _options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"temperature": self._config.temperature}
        if self._config.max_tokens is not None:
            options["num_predict"] = self._config.max_tokens
        options["top_p"] = TOP_P
        options["top_k"] = TOP_K
        return options

    def generate(self, prompt: str) -> str:
        """Return the model's completion of ``prompt``."""
        payload = {
            "model": self._config.model,
            "prompt": prompt,
            "stream": False,
            "options": self._options(),
        }
        log.debug("Sending request to Ollama: %s", prompt)
        try:
            response = self._session.post(
                self._url("/api/generate"), json=payload, timeout=self._config.timeout
            )
        except requests.RequestException as exc:
            raise OllamaError(f"Failed to send request to Ollama: {exc}") from exc

        if not response.ok:
            text = response.text or "Unknown error"
            raise OllamaError(
                f"Ollama API error {response.status_code} {response.reason}: {text}"
            )

        try:
            data = response.json()
            text = data["response"]
        except (ValueError, KeyError, TypeError) as exc:
            raise OllamaError("Failed to parse Ollama response") from exc
        if not isinstance(text, str):
            raise OllamaError("Failed to parse Ollama response")

        total = data.get("total_duration")
        log.debug(
            "Ollama response: %s tokens, duration: %sms",
            data.get("eval_count") or 0,
            total // 1_000_000 if isinstance(total, int) else None,
        )
        return text

    def chat(self, messages: Iterable[ChatMessage]) -> str:
        """Flatten ``messages`` into one prompt and generate a reply."""
        return self.generate(self.format_chat_prompt(messages))

    def format_chat_prompt(self, messages: Iterable[ChatMessage]) -> str:
        lines = [
            f"{_ROLE_LABELS.get(message.role, message.role)}: {message.content}\n"
            for message in messages
        ]
        return "".join(lines) + "Assistant: "

    def health_check(self) -> bool:
        """Return whether the server answers its model listing successfully."""
        try:
            response = self._session.get(
                self._url("/api/tags"), timeout=self._config.timeout
            )
        except requests.RequestException as exc:
            log.warning("Ollama health check failed: %s", exc)
            return False
        return response.ok