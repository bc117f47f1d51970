"""OpenAI-compatible text-generation client used for copy assistance."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from sitekit.config import Settings

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """Raised when the text-generation service cannot produce a completion."""


@dataclass
class LLMConfig:
    """Endpoint + model used for text generation."""

    api_endpoint: str
    model_id: str
    api_key: str = ""
    max_tokens: int | None = None
    temperature: float = 0.7
    extra_params: dict[str, Any] = field(default_factory=dict)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_endpoint.strip() and self.model_id.strip())

    @classmethod
    def from_settings(cls, settings: Settings) -> LLMConfig:
        return cls(
            api_endpoint=settings.ai_api_endpoint,
            model_id=settings.ai_model_id,
            api_key=settings.ai_api_key,
            max_tokens=settings.ai_max_tokens or None,
        )


class LLMClient:
    """Thin async client for a ``/chat/completions`` endpoint."""

    def __init__(
        self,
        config: LLMConfig,
        *,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @staticmethod
    def _raise_for_status_with_context(response: httpx.Response) -> None:
        try:
            response.raise_for_status()
            return
        except httpx.HTTPStatusError as exc:
            detail = response.text.strip()
            try:
                body = response.json()
                if isinstance(body, dict):
                    if isinstance(body.get("error"), dict):
                        detail = body["error"].get("message") or body["error"].get("code") or detail
                    elif body.get("error"):
                        detail = str(body["error"])
                    elif body.get("message"):
                        detail = str(body["message"])
            except ValueError:
                pass
            if len(detail) > 400:
                detail = detail[:400]
            raise LLMError(
                f"AI request failed ({response.status_code}) at {response.request.url}: {detail}"
            ) from exc

    @staticmethod
    def _extract_content(data: Any) -> str:
        if not isinstance(data, dict):
            raise LLMError("AI response was not a JSON object")
        choices = data.get("choices")
        if isinstance(choices, list) and choices:
            message = choices[0].get("message") if isinstance(choices[0], dict) else None
            if isinstance(message, dict):
                return str(message.get("content") or "")
        # Workers AI native shape: {"result": {"response": "..."}}
        result = data.get("result")
        if isinstance(result, dict) and "response" in result:
            return str(result.get("response") or "")
        if "response" in data:
            return str(data.get("response") or "")
        raise LLMError("AI response did not contain any generated text")

    async def generate(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        response_format: dict | None = None,
    ) -> str:
        """Return the assistant message content for ``messages``."""
        config = self.config
        if not config.is_configured:
            raise LLMError("AI text generation is not configured")

        headers = {"Content-Type": "application/json"}
        if config.api_key:
            headers["Authorization"] = f"Bearer {config.api_key}"

        payload: dict[str, Any] = {
            "model": config.model_id,
            "messages": messages,
            "temperature": temperature if temperature is not None else config.temperature,
        }
        tokens = max_tokens or config.max_tokens
        if tokens:
            payload["max_tokens"] = tokens
        if response_format:
            payload["response_format"] = response_format
        payload.update(config.extra_params)

        url = f"{config.api_endpoint.rstrip('/')}/chat/completions"
        logger.info("AI request to %s model=%s", url, config.model_id)

        try:
            response = await self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise LLMError(f"AI request to {url} failed: {exc}") from exc
        self._raise_for_status_with_context(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise LLMError("AI response was not valid JSON") from exc
        content = self._extract_content(data)
        logger.info("AI response model=%s usage=%s", config.model_id, data.get("usage", {}))
        return content

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
