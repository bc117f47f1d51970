"""AI copy assistance: marketing copy from a business description, text polish.

Expected failures (short input, no AI endpoint, upstream errors, unparseable
output) come back as ``CopyAssistError`` values rather than exceptions, so the
wizard can show the message and keep going.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from pydantic import ValidationError

from sitekit.schemas.copy import GeneratedCopy
from sitekit.services.llm_client import LLMClient, LLMError

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 10
MAX_POLISH_LENGTH = 2000

SHORT_DESCRIPTION_MESSAGE = (
    "Please provide a more detailed business description "
    f"(at least {MIN_DESCRIPTION_LENGTH} characters)."
)
PARSE_FAILED_MESSAGE = "Failed to parse AI response. Please try again."
GENERATE_FAILED_MESSAGE = "Failed to generate content. Please try again."
UNAVAILABLE_MESSAGE = "AI not available. Configure an AI text-generation endpoint."
POLISH_FAILED_MESSAGE = "Failed to process text with AI"

COPYWRITER_SYSTEM_PROMPT = (
    "You are a helpful marketing copywriter. Always respond with valid JSON only."
)
POLISH_SYSTEM_PROMPT = (
    "You are a professional marketing copywriter for a small business. "
    "Rewrite rough, informal text as polished marketing copy suitable for a "
    "website, menu or promotional material. Keep the original meaning and key "
    "information, use benefit-focused language and stay concise. "
    "Only respond with the polished text, nothing else."
)


class CopyAssistErrorReason(str, Enum):
    INPUT = "input"
    UNAVAILABLE = "unavailable"
    UPSTREAM = "upstream"
    PARSE = "parse"


@dataclass(frozen=True)
class CopyAssistOk:
    content: Any


@dataclass(frozen=True)
class CopyAssistError:
    message: str
    reason: CopyAssistErrorReason = CopyAssistErrorReason.UPSTREAM
    details: str | None = None


CopyAssistResult = CopyAssistOk | CopyAssistError


class CopyAssist(Protocol):
    async def generate(
        self,
        description: str,
        industry: str | None = None,
        business_name: str | None = None,
    ) -> CopyAssistResult: ...


def description_error(description: str | None) -> str | None:
    if len((description or "").strip()) < MIN_DESCRIPTION_LENGTH:
        return SHORT_DESCRIPTION_MESSAGE
    return None


def build_generate_messages(
    description: str, industry: str | None = None, business_name: str | None = None
) -> list[dict[str, str]]:
    prompt = f"""You are a marketing copywriter helping create website content.

Based on this business information, generate marketing content:

Business Name: {business_name or "Not specified"}
Industry: {industry or "Not specified"}
Description: {description.strip()}

Generate the following (respond ONLY with valid JSON, no markdown):
{{
  "tagline": "A catchy tagline, max 8 words",
  "heroHeadline": "A compelling headline for the hero section, max 10 words",
  "heroSubheadline": "A persuasive subheadline, 2 sentences max",
  "services": [
    {{"title": "Service 1 name", "description": "1 sentence description"}},
    {{"title": "Service 2 name", "description": "1 sentence description"}},
    {{"title": "Service 3 name", "description": "1 sentence description"}}
  ],
  "seoDescription": "An SEO meta description, max 160 characters"
}}"""
    return [
        {"role": "system", "content": COPYWRITER_SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


def extract_first_json_object(text: str) -> dict | None:
    """Decode the first balanced ``{...}`` span in ``text``.

    Braces inside JSON string literals are ignored. Returns None when there is
    no balanced span or the span is not valid JSON.
    """
    start = text.find("{")
    if start < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                try:
                    value = json.loads(text[start : index + 1])
                except json.JSONDecodeError:
                    return None
                return value if isinstance(value, dict) else None
    return None


def parse_generated_copy(text: str) -> CopyAssistResult:
    data = extract_first_json_object(text)
    if data is None:
        logger.warning("Could not extract JSON from AI response: %.200s", text)
        return CopyAssistError(PARSE_FAILED_MESSAGE, CopyAssistErrorReason.PARSE)
    try:
        return CopyAssistOk(GeneratedCopy.model_validate(data))
    except ValidationError as exc:
        logger.warning("AI response JSON had an unexpected shape: %s", exc)
        return CopyAssistError(PARSE_FAILED_MESSAGE, CopyAssistErrorReason.PARSE)


def polish_input_error(text: Any) -> str | None:
    if not text or not isinstance(text, str):
        return "Missing required field: text"
    if len(text) > MAX_POLISH_LENGTH:
        return f"Text too long. Maximum {MAX_POLISH_LENGTH} characters."
    if not text.strip():
        return "Text cannot be empty"
    return None


class CopyAssistClient:
    """Copy assistant backed by an ``LLMClient``."""

    def __init__(self, llm: LLMClient) -> None:
        self._llm = llm

    async def generate(
        self,
        description: str,
        industry: str | None = None,
        business_name: str | None = None,
    ) -> CopyAssistResult:
        error = description_error(description)
        if error:
            return CopyAssistError(error, CopyAssistErrorReason.INPUT)
        if not self._llm.config.is_configured:
            return CopyAssistError(UNAVAILABLE_MESSAGE, CopyAssistErrorReason.UNAVAILABLE)

        messages = build_generate_messages(description, industry, business_name)
        try:
            text = await self._llm.generate(messages)
        except LLMError as exc:
            logger.error("AI generation error: %s", exc)
            return CopyAssistError(GENERATE_FAILED_MESSAGE, CopyAssistErrorReason.UPSTREAM)
        return parse_generated_copy(text)

    async def polish(self, text: Any) -> CopyAssistResult:
        """Rewrite ``text`` as marketing copy; ``content`` is the polished string."""
        error = polish_input_error(text)
        if error:
            return CopyAssistError(error, CopyAssistErrorReason.INPUT)
        if not self._llm.config.is_configured:
            return CopyAssistError(UNAVAILABLE_MESSAGE, CopyAssistErrorReason.UNAVAILABLE)

        messages = [
            {"role": "system", "content": POLISH_SYSTEM_PROMPT},
            {"role": "user", "content": text},
        ]
        try:
            polished = await self._llm.generate(messages)
        except LLMError as exc:
            logger.error("AI polish error: %s", exc)
            return CopyAssistError(
                POLISH_FAILED_MESSAGE, CopyAssistErrorReason.UPSTREAM, details=str(exc)
            )
        return CopyAssistOk(polished.strip())
