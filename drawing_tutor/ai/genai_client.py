"""
Thin adapter over the Google Gen AI SDK.

Every model call in the tutorial pipeline goes through ``BaseGenAIClient``.
The SDK response is decoded once, here, into one of three typed outputs:

  1. ``TextOutput``  — the model answered in text
  2. ``ImageOutput`` — the model returned an inline image
  3. ``EmptyOutput`` — nothing usable came back

Pipeline components never inspect raw SDK response objects.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from google import genai
from google.genai import types

from drawing_tutor import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InlineImage:
    """Image bytes sent to (or received from) the model."""
    data: bytes
    mime_type: str = "image/png"


@dataclass(frozen=True)
class TextOutput:
    text: str


@dataclass(frozen=True)
class ImageOutput:
    data: bytes
    mime_type: str


@dataclass(frozen=True)
class EmptyOutput:
    pass


ModelOutput = Union[TextOutput, ImageOutput, EmptyOutput]


def _iter_parts(response: Any):
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            yield part


def decode_response(response: Any) -> ModelOutput:
    """
    Collapse an SDK response into a ``ModelOutput``.

    The first inline image wins; otherwise all text parts are joined.
    """
    texts = []
    for part in _iter_parts(response):
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            return ImageOutput(data=inline.data, mime_type=inline.mime_type or "image/png")
        text = getattr(part, "text", None)
        if text:
            texts.append(text)
    if texts:
        return TextOutput(text="".join(texts))
    return EmptyOutput()


class BaseGenAIClient(ABC):
    """Abstract base — swap implementations without touching the pipeline."""

    @abstractmethod
    async def generate(
        self,
        model: str,
        prompt: str,
        images: Sequence[InlineImage] = (),
    ) -> ModelOutput:
        ...


class GeminiClient(BaseGenAIClient):
    """
    Gemini implementation backed by ``google.genai.Client``.

    The SDK client is created lazily so the app can start (and serve
    /api/health) without an API key; the first model call then fails with
    ``RuntimeError``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout_seconds: float = config.GENAI_TIMEOUT_SECONDS,
    ) -> None:
        self.api_key = api_key if api_key is not None else config.GEMINI_API_KEY
        self.timeout_seconds = timeout_seconds
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise RuntimeError("Gemini API not configured — set GEMINI_API_KEY in the environment")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(
        self,
        model: str,
        prompt: str,
        images: Sequence[InlineImage] = (),
    ) -> ModelOutput:
        client = self._get_client()
        contents: list = [prompt]
        contents.extend(types.Part.from_bytes(data=img.data, mime_type=img.mime_type) for img in images)

        logger.debug("Calling %s with %d image(s): %.100s...", model, len(images), prompt)
        response = await asyncio.wait_for(
            client.aio.models.generate_content(model=model, contents=contents),
            timeout=self.timeout_seconds,
        )
        return decode_response(response)
