"""Describe the uploaded image with the vision model."""

from __future__ import annotations

import logging

from drawing_tutor import config
from drawing_tutor.ai.genai_client import BaseGenAIClient, InlineImage, TextOutput
from drawing_tutor.errors import AnalysisError

logger = logging.getLogger(__name__)

VISION_PROMPT = (
    "Describe the main subject of this image in detail, "
    "focusing on shapes, proportions, and key features."
)


async def analyze_image(client: BaseGenAIClient, image: InlineImage) -> str:
    """Return a free-text description of *image*. Raises ``AnalysisError``."""
    try:
        output = await client.generate(config.GEMINI_TEXT_MODEL, VISION_PROMPT, [image])
    except Exception as exc:
        logger.error("Image analysis failed: %s", exc)
        raise AnalysisError(f"Image analysis failed: {exc}") from exc

    if not isinstance(output, TextOutput) or not output.text.strip():
        raise AnalysisError("Vision model returned no description")
    return output.text.strip()
