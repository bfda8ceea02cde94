"""
Reference sketch synthesis.

Turns the uploaded photo into a monochrome pencil sketch whose level of
detail follows the requested difficulty. The sketch is the shared visual
context for every later model call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from drawing_tutor import config
from drawing_tutor.ai.genai_client import BaseGenAIClient, ImageOutput, InlineImage
from drawing_tutor.core.artifact_store import ArtifactStore, timestamped_name

logger = logging.getLogger(__name__)

_PENCIL_ONLY = (
    "CRITICALLY IMPORTANT: Use ONLY black and white, NO COLORS WHATSOEVER. "
    "Style: pencil drawing."
)

_DIFFICULTY_CLAUSES: Dict[str, str] = {
    "beginner": (
        "as a very simple black and white pencil sketch, with only the most "
        f"basic outlines and minimal detail. {_PENCIL_ONLY}"
    ),
    "intermediate": (
        "as a moderately detailed black and white pencil sketch, with clear "
        f"lines and some shading. {_PENCIL_ONLY}"
    ),
    "advanced": (
        "as a highly detailed black and white pencil sketch, with intricate "
        f"lines, shading, and texture. {_PENCIL_ONLY}"
    ),
}
DEFAULT_CLAUSE = f"as a black and white pencil sketch. {_PENCIL_ONLY}"


@dataclass(frozen=True)
class ReferenceSketch:
    url: str
    data: bytes
    mime_type: str

    def as_inline(self) -> InlineImage:
        return InlineImage(data=self.data, mime_type=self.mime_type)


def build_sketch_prompt(difficulty: str) -> str:
    """Difficulty is matched case-insensitively; unknown values get the default clause."""
    clause = _DIFFICULTY_CLAUSES.get((difficulty or "").strip().lower(), DEFAULT_CLAUSE)
    return (
        f"Convert the uploaded image into {clause} Ensure the result is appropriate "
        "for children learning to draw and maintains a clear, educational style."
    )


async def synthesize_sketch(
    client: BaseGenAIClient,
    store: ArtifactStore,
    image: InlineImage,
    difficulty: str,
) -> Optional[ReferenceSketch]:
    """
    Generate and persist the reference sketch.

    Returns None when the model call fails or yields no image. Errors
    while saving the artifact propagate.
    """
    prompt = build_sketch_prompt(difficulty)
    logger.info("Generating reference sketch (difficulty=%s)", difficulty)
    try:
        output = await client.generate(config.GEMINI_IMAGE_MODEL, prompt, [image])
    except Exception as exc:
        logger.error("Reference sketch generation failed: %s", exc)
        return None

    if not isinstance(output, ImageOutput):
        logger.warning("No image data received from model for reference sketch")
        return None

    url = store.store(output.data, output.mime_type, timestamped_name("reference_sketch"))
    return ReferenceSketch(url=url, data=output.data, mime_type=output.mime_type)
