"""
Per-step image generation.

Each call sees the reference sketch plus at most ONE previous step image
(the newest entry of the context window), so drift does not accumulate
across a long tutorial.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from drawing_tutor import config
from drawing_tutor.ai.genai_client import BaseGenAIClient, ImageOutput, InlineImage
from drawing_tutor.ai.sketch_synthesizer import ReferenceSketch
from drawing_tutor.core.artifact_store import ArtifactStore, timestamped_name
from drawing_tutor.core.context_window import RecentStepContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedStepImage:
    url: Optional[str] = None
    data: Optional[bytes] = None
    mime_type: Optional[str] = None

    def as_inline(self) -> Optional[InlineImage]:
        if self.data is None:
            return None
        return InlineImage(data=self.data, mime_type=self.mime_type or "image/png")


def build_step_prompt(step_text: str, step_number: int, total_steps: int) -> str:
    return (
        "You are a patient art teacher helping children learn to draw step by step.\n\n"
        "IMPORTANT INSTRUCTIONS FOR THIS STEP:\n"
        f"- This is STEP {step_number} of {total_steps} total steps\n"
        f'- ONLY focus on the specific objective for this step: "{step_text}"\n'
        "- DO NOT add elements from future steps\n"
        "- MAINTAIN the progress from the previous step\n"
        "- Keep the drawing in black and white pencil style, no colors\n"
        "- Show clear progression but don't rush to finish the entire drawing early\n\n"
        "Create a black and white pencil drawing that shows ONLY the progress for this "
        f'specific step. Focus exclusively on "{step_text}" and nothing else.'
    )


def context_images(sketch: ReferenceSketch, context: RecentStepContext) -> List[InlineImage]:
    """Reference sketch first, then the most recent step image if there is one."""
    images = [sketch.as_inline()]
    previous = context.latest()
    if previous is not None:
        images.append(previous)
    return images


async def generate_step_image(
    client: BaseGenAIClient,
    store: ArtifactStore,
    step_text: str,
    sketch: ReferenceSketch,
    context: RecentStepContext,
    step_number: int,
    total_steps: int,
) -> GeneratedStepImage:
    """
    Generate and persist the image for one step.

    A failed call or a text-only answer yields an empty result; the step
    is then shown without an image.
    """
    prompt = build_step_prompt(step_text, step_number, total_steps)
    images = context_images(sketch, context)
    logger.debug("Step %d/%d: sending %d image(s)", step_number, total_steps, len(images))

    try:
        output = await client.generate(config.GEMINI_IMAGE_MODEL, prompt, images)
    except Exception as exc:
        logger.error("Error generating step %d image: %s", step_number, exc)
        return GeneratedStepImage()

    if not isinstance(output, ImageOutput):
        logger.warning("No image data received for step %d", step_number)
        return GeneratedStepImage()

    url = store.store(output.data, output.mime_type, timestamped_name(f"step_{step_number}"))
    logger.info("Step %d/%d image saved", step_number, total_steps)
    return GeneratedStepImage(url=url, data=output.data, mime_type=output.mime_type)
