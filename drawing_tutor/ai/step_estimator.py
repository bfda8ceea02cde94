"""
Step count estimation.

The model classifies the subject's complexity into a step count:
  - simple   (basic shapes, few elements)      8–12
  - moderate (several elements, some detail)  12–16
  - complex  (many elements, lots of detail)  16–20
"""

from __future__ import annotations

import logging
import re

from drawing_tutor import config
from drawing_tutor.ai.genai_client import BaseGenAIClient, InlineImage, TextOutput

logger = logging.getLogger(__name__)

MIN_STEPS: int = 8
MAX_STEPS: int = 20
DEFAULT_STEPS: int = 12

_LEADING_INT = re.compile(r"^[+-]?\d+")


def build_estimate_prompt(description: str) -> str:
    return (
        "Analyze this image and its description to determine the optimal number of "
        "steps for a children's drawing tutorial.\n\n"
        "Consider:\n"
        "- Image complexity (simple shapes, moderate detail, complex details)\n"
        "- Number of distinct elements that need to be drawn separately\n"
        "- Logical progression for children learning to draw\n\n"
        f"Respond with JUST a number between {MIN_STEPS} and {MAX_STEPS} representing "
        "the optimal number of steps.\n"
        "- Simple images (basic shapes, few elements): 8-12 steps\n"
        "- Moderate images (several elements, some detail): 12-16 steps\n"
        "- Complex images (many elements, lots of detail): 16-20 steps\n\n"
        f"Image Description: {description}\n\n"
        "Return ONLY the number of steps as a single integer."
    )


def parse_step_count(text: str) -> int:
    """Leading integer of *text*, or ``DEFAULT_STEPS`` if absent or out of range."""
    match = _LEADING_INT.match((text or "").strip())
    if match is None:
        return DEFAULT_STEPS
    value = int(match.group())
    if value < MIN_STEPS or value > MAX_STEPS:
        return DEFAULT_STEPS
    return value


async def estimate_step_count(
    client: BaseGenAIClient,
    sketch_image: InlineImage,
    description: str,
) -> int:
    try:
        output = await client.generate(
            config.GEMINI_TEXT_MODEL, build_estimate_prompt(description), [sketch_image]
        )
    except Exception as exc:
        logger.error("Step count estimation failed: %s", exc)
        return DEFAULT_STEPS

    if not isinstance(output, TextOutput):
        logger.warning("Step count estimator returned no text, using default of %d", DEFAULT_STEPS)
        return DEFAULT_STEPS

    steps = parse_step_count(output.text)
    logger.info("Determined number of steps: %d (raw=%r)", steps, output.text.strip()[:20])
    return steps
