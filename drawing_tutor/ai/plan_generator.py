"""Ask the model for a numbered tutorial plan."""

from __future__ import annotations

import logging
from typing import List

from drawing_tutor import config
from drawing_tutor.ai.genai_client import BaseGenAIClient, InlineImage, TextOutput
from drawing_tutor.core.step_planner import generic_plan, parse_plan

logger = logging.getLogger(__name__)


def build_plan_prompt(description: str, total_steps: int) -> str:
    return (
        f"Create a structured plan for teaching children to draw this image in {total_steps} steps.\n\n"
        "For each step, provide:\n"
        "1. A very specific objective (1-2 short sentences, very clear)\n"
        "2. What elements to focus on in this step\n"
        "3. What to avoid (don't jump ahead to future elements)\n\n"
        f"Format your response as a numbered list with exactly {total_steps} steps, like:\n"
        "1. [Specific objective for step 1]\n"
        "2. [Specific objective for step 2]\n"
        "...\n"
        f"{total_steps}. [Specific objective for step {total_steps}]\n\n"
        f"Image Description: {description}"
    )


async def generate_plan(
    client: BaseGenAIClient,
    sketch_image: InlineImage,
    description: str,
    total_steps: int,
) -> List[str]:
    """Always returns exactly *total_steps* objectives."""
    try:
        output = await client.generate(
            config.GEMINI_TEXT_MODEL, build_plan_prompt(description, total_steps), [sketch_image]
        )
    except Exception as exc:
        logger.error("Tutorial plan generation failed, using generic plan: %s", exc)
        return generic_plan(total_steps)

    text = output.text if isinstance(output, TextOutput) else ""
    plan = parse_plan(text, total_steps)
    logger.info("Tutorial plan ready (%d steps)", len(plan))
    return plan
