"""
Tutorial orchestrator — the single entry point called by the API.

Flow:
1. Generate a reference pencil sketch from the upload (fatal if missing)
2. Describe the upload with the vision model (fatal on failure)
3. Estimate the number of steps (defaults to 12)
4. Generate a plan of exactly N step objectives (generic plan on failure)
5. For each step, in order: generate the step image from the sketch and
   the most recent step image
6. Attach narration to the overview and to every step
7. Return the assembled tutorial

All model calls are sequential: each step depends on the previous one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from drawing_tutor.ai.genai_client import BaseGenAIClient, InlineImage
from drawing_tutor.ai.narration import narrate
from drawing_tutor.ai.plan_generator import generate_plan
from drawing_tutor.ai.sketch_synthesizer import synthesize_sketch
from drawing_tutor.ai.step_estimator import estimate_step_count
from drawing_tutor.ai.step_image_generator import generate_step_image
from drawing_tutor.ai.vision_analyzer import analyze_image
from drawing_tutor.core.artifact_store import ArtifactStore
from drawing_tutor.core.context_window import RecentStepContext
from drawing_tutor.errors import SketchGenerationError

logger = logging.getLogger(__name__)


@dataclass
class StepRecord:
    """One tutorial step; ``audio`` is attached after all images exist."""
    step_number: int
    description: str
    image_url: Optional[str] = None
    audio: Optional[str] = None


@dataclass(frozen=True)
class SketchSummary:
    image_url: str
    description: str
    audio: str


@dataclass
class TutorialResult:
    """Complete result of the tutorial pipeline."""
    sketch: SketchSummary
    steps: List[StepRecord] = field(default_factory=list)

    def to_response(self) -> Dict[str, Any]:
        return {
            "sketch": {
                "imageUrl": self.sketch.image_url,
                "description": self.sketch.description,
                "audio": self.sketch.audio,
            },
            "steps": [
                {
                    "step": s.step_number,
                    "description": s.description,
                    "imageUrl": s.image_url,
                    "audio": s.audio,
                }
                for s in self.steps
            ],
        }


class TutorialOrchestrator:
    """Runs one tutorial request. Holds no state between requests."""

    def __init__(self, client: BaseGenAIClient, store: ArtifactStore) -> None:
        self.client = client
        self.store = store

    async def generate(self, image: InlineImage, difficulty: str) -> TutorialResult:
        logger.info("Generating adaptive tutorial for %s level", difficulty)

        # --- 1. Reference sketch ---
        sketch = await synthesize_sketch(self.client, self.store, image, difficulty)
        if sketch is None:
            raise SketchGenerationError("Failed to generate the reference pencil sketch.")
        sketch_image = sketch.as_inline()

        # --- 2. Describe the upload ---
        description = await analyze_image(self.client, image)
        logger.info("Image analysis complete")

        # --- 3–4. Step count and plan ---
        total_steps = await estimate_step_count(self.client, sketch_image, description)
        plan = await generate_plan(self.client, sketch_image, description, total_steps)

        # --- 5. Step images ---
        context = RecentStepContext()
        steps: List[StepRecord] = []
        for i in range(total_steps):
            step_number = i + 1
            objective = plan[i]
            logger.info("Step %d/%d objective: %s", step_number, total_steps, objective)

            generated = await generate_step_image(
                self.client, self.store, objective, sketch, context, step_number, total_steps
            )
            steps.append(StepRecord(step_number=step_number, description=objective, image_url=generated.url))

            previous = generated.as_inline()
            if previous is not None:
                context.push(previous)

        missing = sum(1 for s in steps if s.image_url is None)
        if missing:
            logger.warning("%d of %d steps have no image", missing, total_steps)

        # --- 6. Narration ---
        sketch_audio = narrate(description)
        for step in steps:
            step.audio = narrate(step.description)

        return TutorialResult(
            sketch=SketchSummary(image_url=sketch.url, description=description, audio=sketch_audio),
            steps=steps,
        )
