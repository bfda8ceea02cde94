"""Tests for plan parsing, plan generation and step-count estimation."""

import pytest

from conftest import FakeGenAIClient, numbered_plan
from drawing_tutor.ai.genai_client import EmptyOutput, ImageOutput, InlineImage, TextOutput
from drawing_tutor.ai.plan_generator import build_plan_prompt, generate_plan
from drawing_tutor.ai.step_estimator import DEFAULT_STEPS, estimate_step_count, parse_step_count
from drawing_tutor.core.step_planner import FILLER_STEP, generic_plan, parse_plan

SKETCH = InlineImage(data=b"sketch", mime_type="image/png")


class TestParsePlan:
    def test_exact_count(self):
        assert parse_plan(numbered_plan(3), 3) == [
            "Draw shape number 1",
            "Draw shape number 2",
            "Draw shape number 3",
        ]

    def test_shortfall_is_padded_with_filler(self):
        plan = parse_plan("1. Draw a circle\n2. Add ears", 5)

        assert len(plan) == 5
        assert plan[:2] == ["Draw a circle", "Add ears"]
        assert plan[2:] == [FILLER_STEP] * 3

    def test_overflow_keeps_first_entries_in_order(self):
        plan = parse_plan(numbered_plan(12), 8)
        assert plan == [f"Draw shape number {i}" for i in range(1, 9)]

    def test_first_seen_order_is_not_resorted(self):
        assert parse_plan("3. third\n1. first\n2. second", 3) == ["third", "first", "second"]

    def test_ignores_non_step_lines(self):
        text = (
            "Here is your plan:\n"
            "  1.   Draw the head  \n"
            "- bullet point\n"
            "Step 2. not numbered at line start\n"
            "2.Add the body\n"
        )
        assert parse_plan(text, 2) == ["Draw the head", "Add the body"]

    def test_empty_objectives_are_dropped(self):
        assert parse_plan("1.\n2.    \n3. Real step", 2) == ["Real step", FILLER_STEP]

    def test_empty_text(self):
        assert parse_plan("", 8) == [FILLER_STEP] * 8

    def test_generic_plan(self):
        assert generic_plan(3) == [
            "Work on part 1 of your drawing.",
            "Work on part 2 of your drawing.",
            "Work on part 3 of your drawing.",
        ]


class TestGeneratePlan:
    @pytest.mark.asyncio
    async def test_parses_model_list(self):
        client = FakeGenAIClient(plan=TextOutput("1. Head\n2. Body"))

        plan = await generate_plan(client, SKETCH, "a cat", 4)

        assert plan == ["Head", "Body", FILLER_STEP, FILLER_STEP]
        call = client.calls_of("plan")[0]
        assert call["images"] == [SKETCH]
        assert "exactly 4 steps" in call["prompt"]
        assert "Image Description: a cat" in call["prompt"]

    @pytest.mark.asyncio
    async def test_call_failure_returns_generic_plan(self):
        client = FakeGenAIClient(plan=RuntimeError("quota exceeded"))
        assert await generate_plan(client, SKETCH, "a cat", 9) == generic_plan(9)

    @pytest.mark.asyncio
    async def test_non_text_output_is_padded(self):
        client = FakeGenAIClient(plan=EmptyOutput())
        assert await generate_plan(client, SKETCH, "a cat", 8) == [FILLER_STEP] * 8

    def test_prompt_lists_final_step_number(self):
        assert "15. [Specific objective for step 15]" in build_plan_prompt("x", 15)


class TestParseStepCount:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("8", 8),
            ("20", 20),
            ("  14\n", 14),
            ("16 steps", 16),
            ("7", DEFAULT_STEPS),
            ("21", DEFAULT_STEPS),
            ("-10", DEFAULT_STEPS),
            ("twelve", DEFAULT_STEPS),
            ("", DEFAULT_STEPS),
            ("About 10", DEFAULT_STEPS),
        ],
    )
    def test_parse(self, text, expected):
        assert parse_step_count(text) == expected

    def test_default_is_twelve(self):
        assert DEFAULT_STEPS == 12


class TestEstimateStepCount:
    @pytest.mark.asyncio
    async def test_uses_model_answer(self):
        client = FakeGenAIClient(estimate=TextOutput("17"))

        assert await estimate_step_count(client, SKETCH, "a busy street") == 17
        call = client.calls_of("estimate")[0]
        assert call["images"] == [SKETCH]
        assert "a busy street" in call["prompt"]

    @pytest.mark.asyncio
    async def test_call_failure_defaults(self):
        client = FakeGenAIClient(estimate=TimeoutError())
        assert await estimate_step_count(client, SKETCH, "x") == DEFAULT_STEPS

    @pytest.mark.asyncio
    async def test_image_answer_defaults(self):
        client = FakeGenAIClient(estimate=ImageOutput(b"png", "image/png"))
        assert await estimate_step_count(client, SKETCH, "x") == DEFAULT_STEPS
