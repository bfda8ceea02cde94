"""
Step planner — turns the model's numbered list into step objectives.

Parsing rules
-------------
1. A line is a step when it starts with ``<digits>.``
2. The numeral and following whitespace are stripped
3. Empty results are dropped; first-seen order is kept (no re-sorting)
4. The list is padded with a filler objective, then truncated, so it
   always holds exactly ``total_steps`` entries
"""

from __future__ import annotations

import re
from typing import List

FILLER_STEP: str = "Continue adding details to your drawing."

_STEP_LINE = re.compile(r"^\d+\.")
_STEP_PREFIX = re.compile(r"^\d+\.\s*")


def generic_step(step_number: int) -> str:
    return f"Work on part {step_number} of your drawing."


def generic_plan(total_steps: int) -> List[str]:
    """Fallback plan used when the model call fails outright."""
    return [generic_step(i) for i in range(1, total_steps + 1)]


def parse_plan(text: str, total_steps: int) -> List[str]:
    """
    Parse a numbered list into exactly *total_steps* objectives.

    Parameters
    ----------
    text : str
        Raw model response.
    total_steps : int
        Required plan length.

    Returns
    -------
    list[str]
        Non-empty step objectives in the order they appeared.
    """
    steps: List[str] = []
    for line in (text or "").splitlines():
        line = line.strip()
        if not _STEP_LINE.match(line):
            continue
        objective = _STEP_PREFIX.sub("", line).strip()
        if objective:
            steps.append(objective)

    while len(steps) < total_steps:
        steps.append(FILLER_STEP)

    return steps[:total_steps]
