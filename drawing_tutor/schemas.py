"""
Pydantic v2 schemas for the drawing tutorial API.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


# ═══════════════════════════════════════════════════════════════════════════
# Tutorial
# ═══════════════════════════════════════════════════════════════════════════
class SketchInfo(BaseModel):
    """The reference sketch and its overview narration."""
    image_url: str = Field(alias="imageUrl")
    description: str
    audio: Optional[str] = None
    model_config = {"populate_by_name": True}


class StepInfo(BaseModel):
    """A single tutorial step. ``imageUrl`` is null when generation yielded no image."""
    step: int
    description: str
    image_url: Optional[str] = Field(None, alias="imageUrl")
    audio: Optional[str] = None
    model_config = {"populate_by_name": True}


class TutorialResponse(BaseModel):
    sketch: SketchInfo
    steps: List[StepInfo]


# ═══════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════
class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════
# Health
# ═══════════════════════════════════════════════════════════════════════════
class HealthResponse(BaseModel):
    status: str = "OK"
    message: str = "Drawing tutorial API is running"
