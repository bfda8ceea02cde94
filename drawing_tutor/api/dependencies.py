"""
FastAPI dependencies — the only place collaborators are constructed.

Tests swap any of these through ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from drawing_tutor import config
from drawing_tutor.ai.genai_client import BaseGenAIClient, GeminiClient
from drawing_tutor.core.artifact_store import ArtifactStore


@lru_cache
def get_genai_client() -> BaseGenAIClient:
    """One configured model client per process."""
    return GeminiClient(api_key=config.GEMINI_API_KEY)


@lru_cache
def get_artifact_store() -> ArtifactStore:
    return ArtifactStore(config.GENERATED_DIR, config.GENERATED_URL_PREFIX)


def get_upload_dir() -> Path:
    return config.UPLOAD_DIR
