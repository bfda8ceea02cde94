"""
Tutorial generation API — no authentication required.

POST /api/generate-tutorial
  → Validates the multipart upload (``image`` file + ``difficulty``)
  → Runs the full tutorial pipeline
  → Returns the reference sketch and the ordered steps
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Union

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from drawing_tutor import config
from drawing_tutor.ai.genai_client import BaseGenAIClient
from drawing_tutor.api.dependencies import get_artifact_store, get_genai_client, get_upload_dir
from drawing_tutor.core.artifact_store import ArtifactStore
from drawing_tutor.core.image_processor import prepare_upload
from drawing_tutor.core.tutorial_orchestrator import TutorialOrchestrator
from drawing_tutor.schemas import ErrorResponse, TutorialResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Tutorial"])


def _error(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _save_upload(upload_dir: Path, raw_bytes: bytes, filename: Optional[str]) -> Path:
    """Keep the original as ``<epoch_ms><original-extension>``."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    dest = upload_dir / f"{int(time.time() * 1000)}{Path(filename or '').suffix}"
    dest.write_bytes(raw_bytes)
    return dest


@router.post(
    "/generate-tutorial",
    response_model=TutorialResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_tutorial(
    image: Union[UploadFile, str, None] = File(None),
    difficulty: Optional[str] = Form(None),
    client: BaseGenAIClient = Depends(get_genai_client),
    store: ArtifactStore = Depends(get_artifact_store),
    upload_dir: Path = Depends(get_upload_dir),
):
    """
    Generate a step-by-step drawing tutorial from one image.

    Steps:
    1. Validate the upload and difficulty
    2. Save the original and make it model-ready
    3. Run the tutorial pipeline
    """
    # 1 — Validate input
    # A plain form field named "image" arrives as str: treat it as missing
    if image is None or isinstance(image, str):
        return _error(status.HTTP_400_BAD_REQUEST, "No image provided")
    raw_bytes: bytes = await image.read()
    if not raw_bytes:
        return _error(status.HTTP_400_BAD_REQUEST, "No image provided")

    if not difficulty or not difficulty.strip():
        return _error(status.HTTP_400_BAD_REQUEST, "Difficulty level is required")

    if len(raw_bytes) > config.MAX_UPLOAD_MB * 1024 * 1024:
        return _error(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, f"File exceeds {config.MAX_UPLOAD_MB}MB limit")

    # 2 — Save + preprocess; undecodable files are removed again
    dest = _save_upload(upload_dir, raw_bytes, image.filename)
    try:
        inline = prepare_upload(raw_bytes, image.content_type or "")
    except ValueError as exc:
        dest.unlink(missing_ok=True)
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid image", str(exc))
    logger.info("Upload saved to %s (%d bytes, %s)", dest, len(raw_bytes), inline.mime_type)

    # 3 — Pipeline
    try:
        result = await TutorialOrchestrator(client, store).generate(inline, difficulty.strip())
    except Exception as exc:
        logger.exception("Error generating tutorial")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to generate tutorial", str(exc))

    return result.to_response()
