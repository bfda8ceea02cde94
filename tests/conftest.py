"""
Test fixtures and configuration for pytest.

No test talks to the real model service: ``FakeGenAIClient`` answers each
pipeline prompt with a scripted ``ModelOutput``.
"""

import os
import re
import tempfile
from typing import Any, Dict, List, Sequence

# Keep the app's storage directories out of the working tree
_TMP_ROOT = tempfile.mkdtemp(prefix="drawing-tutor-tests-")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TMP_ROOT, "uploads"))
os.environ.setdefault("GENERATED_DIR", os.path.join(_TMP_ROOT, "generated"))

import cv2
import numpy as np
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from drawing_tutor.ai.genai_client import (
    BaseGenAIClient,
    ImageOutput,
    InlineImage,
    ModelOutput,
    TextOutput,
)
from drawing_tutor.core.artifact_store import ArtifactStore


def make_image_bytes(width: int = 100, height: int = 100, ext: str = ".png", value: int = 255) -> bytes:
    image = np.full((height, width, 3), value, dtype=np.uint8)
    cv2.rectangle(image, (width // 4, height // 4), (3 * width // 4, 3 * height // 4), (0, 0, 0), 2)
    ok, buf = cv2.imencode(ext, image)
    assert ok
    return buf.tobytes()


SKETCH_BYTES = make_image_bytes(value=250)
STEP_BYTES = make_image_bytes(value=240)


def numbered_plan(count: int) -> str:
    return "\n".join(f"{i}. Draw shape number {i}" for i in range(1, count + 1))


# Prompt kinds, recognised by the opening words of each pipeline prompt
_KINDS = [
    ("sketch", re.compile(r"^Convert the uploaded image")),
    ("describe", re.compile(r"^Describe the main subject")),
    ("estimate", re.compile(r"^Analyze this image and its description")),
    ("plan", re.compile(r"^Create a structured plan")),
    ("step", re.compile(r"^You are a patient art teacher")),
]


def prompt_kind(prompt: str) -> str:
    for kind, pattern in _KINDS:
        if pattern.match(prompt):
            return kind
    raise AssertionError(f"Unexpected prompt: {prompt[:60]!r}")


class FakeGenAIClient(BaseGenAIClient):
    """
    Scripted model client.

    ``responses`` maps a prompt kind to a ``ModelOutput``, an exception
    instance (raised), or a callable ``(call_index) -> ModelOutput``.
    """

    def __init__(self, total_steps: int = 10, **responses: Any) -> None:
        self.responses: Dict[str, Any] = {
            "sketch": ImageOutput(data=SKETCH_BYTES, mime_type="image/png"),
            "describe": TextOutput(text="A simple square house with a door."),
            "estimate": TextOutput(text=str(total_steps)),
            "plan": TextOutput(text=numbered_plan(total_steps)),
            "step": ImageOutput(data=STEP_BYTES, mime_type="image/png"),
        }
        self.responses.update(responses)
        self.calls: List[Dict[str, Any]] = []

    def calls_of(self, kind: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["kind"] == kind]

    async def generate(self, model: str, prompt: str, images: Sequence[InlineImage] = ()) -> ModelOutput:
        kind = prompt_kind(prompt)
        index = len(self.calls_of(kind))
        self.calls.append({"kind": kind, "model": model, "prompt": prompt, "images": list(images)})
        response = self.responses[kind]
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            response = response(index)
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def fake_client() -> FakeGenAIClient:
    return FakeGenAIClient()


@pytest.fixture
def store(tmp_path) -> ArtifactStore:
    return ArtifactStore(tmp_path / "generated", "/generated")


@pytest.fixture
def upload_image() -> InlineImage:
    return InlineImage(data=make_image_bytes(), mime_type="image/png")


# ============== API Fixtures ==============


@pytest.fixture
def app_overrides(tmp_path, fake_client, store):
    """Wire the fake client and temporary directories into the app."""
    from drawing_tutor.api.dependencies import get_artifact_store, get_genai_client, get_upload_dir
    from drawing_tutor.main import app

    upload_dir = tmp_path / "uploads"
    app.dependency_overrides[get_genai_client] = lambda: fake_client
    app.dependency_overrides[get_artifact_store] = lambda: store
    app.dependency_overrides[get_upload_dir] = lambda: upload_dir
    yield {"app": app, "client": fake_client, "store": store, "upload_dir": upload_dir}
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api_client(app_overrides) -> AsyncClient:
    transport = ASGITransport(app=app_overrides["app"])
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def override_responses(app_overrides, **responses: Any) -> FakeGenAIClient:
    fake: FakeGenAIClient = app_overrides["client"]
    fake.responses.update(responses)
    return fake
