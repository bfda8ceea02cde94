"""
Upload preprocessing for the drawing tutorial pipeline.

Responsibilities:
- Reject uploads that are neither decodable nor declared as images
- Downsize oversized uploads (preserving aspect ratio)
- Re-encode formats the model does not accept inline as PNG
- Return an ``InlineImage`` carrying the real MIME type
"""

from __future__ import annotations

import cv2
import numpy as np

from drawing_tutor.ai.genai_client import InlineImage

# Longest side sent to the model — larger uploads are scaled down
MAX_INPUT_SIDE: int = 2048

# MIME types the model accepts as inline image parts
MODEL_MIME_TYPES = {"image/png", "image/jpeg", "image/webp"}


def load_image_from_bytes(raw: bytes) -> np.ndarray:
    """Decode raw image bytes into a BGR NumPy array."""
    arr = np.frombuffer(raw, dtype=np.uint8)
    image = cv2.imdecode(arr, cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError("Unable to decode image from provided bytes")
    return image


def resize_preserve_aspect(image: np.ndarray, max_side: int = MAX_INPUT_SIDE) -> np.ndarray:
    """
    Resize so the longest side equals *max_side*, preserving aspect ratio.
    Images already within the limit are returned unchanged.
    """
    h, w = image.shape[:2]
    if max(h, w) <= max_side:
        return image
    scale = max_side / max(h, w)
    new_w = max(1, int(w * scale))
    new_h = max(1, int(h * scale))
    return cv2.resize(image, (new_w, new_h), interpolation=cv2.INTER_AREA)


def encode_png(image: np.ndarray) -> bytes:
    ok, buf = cv2.imencode(".png", image)
    if not ok:
        raise ValueError("Unable to encode image as PNG")
    return buf.tobytes()


def prepare_upload(raw_bytes: bytes, mime_type: str) -> InlineImage:
    """
    Validate an uploaded image and make it model-ready.

    Images OpenCV cannot read (HEIC, GIF on older builds, ...) are sent to
    the model as-is under their declared ``image/*`` type. Raises
    ``ValueError`` only when the bytes do not decode and the declared type
    is not an image type.
    """
    mime = (mime_type or "").lower()
    if mime == "image/jpg":
        mime = "image/jpeg"

    try:
        image = load_image_from_bytes(raw_bytes)
    except ValueError:
        if mime.startswith("image/"):
            return InlineImage(data=raw_bytes, mime_type=mime)
        raise
    resized = resize_preserve_aspect(image)

    if resized is image and mime in MODEL_MIME_TYPES:
        return InlineImage(data=raw_bytes, mime_type=mime)
    return InlineImage(data=encode_png(resized), mime_type="image/png")
