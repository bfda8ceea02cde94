"""
Artifact store — persists generated images and returns their public URL.

Files land under the generated-content root as ``<base_name><ext>`` and are
served by the ``/generated`` static mount.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".png"
_MIME_EXTENSIONS: Dict[str, str] = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
}


def extension_for(mime_type: str) -> str:
    return _MIME_EXTENSIONS.get((mime_type or "").lower(), DEFAULT_EXTENSION)


def timestamped_name(logical_name: str) -> str:
    """``step_3`` → ``step_3_1718000000000`` (epoch milliseconds)."""
    return f"{logical_name}_{int(time.time() * 1000)}"


class ArtifactStore:
    """Filesystem-backed store for generated images."""

    def __init__(self, root: Path, url_prefix: str = "/generated") -> None:
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def store(self, data: bytes, mime_type: str, base_name: str) -> str:
        """
        Write *data* to ``root/<base_name><ext>`` and return its URL path.

        I/O errors propagate — the caller decides whether the request
        can continue without the image.
        """
        filename = f"{base_name}{extension_for(mime_type)}"
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.root / filename
        path.write_bytes(data)
        logger.info("Saved artifact %s (%d bytes)", path, len(data))
        return f"{self.url_prefix}/{filename}"
