"""
Runtime configuration, read once from the environment.

Every value has a development default so the server starts with only
GEMINI_API_KEY set. A ``.env`` file in (or above) the working directory
is loaded first; real environment variables take precedence over it.
"""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

# ---------------------------------------------------------------------------
# External AI service
# ---------------------------------------------------------------------------
GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
GEMINI_TEXT_MODEL: str = os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash")
GEMINI_IMAGE_MODEL: str = os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image-preview")
GENAI_TIMEOUT_SECONDS: float = float(os.getenv("GENAI_TIMEOUT_SECONDS", "120"))

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "3001"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ---------------------------------------------------------------------------
# Filesystem layout
# ---------------------------------------------------------------------------
UPLOAD_DIR: Path = Path(os.getenv("UPLOAD_DIR", "./uploads"))
GENERATED_DIR: Path = Path(os.getenv("GENERATED_DIR", "./generated"))
UPLOAD_URL_PREFIX: str = "/uploads"
GENERATED_URL_PREFIX: str = "/generated"
MAX_UPLOAD_MB: int = int(os.getenv("MAX_UPLOAD_MB", "5"))
