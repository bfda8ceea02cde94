"""Narration placeholder — no speech is synthesized yet."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

PLACEHOLDER_AUDIO = "audio_placeholder.mp3"


def narrate(text: str) -> str:
    logger.debug("Generating audio for text: %.50s...", text)
    return PLACEHOLDER_AUDIO
