"""Sliding window of recently generated step images."""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional

from drawing_tutor.ai.genai_client import InlineImage

DEFAULT_CAPACITY: int = 2


class RecentStepContext:
    """
    Bounded FIFO of step images, oldest evicted first.

    The window holds up to ``capacity`` images, but step generation only
    ever reads ``latest()``. Earlier entries are retained, never sent.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._images: Deque[InlineImage] = deque(maxlen=capacity)

    def push(self, image: InlineImage) -> None:
        self._images.append(image)

    def latest(self) -> Optional[InlineImage]:
        return self._images[-1] if self._images else None

    def __len__(self) -> int:
        return len(self._images)
