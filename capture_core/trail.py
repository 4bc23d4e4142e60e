#!/usr/bin/env python3
"""
Fixed-capacity trail of recent particle positions.

Trails exist only for rendering; physics never reads them. The buffer is a
deque with maxlen, so appending to a full trail drops the oldest point in O(1)
and memory stays bounded at capacity points per particle.
"""
from collections import deque
from typing import Deque, Iterator, Tuple

from .config import ConfigurationError
from .vector_utils import Vec2


class TrailBuffer:
    """Ring buffer of positions, ordered oldest -> newest."""

    __slots__ = ("_points",)

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ConfigurationError(f"trail capacity must be >= 1, got {capacity}")
        self._points: Deque[Vec2] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._points.maxlen

    def append(self, position: Vec2) -> None:
        self._points.append((float(position[0]), float(position[1])))

    def clear(self) -> None:
        self._points.clear()

    def snapshot(self) -> Tuple[Vec2, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Vec2]:
        return iter(self._points)

    def __repr__(self) -> str:
        return f"TrailBuffer(len={len(self)}, capacity={self.capacity})"
