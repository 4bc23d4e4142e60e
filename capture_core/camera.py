#!/usr/bin/env python3
"""
Viewport over the square simulation domain.

The view keeps two numbers: the world point shown at the middle of the window
and a scale in pixels per world unit. Satellites that fly far outside the
domain can map to huge pixel values, so project() returns None for anything
pygame cannot draw.
"""
from typing import Optional, Tuple

from .constants import (
    MAX_PIXELS_PER_UNIT,
    MIN_PIXELS_PER_UNIT,
    SAFE_COORD_LIMIT,
    VIEW_HEIGHT,
    VIEW_PADDING,
    VIEW_WIDTH,
)
from .vector_utils import Vec2, clamp

Pixel = Tuple[int, int]


class DomainView:
    def __init__(self, width: int = VIEW_WIDTH, height: int = VIEW_HEIGHT):
        self.width = width
        self.height = height
        self.focus: Vec2 = (0.0, 0.0)
        self.scale = 1.0

    def resize(self, width: int, height: int) -> None:
        self.width = max(int(width), 1)
        self.height = max(int(height), 1)

    def frame(self, half_size: float) -> None:
        """Centre on the origin and fit [-half_size, half_size]^2 inside the window."""
        usable = min(self.width, self.height) * (1.0 - 2.0 * VIEW_PADDING)
        self.focus = (0.0, 0.0)
        self.scale = clamp(usable / (2.0 * half_size), MIN_PIXELS_PER_UNIT, MAX_PIXELS_PER_UNIT)

    def to_pixels(self, pos: Vec2) -> Tuple[float, float]:
        return (
            self.width * 0.5 + (pos[0] - self.focus[0]) * self.scale,
            self.height * 0.5 + (pos[1] - self.focus[1]) * self.scale,
        )

    def project(self, pos: Vec2) -> Optional[Pixel]:
        """Pixel for a world position, or None when it is too far off screen to draw."""
        return drawable(self.to_pixels(pos))

    def unproject(self, pixel: Tuple[float, float]) -> Vec2:
        return (
            self.focus[0] + (pixel[0] - self.width * 0.5) / self.scale,
            self.focus[1] + (pixel[1] - self.height * 0.5) / self.scale,
        )

    def length(self, world_length: float) -> float:
        return world_length * self.scale

    def zoom_at(self, pixel: Tuple[float, float], factor: float) -> None:
        """Multiply the scale by factor while the world point under pixel stays put."""
        anchor = self.unproject(pixel)
        self.scale = clamp(self.scale * factor, MIN_PIXELS_PER_UNIT, MAX_PIXELS_PER_UNIT)
        self.focus = (
            anchor[0] - (pixel[0] - self.width * 0.5) / self.scale,
            anchor[1] - (pixel[1] - self.height * 0.5) / self.scale,
        )

    def drag(self, dx: float, dy: float) -> None:
        """Move the picture by (dx, dy) pixels."""
        self.focus = (self.focus[0] - dx / self.scale, self.focus[1] - dy / self.scale)


def drawable(pt: Tuple[float, float]) -> Optional[Pixel]:
    x, y = int(pt[0]), int(pt[1])
    if abs(x) > SAFE_COORD_LIMIT or abs(y) > SAFE_COORD_LIMIT:
        return None
    return (x, y)
