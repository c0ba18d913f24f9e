#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.

World units are the dimensionless lengths of the orbit view; screen y grows
downwards, so world y is flipped.
"""
from typing import Optional, Tuple
from .constants import (
    DEFAULT_UNITS_PER_PIXEL,
    MIN_UNITS_PER_PIXEL,
    MAX_UNITS_PER_PIXEL,
    VIEW_WIDTH,
    VIEW_HEIGHT,
)
from .vector_utils import clamp


class Camera2D:
    """
    Simple 2D camera that maps world coordinates to screen pixels.
    """

    def __init__(self, center=(0.0, 0.0), units_per_pixel=DEFAULT_UNITS_PER_PIXEL,
                 viewport_size=(VIEW_WIDTH, VIEW_HEIGHT)):
        self.center = [center[0], center[1]]
        self.upp = units_per_pixel
        self.viewport_size = tuple(viewport_size)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def world_to_screen(self, pos: Tuple[float, float]) -> Tuple[int, int]:
        cx, cy = self.center
        px = (pos[0] - cx) / self.upp + self.viewport_size[0] / 2
        py = -(pos[1] - cy) / self.upp + self.viewport_size[1] / 2
        return (int(round(px)), int(round(py)))

    def screen_to_world(self, screen: Tuple[int, int]) -> Tuple[float, float]:
        cx, cy = self.center
        wx = (screen[0] - self.viewport_size[0] / 2) * self.upp + cx
        wy = -(screen[1] - self.viewport_size[1] / 2) * self.upp + cy
        return (wx, wy)

    def fit(self, half_extent: float, margin: float = 1.2) -> None:
        """Center on the origin and zoom so [-half_extent, half_extent] fits."""
        span = 2.0 * half_extent * margin
        shortest = max(min(self.viewport_size), 1)
        self.center = [0.0, 0.0]
        self.upp = clamp(span / shortest, MIN_UNITS_PER_PIXEL, MAX_UNITS_PER_PIXEL)

    def zoom(self, factor, pivot_screen: Optional[Tuple[int, int]] = None):
        factor = clamp(factor, 0.05, 20.0)
        before = None
        if pivot_screen is not None:
            before = self.screen_to_world(pivot_screen)
        self.upp = clamp(self.upp * (1.0 / factor), MIN_UNITS_PER_PIXEL, MAX_UNITS_PER_PIXEL)
        if pivot_screen is not None and before is not None:
            after = self.screen_to_world(pivot_screen)
            self.center[0] += (before[0] - after[0])
            self.center[1] += (before[1] - after[1])

    def pan_pixels(self, dx_pixels, dy_pixels):
        self.center[0] -= dx_pixels * self.upp
        self.center[1] += dy_pixels * self.upp
