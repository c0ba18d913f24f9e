#!/usr/bin/env python3
"""
Bounded trajectory history.

A TrailBuffer keeps the last N positions of one tracked point, oldest first.
Appending to a full buffer drops the oldest sample. Trails are sampled exactly
once per tick: no deduplication, no interpolation.
"""
from collections import deque
from typing import Deque, Dict, Iterator, List, Tuple

from .constants import TRAIL_CAPACITY
from .data_models import BodyId

Point = Tuple[float, float]


class TrailBuffer:
    """Fixed-capacity FIFO of positions in render order."""

    def __init__(self, capacity: int = TRAIL_CAPACITY):
        if capacity < 1:
            raise ValueError(f"trail capacity must be at least 1, got {capacity}")
        self._points: Deque[Point] = deque(maxlen=int(capacity))

    @property
    def capacity(self) -> int:
        return self._points.maxlen

    def append(self, point: Point) -> None:
        self._points.append((float(point[0]), float(point[1])))

    def reset(self) -> None:
        self._points.clear()

    def points(self) -> List[Point]:
        """Copy of the history, oldest to newest."""
        return list(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def __repr__(self) -> str:
        return f"TrailBuffer(len={len(self)}, capacity={self.capacity})"


def trail_append(buffer: TrailBuffer, point: Point) -> TrailBuffer:
    buffer.append(point)
    return buffer


def trail_reset(buffer: TrailBuffer) -> TrailBuffer:
    buffer.reset()
    return buffer


class TrailSet:
    """One TrailBuffer per tracked body, owned by a single session."""

    def __init__(self, capacity: int = TRAIL_CAPACITY):
        self._buffers: Dict[BodyId, TrailBuffer] = {
            body_id: TrailBuffer(capacity) for body_id in BodyId
        }

    def buffer(self, body_id: BodyId) -> TrailBuffer:
        return self._buffers[body_id]

    def append(self, body_id: BodyId, point: Point) -> None:
        self._buffers[body_id].append(point)

    def reset(self) -> None:
        for buf in self._buffers.values():
            buf.reset()

    def items(self):
        return self._buffers.items()
