"""
tests/test_camera.py - world/screen mapping of the orbit view.
"""

import pytest

from twobody.camera import Camera2D
from twobody.constants import MAX_UNITS_PER_PIXEL, MIN_UNITS_PER_PIXEL


class TestCamera2D:
    """Screen y grows downwards."""

    def test_origin_maps_to_center(self):
        cam = Camera2D(units_per_pixel=0.1, viewport_size=(800, 600))
        assert cam.world_to_screen((0.0, 0.0)) == (400, 300)

    def test_y_flipped(self):
        cam = Camera2D(units_per_pixel=0.1, viewport_size=(800, 600))
        assert cam.world_to_screen((1.0, 1.0)) == (410, 290)

    def test_round_trip(self):
        cam = Camera2D(center=(2.0, -1.0), units_per_pixel=0.05, viewport_size=(640, 480))
        wx, wy = cam.screen_to_world(cam.world_to_screen((3.0, 0.5)))
        assert wx == pytest.approx(3.0)
        assert wy == pytest.approx(0.5)

    def test_fit(self):
        cam = Camera2D(center=(5.0, 5.0), viewport_size=(800, 600))
        cam.fit(5.0, margin=1.2)
        assert cam.center == [0.0, 0.0]
        assert cam.upp == pytest.approx(12.0 / 600)

    def test_zoom_clamped(self):
        cam = Camera2D(units_per_pixel=0.1)
        for _ in range(50):
            cam.zoom(10.0)
        assert cam.upp == MIN_UNITS_PER_PIXEL
        for _ in range(50):
            cam.zoom(0.1)
        assert cam.upp == MAX_UNITS_PER_PIXEL

    def test_zoom_keeps_pivot(self):
        cam = Camera2D(units_per_pixel=0.1, viewport_size=(800, 600))
        before = cam.screen_to_world((500, 200))
        cam.zoom(2.0, pivot_screen=(500, 200))
        after = cam.screen_to_world((500, 200))
        assert after == pytest.approx(before)

    def test_pan(self):
        cam = Camera2D(units_per_pixel=0.5)
        cam.pan_pixels(10, 4)
        assert cam.center == pytest.approx([-5.0, 2.0])
