"""Tests for turmites.viz.camera module."""

from __future__ import annotations

import pytest

from turmites.config.constants import CAMERA_INITIAL_SCALE, CAMERA_MAX_SCALE, CAMERA_MIN_SCALE
from turmites.viz.camera import Camera


class TestCoordinateMapping:
    def test_round_trip(self) -> None:
        camera = Camera(scale=4.0, offset_x=10.0, offset_y=-6.0)
        assert camera.world_to_screen(3, 5) == (22.0, 14.0)
        assert camera.screen_to_world(22.0, 14.0) == (3.0, 5.0)

    def test_cell_at_floors_negative(self) -> None:
        camera = Camera(scale=8.0)
        assert camera.cell_at(-1, -1) == (-1, -1)
        assert camera.cell_at(15.9, 8.0) == (1, 1)

    def test_visible_cells(self) -> None:
        camera = Camera(scale=10.0, offset_x=-5.0, offset_y=0.0)
        assert camera.visible_cells(100, 50) == (0, 0, 11, 5)


class TestNavigation:
    def test_pan(self) -> None:
        camera = Camera()
        camera.pan(3, -2)
        assert (camera.offset_x, camera.offset_y) == (3, -2)

    def test_zoom_keeps_point_fixed(self) -> None:
        camera = Camera(scale=8.0, offset_x=12.0, offset_y=-3.0)
        before = camera.screen_to_world(100, 60)
        camera.zoom_at(100, 60, zoom_in=True)
        after = camera.screen_to_world(100, 60)
        assert camera.scale == pytest.approx(8.8)
        assert after == pytest.approx(before)

    def test_zoom_is_clamped(self) -> None:
        camera = Camera(scale=CAMERA_MAX_SCALE)
        camera.zoom_at(0, 0, zoom_in=True)
        assert camera.scale == CAMERA_MAX_SCALE
        camera = Camera(scale=CAMERA_MIN_SCALE)
        camera.zoom_at(0, 0, zoom_in=False)
        assert camera.scale == CAMERA_MIN_SCALE

    def test_reset_centers_field(self) -> None:
        camera = Camera(scale=2.0, offset_x=99.0)
        camera.reset(160, 120, 800, 600)
        assert camera.scale == CAMERA_INITIAL_SCALE
        assert camera.cell_at(400, 300) == (80, 60)
