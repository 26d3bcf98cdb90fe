"""Visualization layer: camera, theme, and raster/PNG renderers."""

from turmites.viz.camera import Camera
from turmites.viz.render import (
    RasterRenderer,
    build_color_array,
    render_grid_png,
    render_run_directory,
)
from turmites.viz.theme import DEFAULT_THEME, Theme

__all__ = [
    "Camera",
    "DEFAULT_THEME",
    "RasterRenderer",
    "Theme",
    "build_color_array",
    "render_grid_png",
    "render_run_directory",
]
