"""Drawing collaborators for obstacles and value-function slices."""

from .canvas import Canvas, MatplotlibCanvas, StateMapper, create_canvas
from .render import render_shape, render_shape_augmented

__all__ = [
    "Canvas",
    "MatplotlibCanvas",
    "StateMapper",
    "create_canvas",
    "render_shape",
    "render_shape_augmented",
]
