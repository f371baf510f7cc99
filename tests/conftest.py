"""Shared fakes for obstacle tests."""

import numpy as np
import pytest

from avoidscape.palettes.analytic import FunctionPalette
from avoidscape.visualization.canvas import Canvas, StateMapper


class RecordingCanvas(Canvas):
    """Canvas that records drawing calls instead of drawing."""

    def __init__(self, mapper: StateMapper = None):
        self.mapper = mapper or StateMapper()
        self.calls = []

    def fill_polygon(self, points, color, linewidth):
        self.calls.append(("polygon", list(points), color, linewidth))

    def fill_circle(self, center, radius, color, linewidth):
        self.calls.append(("circle", tuple(center), radius, color, linewidth))

    def level_set(self, xs, ys, values, color, level=0.0):
        self.calls.append(("level_set", xs, ys, values, color))


class RecordingPalette(FunctionPalette):
    """FunctionPalette that remembers the local states it was queried with."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.queries = []

    def value(self, set_id, local_state):
        self.queries.append(("value", set_id, np.array(local_state, dtype=float)))
        return super().value(set_id, local_state)

    def grad_v(self, set_id, local_state):
        self.queries.append(("grad_v", set_id, np.array(local_state, dtype=float)))
        return super().grad_v(set_id, local_state)


def constant_palette(dimension, value, gradient=None, set_id="robot"):
    """Palette whose single set returns a fixed value and gradient."""
    grad = np.zeros(dimension) if gradient is None else np.asarray(gradient, dtype=float)
    palette = RecordingPalette(dimension)
    palette.add_set(set_id, lambda s: value, lambda s: grad.copy())
    return palette


@pytest.fixture
def canvas():
    """Recording canvas with an identity mapping."""
    return RecordingCanvas()


@pytest.fixture
def box_palette():
    """4D palette: value is the local x position, plus a scaled copy."""
    palette = RecordingPalette(4, extent=[(-2, 2), (-1, 1), (-2, 2), (-1, 1)], resolution=5)
    palette.add_set("robot", lambda s: s[0], lambda s: np.array([1.0, 0.0, 0.0, 0.0]))
    palette.add_set("double", lambda s: 2.0 * s[0] + s[2])
    return palette


@pytest.fixture
def round_palette():
    """3D palette: value is the planar distance to the obstacle center minus 1."""
    palette = RecordingPalette(3, extent=[(-3, 3), (-3, 3), (-np.pi, np.pi)], resolution=7)
    palette.add_set("robot", lambda s: float(np.hypot(s[0], s[1]) - 1.0))
    return palette


@pytest.fixture
def make_constant_palette():
    """Factory for constant palettes."""
    return constant_palette
