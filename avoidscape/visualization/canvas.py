"""Drawing surface abstraction and a Matplotlib implementation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Circle, Polygon


def color_to_hex(color: int) -> str:
    """Convert a 24-bit RGB integer (e.g. 0x4C1C13) to '#4c1c13'."""
    return f"#{int(color) & 0xFFFFFF:06x}"


@dataclass
class StateMapper:
    """
    Affine map from state-space positions to screen coordinates.

    screen_x = mxx * x + bx
    screen_y = myy * y + by
    """

    mxx: float = 1.0
    myy: float = 1.0
    bx: float = 0.0
    by: float = 0.0

    @classmethod
    def from_bounds(
        cls,
        x_range: Tuple[float, float],
        y_range: Tuple[float, float],
        width: float,
        height: float,
    ) -> "StateMapper":
        """
        Map a state rectangle onto a screen of the given size.

        The y axis is flipped so that larger state y is drawn higher up.
        """
        x_min, x_max = x_range
        y_min, y_max = y_range
        assert x_max > x_min and y_max > y_min, "State ranges must be non-empty"
        mxx = width / (x_max - x_min)
        myy = -height / (y_max - y_min)
        return cls(mxx=mxx, myy=myy, bx=-mxx * x_min, by=height - myy * y_min)

    def map_state_to_position(self, x, y):
        """Map state coordinates (scalars or arrays) to screen coordinates."""
        return self.mxx * np.asarray(x) + self.bx, self.myy * np.asarray(y) + self.by


class Canvas(ABC):
    """
    Drawing collaborator used by obstacles and palettes.

    All coordinates are screen coordinates; callers map state positions
    through ``mapper`` first. Drawing must not change any obstacle state.
    """

    mapper: StateMapper

    @abstractmethod
    def fill_polygon(
        self, points: Sequence[Tuple[float, float]], color: int, linewidth: float
    ) -> None:
        pass

    @abstractmethod
    def fill_circle(
        self, center: Tuple[float, float], radius: float, color: int, linewidth: float
    ) -> None:
        pass

    @abstractmethod
    def level_set(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
        values: np.ndarray,
        color: int,
        level: float = 0.0,
    ) -> None:
        """Draw the ``level`` contour of ``values`` sampled at (xs, ys)."""
        pass


class MatplotlibCanvas(Canvas):
    """Canvas drawing patches and contours on a 2D Matplotlib axes."""

    def __init__(self, ax, mapper: StateMapper):
        """
        Initialize canvas.

        Args:
            ax: Matplotlib axes in screen coordinates
            mapper: State to screen mapping
        """
        self.ax = ax
        self.mapper = mapper
        self._artists: List = []

    def fill_polygon(self, points, color, linewidth):
        patch = Polygon(
            np.asarray(points, dtype=float),
            closed=True,
            facecolor=color_to_hex(color),
            edgecolor="black",
            linewidth=linewidth,
        )
        self.ax.add_patch(patch)
        self._artists.append(patch)

    def fill_circle(self, center, radius, color, linewidth):
        patch = Circle(
            center,
            abs(radius),
            facecolor=color_to_hex(color),
            edgecolor="black",
            linewidth=linewidth,
        )
        self.ax.add_patch(patch)
        self._artists.append(patch)

    def level_set(self, xs, ys, values, color, level=0.0):
        values = np.asarray(values)
        # contour needs the level to be crossed somewhere
        if not (values.min() <= level <= values.max()):
            return
        contour = self.ax.contour(
            xs, ys, values, levels=[level], colors=[color_to_hex(color)]
        )
        self._artists.append(contour)

    @property
    def artist_count(self) -> int:
        return len(self._artists)

    def clear(self):
        """Remove everything drawn through this canvas."""
        for artist in self._artists:
            artist.remove()
        self._artists = []

    def save(self, filename: str, dpi: int = 150):
        """Save figure to file."""
        self.ax.figure.savefig(filename, dpi=dpi, bbox_inches="tight")

    def close(self):
        """Close the figure."""
        plt.close(self.ax.figure)


def create_canvas(
    x_range: Tuple[float, float],
    y_range: Tuple[float, float],
    width: int = 800,
    height: int = 600,
    dpi: int = 100,
    title: str = "Obstacles",
) -> MatplotlibCanvas:
    """
    Create a figure whose axes span a screen of ``width`` x ``height`` pixels.

    Args:
        x_range: State x range shown on screen
        y_range: State y range shown on screen
        width: Screen width in pixels
        height: Screen height in pixels
        dpi: Figure resolution
        title: Axes title

    Returns:
        MatplotlibCanvas with a matching StateMapper
    """
    fig, ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi)
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_aspect("equal")
    ax.set_title(title)
    ax.set_xticks([])
    ax.set_yticks([])
    mapper = StateMapper.from_bounds(x_range, y_range, width, height)
    return MatplotlibCanvas(ax, mapper)
