"""Palette of value functions tabulated on rectilinear grids."""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Sequence, Tuple

import numpy as np
from scipy.interpolate import RegularGridInterpolator

from ..errors import DimensionMismatchError
from ..utils.transforms import FULL_TURN, wrap_periodic
from .base import AvoidSetPalette

logger = logging.getLogger(__name__)

# Slack when deciding whether a periodic axis already ends one turn after it starts
SEAM_TOLERANCE = 1e-9


@dataclass
class ValueGrid:
    """One tabulated value function with its precomputed gradient."""

    axes: Tuple[np.ndarray, ...]
    periodic_dims: Tuple[int, ...]
    interpolator: RegularGridInterpolator
    gradient_interpolators: List[RegularGridInterpolator]

    @property
    def lower(self) -> np.ndarray:
        return np.array([axis[0] for axis in self.axes])

    @property
    def upper(self) -> np.ndarray:
        return np.array([axis[-1] for axis in self.axes])


def close_seam(axis: np.ndarray, values: np.ndarray, dim: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Make a periodic axis cover a full turn.

    Tables for periodic coordinates usually stop one step short of the end
    of the turn. The first slice is appended at ``axis[0] + 2 pi`` so that
    interpolation runs across the seam instead of stopping at the last node.
    Axes that already end one turn after they start are returned unchanged.

    Args:
        axis: Grid coordinates along the periodic dimension
        values: Value table
        dim: Index of the periodic dimension in ``values``

    Returns:
        Tuple of (closed axis, closed value table)
    """
    span = axis[-1] - axis[0]
    if span > FULL_TURN + SEAM_TOLERANCE:
        raise ValueError(f"Periodic axis spans {span:.6f}, more than a full turn")
    if abs(span - FULL_TURN) <= SEAM_TOLERANCE:
        return axis, values
    first = np.take(values, [0], axis=dim)
    return np.append(axis, axis[0] + FULL_TURN), np.concatenate([values, first], axis=dim)


def seam_gradient(axis: np.ndarray, values: np.ndarray, gradient: np.ndarray, dim: int) -> np.ndarray:
    """Replace one-sided differences at both ends of a closed axis with a central one."""
    if len(axis) < 3:
        return gradient
    # the first and last nodes are the same point on the circle
    after = np.take(values, 1, axis=dim)
    before = np.take(values, -2, axis=dim)
    slope = (after - before) / ((axis[1] - axis[0]) + (axis[-1] - axis[-2]))

    gradient = np.array(gradient)
    index = [slice(None)] * values.ndim
    for end in (0, -1):
        index[dim] = end
        gradient[tuple(index)] = slope
    return gradient


class GridPalette(AvoidSetPalette):
    """
    Value functions stored as grids and interpolated linearly.

    Gradients are taken with ``numpy.gradient`` once, when a set is added,
    and interpolated the same way as the values. Periodic dimensions (such
    as a heading angle) are closed over a full turn and wrapped before
    lookup, so interpolation is continuous across the seam.

    Every other coordinate is clamped to the grid extent. The value is flat
    beyond the grid, so the matching gradient components are zero there.
    """

    def __init__(self, dimension: int):
        """
        Initialize an empty palette.

        Args:
            dimension: State dimension shared by every value function
        """
        self.dimension = int(dimension)
        self._grids: Dict[Hashable, ValueGrid] = {}

    @property
    def set_ids(self) -> Tuple[Hashable, ...]:
        return tuple(self._grids)

    def add_set(
        self,
        set_id: Hashable,
        axes: Sequence[np.ndarray],
        values: np.ndarray,
        periodic_dims: Sequence[int] = (),
    ) -> None:
        """
        Register a tabulated value function.

        Args:
            set_id: Identifier for the value function
            axes: Strictly increasing grid coordinates, one array per dimension
            values: Value table of shape ``tuple(len(a) for a in axes)``
            periodic_dims: Dimensions with period 2 pi; their axis may span
                at most one turn, with or without the closing node
        """
        axes = [np.asarray(axis, dtype=float).flatten() for axis in axes]
        if len(axes) != self.dimension:
            raise DimensionMismatchError(self.dimension, len(axes), "grid axes")
        values = np.asarray(values, dtype=float)
        expected_shape = tuple(len(axis) for axis in axes)
        if values.shape != expected_shape:
            raise ValueError(
                f"Value table shape {values.shape} does not match axes {expected_shape}"
            )
        periodic_dims = tuple(periodic_dims)
        for dim in periodic_dims:
            if not 0 <= dim < self.dimension:
                raise ValueError(f"Periodic dimension {dim} out of range")
            axes[dim], values = close_seam(axes[dim], values, dim)

        gradients = np.gradient(values, *axes)
        if self.dimension == 1:
            gradients = [gradients]
        gradients = list(gradients)
        for dim in periodic_dims:
            gradients[dim] = seam_gradient(axes[dim], values, gradients[dim], dim)

        axes = tuple(axes)
        self._grids[set_id] = ValueGrid(
            axes=axes,
            periodic_dims=periodic_dims,
            interpolator=RegularGridInterpolator(axes, values),
            gradient_interpolators=[
                RegularGridInterpolator(axes, grad) for grad in gradients
            ],
        )
        logger.debug(f"Added avoid set {set_id!r} with grid shape {values.shape}")

    @classmethod
    def from_function(
        cls,
        functions: Dict[Hashable, Callable[[np.ndarray], np.ndarray]],
        axes: Sequence[np.ndarray],
        periodic_dims: Sequence[int] = (),
    ) -> "GridPalette":
        """
        Tabulate value functions on a shared grid.

        Args:
            functions: Map of set id to a vectorized function taking points
                of shape (..., D) and returning values of shape (...)
            axes: Grid coordinates, one array per dimension
            periodic_dims: Dimensions with period 2 pi

        Returns:
            GridPalette holding one set per function
        """
        palette = cls(dimension=len(axes))
        mesh = np.meshgrid(*axes, indexing="ij")
        points = np.stack(mesh, axis=-1)
        for set_id, func in functions.items():
            palette.add_set(set_id, axes, func(points), periodic_dims)
        return palette

    def value(self, set_id: Hashable, local_state: np.ndarray) -> float:
        grid, point, _ = self._lookup(set_id, local_state)
        return float(grid.interpolator(point[np.newaxis, :])[0])

    def grad_v(self, set_id: Hashable, local_state: np.ndarray) -> np.ndarray:
        grid, point, clamped = self._lookup(set_id, local_state)
        grad = np.array(
            [float(interp(point[np.newaxis, :])[0]) for interp in grid.gradient_interpolators]
        )
        grad[clamped] = 0.0
        return grad

    def sample_axes(self, set_id: Hashable, dim: int) -> np.ndarray:
        self._check_set(set_id)
        return self._grids[set_id].axes[dim]

    def slice_values(self, set_id, local_state, swept_x, swept_y, xs, ys):
        grid = self._grids[set_id]
        grid_x, grid_y = np.meshgrid(xs, ys)
        points = np.tile(np.asarray(local_state, dtype=float), grid_x.shape + (1,))
        points[..., swept_x] = grid_x
        points[..., swept_y] = grid_y
        points = self._wrap(grid, points.reshape(-1, self.dimension))
        points = np.clip(points, grid.lower, grid.upper)
        return grid.interpolator(points).reshape(grid_x.shape)

    def _lookup(self, set_id: Hashable, local_state: np.ndarray):
        """Grid point for a state, with a mask of the clamped dimensions."""
        self._check_set(set_id)
        local_state = self._check_state(local_state)
        grid = self._grids[set_id]
        wrapped = self._wrap(grid, local_state[np.newaxis, :])[0]
        point = np.clip(wrapped, grid.lower, grid.upper)
        clamped = point != wrapped
        if grid.periodic_dims:
            clamped[list(grid.periodic_dims)] = False
        if np.any(clamped):
            logger.debug(f"State {local_state} clamped onto grid {set_id!r}")
        return grid, point, clamped

    @staticmethod
    def _wrap(grid: ValueGrid, points: np.ndarray) -> np.ndarray:
        """Wrap periodic dimensions into the turn their axis covers."""
        points = np.array(points, dtype=float)
        for dim in grid.periodic_dims:
            points[:, dim] = wrap_periodic(points[:, dim], grid.axes[dim][0])
        return points
