"""Interface for value-function palettes shared by obstacles."""

from abc import ABC, abstractmethod
from typing import Hashable, Sequence, Tuple

import numpy as np

from ..errors import DimensionMismatchError, UnknownSetError


class AvoidSetPalette(ABC):
    """
    Collection of precomputed safety-value functions over one state space.

    A palette is keyed by an opaque set identifier, e.g. one entry per robot
    or per maneuver, all sharing the same obstacle geometry. States passed
    in are already expressed relative to the obstacle. Palettes are shared
    read-only by every obstacle of the same dynamical model.
    """

    dimension: int

    @property
    @abstractmethod
    def set_ids(self) -> Tuple[Hashable, ...]:
        """Identifiers of the value functions held by this palette."""
        pass

    @abstractmethod
    def value(self, set_id: Hashable, local_state: np.ndarray) -> float:
        """
        Safety value at an obstacle-relative state.

        Args:
            set_id: Value function identifier
            local_state: Obstacle-relative state of length ``dimension``

        Returns:
            Safety value (negative means unsafe)

        Raises:
            UnknownSetError: If ``set_id`` is not held by the palette
            DimensionMismatchError: If the state has the wrong length
        """
        pass

    @abstractmethod
    def grad_v(self, set_id: Hashable, local_state: np.ndarray) -> np.ndarray:
        """
        Gradient of the safety value at an obstacle-relative state.

        Args:
            set_id: Value function identifier
            local_state: Obstacle-relative state of length ``dimension``

        Returns:
            Gradient vector of length ``dimension``
        """
        pass

    @abstractmethod
    def sample_axes(self, set_id: Hashable, dim: int) -> np.ndarray:
        """Local coordinates along ``dim`` used when displaying a slice."""
        pass

    def slice_values(
        self,
        set_id: Hashable,
        local_state: np.ndarray,
        swept_x: int,
        swept_y: int,
        xs: np.ndarray,
        ys: np.ndarray,
    ) -> np.ndarray:
        """
        Evaluate a 2D slice through the value function.

        All dimensions other than the two swept ones are held at
        ``local_state``.

        Returns:
            Array of shape (len(ys), len(xs))
        """
        values = np.empty((len(ys), len(xs)))
        point = np.array(local_state, dtype=float)
        for row, y in enumerate(ys):
            for col, x in enumerate(xs):
                point[swept_x] = x
                point[swept_y] = y
                values[row, col] = self.value(set_id, point)
        return values

    def display_grid(
        self,
        set_id: Hashable,
        canvas,
        color: int,
        local_state: np.ndarray,
        swept_x: int,
        swept_y: int,
        offset: Sequence[float],
    ) -> None:
        """
        Draw the zero level set of a slice through the value function.

        Args:
            set_id: Value function identifier
            canvas: Drawing collaborator (see ``visualization.canvas``)
            color: 24-bit RGB color
            local_state: Obstacle-relative state fixing the unswept dimensions
            swept_x: State dimension drawn along the screen x axis
            swept_y: State dimension drawn along the screen y axis
            offset: Obstacle offset, used to place the slice in the global frame
        """
        self._check_set(set_id)
        local_state = self._check_state(local_state)
        offset = np.asarray(offset, dtype=float)
        xs = self.sample_axes(set_id, swept_x)
        ys = self.sample_axes(set_id, swept_y)
        values = self.slice_values(set_id, local_state, swept_x, swept_y, xs, ys)

        grid_x, grid_y = np.meshgrid(xs + offset[swept_x], ys + offset[swept_y])
        screen_x, screen_y = canvas.mapper.map_state_to_position(grid_x, grid_y)
        canvas.level_set(screen_x, screen_y, values, color)

    def _check_set(self, set_id: Hashable) -> None:
        if set_id not in self.set_ids:
            raise UnknownSetError(set_id, self.set_ids)

    def _check_state(self, local_state: np.ndarray) -> np.ndarray:
        local_state = np.asarray(local_state, dtype=float).flatten()
        if local_state.shape[0] != self.dimension:
            raise DimensionMismatchError(self.dimension, local_state.shape[0])
        return local_state
