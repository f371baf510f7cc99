"""Obstacle coupling a shape with a shared value-function palette."""

from typing import Hashable, Optional

import numpy as np

from ..errors import DimensionMismatchError
from ..palettes.base import AvoidSetPalette
from .collision import CollisionSet
from .shapes import ObstacleShape, make_collision_set, shape_offset


class Obstacle:
    """
    Static obstacle queried through precomputed avoid sets.

    The palette's state space is relative to the obstacle, so every query
    first subtracts the obstacle's offset from the global state. The
    palette is shared with other obstacles and never copied; the collision
    set belongs to this obstacle alone.
    """

    def __init__(
        self,
        shape: ObstacleShape,
        palette: AvoidSetPalette,
        collision_set: Optional[CollisionSet] = None,
    ):
        """
        Initialize obstacle.

        Args:
            shape: BoxShape or RoundShape
            palette: Shared value-function palette for the shape's model
            collision_set: Physical collision primitive; defaults to the
                shape's own set

        Raises:
            DimensionMismatchError: If offset, palette and collision set
                disagree on the state dimension
        """
        self.shape = shape
        self.palette = palette
        self.collision_set = (
            collision_set if collision_set is not None else make_collision_set(shape)
        )

        offset = shape_offset(shape)
        offset.setflags(write=False)
        self._offset = offset

        if palette.dimension != len(offset):
            raise DimensionMismatchError(len(offset), palette.dimension, "palette")
        if self.collision_set.dimension != len(offset):
            raise DimensionMismatchError(
                len(offset), self.collision_set.dimension, "collision set"
            )

    @property
    def offset(self) -> np.ndarray:
        """Read-only offset between global and obstacle-relative states."""
        return self._offset

    @property
    def dimension(self) -> int:
        return len(self._offset)

    def offset_states(self, states: np.ndarray) -> np.ndarray:
        """
        Transform a global state into the obstacle-relative frame.

        Args:
            states: Global state vector

        Returns:
            New array ``states - offset``
        """
        states = np.asarray(states, dtype=float).flatten()
        if states.shape[0] != self.dimension:
            raise DimensionMismatchError(self.dimension, states.shape[0])
        return states - self._offset

    def value(self, set_id: Hashable, states: np.ndarray) -> float:
        """Safety value of the global state under avoid set ``set_id``."""
        return self.palette.value(set_id, self.offset_states(states))

    def grad_v(self, set_id: Hashable, states: np.ndarray) -> np.ndarray:
        """Gradient of the safety value, same length as ``states``."""
        return self.palette.grad_v(set_id, self.offset_states(states))

    def collision_value(self, states: np.ndarray) -> float:
        """
        Physical collision value of the global state.

        Negative inside the obstacle. Independent of the safety value.
        """
        return self.collision_set.value(self.offset_states(states))

    def display_grid(
        self,
        set_id: Hashable,
        canvas,
        color: int,
        current_state: np.ndarray,
        swept_x: int,
        swept_y: int,
    ) -> None:
        """Draw a slice of this obstacle's value function around it."""
        self.palette.display_grid(
            set_id,
            canvas,
            color,
            self.offset_states(current_state),
            swept_x,
            swept_y,
            self._offset,
        )

    def render(self, canvas) -> None:
        """Draw the obstacle outline."""
        from ..visualization.render import render_shape

        render_shape(canvas, self.shape)

    def render_augmented(self, canvas, pad: float) -> None:
        """Draw the obstacle with an extra ``pad`` margin around it."""
        from ..visualization.render import render_shape_augmented

        render_shape_augmented(canvas, self.shape, pad)

    def __repr__(self) -> str:
        return f"Obstacle(shape={self.shape!r}, offset={self._offset.tolist()})"
