"""Collection of obstacles aggregated into a single worst-case safety value."""

import logging
from typing import Dict, Hashable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import InvalidValueError
from ..palettes.base import AvoidSetPalette
from .obstacle import Obstacle
from .shapes import create_shape_from_config

logger = logging.getLogger(__name__)

# Larger than any attainable safety value: "no constraining obstacle"
SENTINEL_VALUE = 100.0


class Obstaclescape:
    """
    Landscape of obstacles an agent must dodge.

    The safety value of a union of avoid sets is the minimum over its
    members, so ``value`` returns the worst value among eligible obstacles
    and ``grad_v`` the gradient of the obstacle achieving it.

    Each obstacle carries two flags, both False at construction:

    - destroyed: excluded from value, gradient, grid display and rendering.
    - undetected: excluded from value, gradient and grid display, but still
      rendered. The obstacle is visible but not yet part of the agent's
      hazard model.

    Flags change only through ``mark_destroyed`` / ``mark_undetected``.
    There is no internal locking: a flag must not change while a query is
    running, and callers mutating flags from another thread must
    synchronise around queries themselves.
    """

    def __init__(
        self,
        obstacles: Sequence[Obstacle],
        sentinel: float = SENTINEL_VALUE,
    ):
        """
        Initialize obstaclescape.

        Args:
            obstacles: Obstacles in scan order; indices are fixed from here on
            sentinel: Value returned when no eligible obstacle constrains
        """
        self._obstacles: Tuple[Obstacle, ...] = tuple(obstacles)
        self.sentinel = float(sentinel)
        self._destroyed: List[bool] = [False] * len(self._obstacles)
        self._undetected: List[bool] = [False] * len(self._obstacles)

    # -------------------------------------------------------------------------
    # Container access
    # -------------------------------------------------------------------------

    @property
    def obstacles(self) -> Tuple[Obstacle, ...]:
        return self._obstacles

    @property
    def destroyed(self) -> Tuple[bool, ...]:
        return tuple(self._destroyed)

    @property
    def undetected(self) -> Tuple[bool, ...]:
        return tuple(self._undetected)

    def __len__(self) -> int:
        return len(self._obstacles)

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(self._obstacles)

    def __getitem__(self, index: int) -> Obstacle:
        return self._obstacles[index]

    # -------------------------------------------------------------------------
    # Flags
    # -------------------------------------------------------------------------

    def mark_destroyed(self, index: int, destroyed: bool = True) -> None:
        """
        Set the destroyed flag of obstacle ``index``.

        Args:
            index: Obstacle index
            destroyed: New flag value
        """
        self._check_index(index)
        self._destroyed[index] = bool(destroyed)
        logger.debug(f"Obstacle {index} destroyed={self._destroyed[index]}")

    def mark_undetected(self, index: int, undetected: bool = True) -> None:
        """
        Set the undetected flag of obstacle ``index``.

        Args:
            index: Obstacle index
            undetected: New flag value
        """
        self._check_index(index)
        self._undetected[index] = bool(undetected)
        logger.debug(f"Obstacle {index} undetected={self._undetected[index]}")

    def is_eligible(self, index: int) -> bool:
        """Whether obstacle ``index`` takes part in value aggregation."""
        self._check_index(index)
        return not self._destroyed[index] and not self._undetected[index]

    def eligible_indices(self) -> List[int]:
        return [
            i
            for i in range(len(self._obstacles))
            if not self._destroyed[i] and not self._undetected[i]
        ]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._obstacles):
            raise IndexError(
                f"Obstacle index {index} out of range for {len(self._obstacles)} obstacles"
            )

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def _scan(self, set_id: Hashable, states: np.ndarray) -> Tuple[float, Optional[int]]:
        """
        Running minimum over eligible obstacles; first minimiser wins.

        A NaN from a palette raises InvalidValueError instead of being
        silently skipped by the comparison.
        """
        min_value = self.sentinel
        dominant = None
        for index in self.eligible_indices():
            obs_value = self._obstacles[index].value(set_id, states)
            if np.isnan(obs_value):
                raise InvalidValueError(index, set_id)
            if obs_value < min_value:
                min_value = obs_value
                dominant = index
        return min_value, dominant

    def value(self, set_id: Hashable, states: np.ndarray) -> float:
        """
        Worst safety value over eligible obstacles (union of avoid sets).

        Args:
            set_id: Avoid set identifier passed through to the palettes
            states: Global state vector

        Returns:
            Minimum eligible value, or the sentinel if none is lower
        """
        min_value, _ = self._scan(set_id, states)
        return min_value

    def dominant_index(self, set_id: Hashable, states: np.ndarray) -> Optional[int]:
        """
        Index of the obstacle dominating the union at this state.

        Returns:
            First eligible index achieving the minimum, or None when no
            obstacle is below the sentinel
        """
        _, dominant = self._scan(set_id, states)
        return dominant

    def grad_v(self, set_id: Hashable, states: np.ndarray) -> np.ndarray:
        """
        Gradient of the dominating obstacle's safety value.

        Ties go to the lowest index. When no obstacle is below the sentinel
        the value is constant, so a zero vector is returned.

        Args:
            set_id: Avoid set identifier
            states: Global state vector

        Returns:
            Gradient vector of the same length as ``states``
        """
        dominant = self.dominant_index(set_id, states)
        if dominant is None:
            return np.zeros(np.asarray(states).size)
        return self._obstacles[dominant].grad_v(set_id, states)

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def display_grid(
        self,
        set_id: Hashable,
        canvas,
        color: int,
        current_state: np.ndarray,
        swept_x: int,
        swept_y: int,
    ) -> None:
        """Draw value-function slices for every eligible obstacle."""
        for index in self.eligible_indices():
            self._obstacles[index].display_grid(
                set_id, canvas, color, current_state, swept_x, swept_y
            )

    def render(self, canvas) -> None:
        """Draw every obstacle that has not been destroyed."""
        for index, obstacle in enumerate(self._obstacles):
            if not self._destroyed[index]:
                obstacle.render(canvas)

    def render_augmented(self, canvas, pad: float) -> None:
        """Draw every standing obstacle with a ``pad`` margin."""
        for index, obstacle in enumerate(self._obstacles):
            if not self._destroyed[index]:
                obstacle.render_augmented(canvas, pad)

    def __repr__(self) -> str:
        return (
            f"Obstaclescape(n={len(self._obstacles)}, "
            f"eligible={len(self.eligible_indices())}, sentinel={self.sentinel})"
        )


def create_obstaclescape_from_config(
    configs: Sequence[dict],
    palettes: Dict[str, AvoidSetPalette],
    sentinel: float = SENTINEL_VALUE,
) -> Obstaclescape:
    """
    Factory function to assemble an obstaclescape from configuration.

    Initial ``destroyed`` / ``undetected`` flags in the configuration are
    applied after construction through the marking methods.

    Args:
        configs: Obstacle dictionaries with 'type', 'center', sizes,
            'palette' and optional flags
        palettes: Palettes by name
        sentinel: Value returned when no obstacle constrains

    Returns:
        Obstaclescape instance
    """
    obstacles = []
    for config in configs:
        palette_name = config.get("palette")
        if palette_name not in palettes:
            raise ValueError(
                f"Unknown palette {palette_name!r} (available: {sorted(palettes)})"
            )
        shape = create_shape_from_config(config)
        obstacles.append(Obstacle(shape, palettes[palette_name]))

    scape = Obstaclescape(obstacles, sentinel=sentinel)
    for index, config in enumerate(configs):
        if config.get("destroyed", False):
            scape.mark_destroyed(index)
        if config.get("undetected", False):
            scape.mark_undetected(index)

    logger.debug(f"Assembled {scape!r}")
    return scape
