"""Collision-set primitives and physical collision checking."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

import numpy as np

from ..errors import DimensionMismatchError

if TYPE_CHECKING:
    from .obstaclescape import Obstaclescape


class CollisionSet(ABC):
    """
    Geometric set used for hard collision and pick testing.

    Values are expressed in the obstacle-relative frame: negative inside
    the set, positive outside. Collision sets never take part in the
    safety-value union.
    """

    dimension: int

    @abstractmethod
    def value(self, local_state: np.ndarray) -> float:
        """
        Signed membership value of a local state.

        Args:
            local_state: Obstacle-relative state of length ``dimension``

        Returns:
            Negative inside, positive outside
        """
        pass

    def contains(self, local_state: np.ndarray) -> bool:
        """Check if the local state lies inside the set."""
        return self.value(local_state) < 0

    def _check(self, local_state: np.ndarray) -> np.ndarray:
        local_state = np.asarray(local_state, dtype=float).flatten()
        if local_state.shape[0] != self.dimension:
            raise DimensionMismatchError(self.dimension, local_state.shape[0])
        return local_state


class SafeSet(CollisionSet):
    """Set with no physical extent; nothing ever collides with it."""

    def __init__(self, dimension: int):
        self.dimension = int(dimension)

    def value(self, local_state: np.ndarray) -> float:
        self._check(local_state)
        return float("inf")

    def __repr__(self) -> str:
        return f"SafeSet(dimension={self.dimension})"


class IntervalSet(CollisionSet):
    """
    Position interval for a one-axis double integrator.

    State is ``[position, velocity]``; velocity does not affect membership.
    """

    dimension = 2

    def __init__(self, half_width: float):
        self.half_width = float(half_width)
        assert self.half_width > 0, "Half-width must be positive"

    def value(self, local_state: np.ndarray) -> float:
        local_state = self._check(local_state)
        return float(abs(local_state[0]) - self.half_width)

    def __repr__(self) -> str:
        return f"IntervalSet(half_width={self.half_width})"


class ProductSet(CollisionSet):
    """
    Product of two sets over concatenated sub-states.

    A state is inside the product only when each part is inside its own
    set, so the value is the maximum of the two.
    """

    def __init__(self, first: CollisionSet, second: CollisionSet):
        self.first = first
        self.second = second
        self.dimension = first.dimension + second.dimension

    def value(self, local_state: np.ndarray) -> float:
        local_state = self._check(local_state)
        split = self.first.dimension
        return max(
            self.first.value(local_state[:split]),
            self.second.value(local_state[split:]),
        )

    def __repr__(self) -> str:
        return f"ProductSet({self.first!r}, {self.second!r})"


class CircleSet(CollisionSet):
    """
    Disc in the plane for a Dubins car.

    State is ``[x, y, heading]``; heading does not affect membership.
    """

    dimension = 3

    def __init__(self, radius: float):
        self.radius = float(radius)
        assert self.radius > 0, "Radius must be positive"

    def value(self, local_state: np.ndarray) -> float:
        local_state = self._check(local_state)
        return float(np.hypot(local_state[0], local_state[1]) - self.radius)

    def __repr__(self) -> str:
        return f"CircleSet(radius={self.radius})"


# =============================================================================
# Collection-level checks
# =============================================================================


def colliding_indices(scape: "Obstaclescape", state: np.ndarray) -> List[int]:
    """
    Indices of obstacles whose collision set contains the state.

    Destroyed obstacles are skipped. Undetected obstacles still exist
    physically and are checked.

    Args:
        scape: Obstacle collection
        state: Global state vector

    Returns:
        Colliding indices in scan order
    """
    hits = []
    for index, obstacle in enumerate(scape):
        if scape.destroyed[index]:
            continue
        if obstacle.collision_value(state) < 0:
            hits.append(index)
    return hits


def check_collision(scape: "Obstaclescape", state: np.ndarray) -> bool:
    """
    Check if the state collides with any standing obstacle.

    Args:
        scape: Obstacle collection
        state: Global state vector

    Returns:
        True if in collision
    """
    return pick_obstacle(scape, state) is not None


def pick_obstacle(scape: "Obstaclescape", state: np.ndarray) -> Optional[int]:
    """Index of the first standing obstacle containing the state, if any."""
    for index, obstacle in enumerate(scape):
        if not scape.destroyed[index] and obstacle.collision_value(state) < 0:
            return index
    return None
