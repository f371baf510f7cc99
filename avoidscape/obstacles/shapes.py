"""Obstacle shape variants (box, round) and their dispatch points."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

import numpy as np

from .collision import CircleSet, CollisionSet, IntervalSet, ProductSet


class ShapeKind(Enum):
    """Closed set of supported obstacle shapes."""

    BOX = "box"
    ROUND = "round"


@dataclass(frozen=True)
class BoxShape:
    """
    Axis-aligned rectangle for the decoupled double integrator.

    State layout is ``[x, vx, y, vy]``, so the offset only shifts the two
    position components.
    """

    x: float
    y: float
    half_width: float
    half_height: float
    kind: ShapeKind = field(default=ShapeKind.BOX, init=False)

    def __post_init__(self):
        assert self.half_width > 0, "Half-width must be positive"
        assert self.half_height > 0, "Half-height must be positive"


@dataclass(frozen=True)
class RoundShape:
    """
    Disc for the Dubins car, state layout ``[x, y, heading]``.

    ``trim`` shrinks the drawn radius for a conservative display; the
    safety query ignores it entirely.
    """

    x: float
    y: float
    radius: float
    trim: float = 0.0
    kind: ShapeKind = field(default=ShapeKind.ROUND, init=False)

    def __post_init__(self):
        assert self.radius > 0, "Radius must be positive"
        assert 0 <= self.trim <= self.radius, "Trim must lie in [0, radius]"

    @property
    def trimmed_radius(self) -> float:
        return self.radius - self.trim


ObstacleShape = Union[BoxShape, RoundShape]


def shape_offset(shape: ObstacleShape) -> np.ndarray:
    """
    Offset vector translating global states into the shape's frame.

    Args:
        shape: Obstacle shape

    Returns:
        Offset of length ``state_dimension(shape)``
    """
    if shape.kind is ShapeKind.BOX:
        return np.array([shape.x, 0.0, shape.y, 0.0])
    elif shape.kind is ShapeKind.ROUND:
        return np.array([shape.x, shape.y, 0.0])
    raise TypeError(f"Unknown obstacle shape: {shape!r}")


def state_dimension(shape: ObstacleShape) -> int:
    """Dimension of the dynamical model the shape belongs to."""
    if shape.kind is ShapeKind.BOX:
        return 4
    elif shape.kind is ShapeKind.ROUND:
        return 3
    raise TypeError(f"Unknown obstacle shape: {shape!r}")


def make_collision_set(shape: ObstacleShape) -> CollisionSet:
    """
    Build the physical collision primitive for a shape.

    Args:
        shape: Obstacle shape

    Returns:
        Interval product for boxes, disc for round obstacles
    """
    if shape.kind is ShapeKind.BOX:
        return ProductSet(
            IntervalSet(shape.half_width), IntervalSet(shape.half_height)
        )
    elif shape.kind is ShapeKind.ROUND:
        return CircleSet(shape.radius)
    raise TypeError(f"Unknown obstacle shape: {shape!r}")


def create_shape_from_config(config: dict) -> ObstacleShape:
    """
    Factory function to create a shape from a configuration dictionary.

    Args:
        config: Dictionary with 'type', 'center' and type-specific sizes

    Returns:
        BoxShape or RoundShape
    """
    shape_type = config.get("type", "").lower()
    center = np.asarray(config.get("center", [0.0, 0.0]), dtype=float).flatten()
    if center.shape != (2,):
        raise ValueError(f"Obstacle center must be [x, y], got {center.tolist()}")
    x, y = float(center[0]), float(center[1])

    if shape_type == "box":
        return BoxShape(
            x=x,
            y=y,
            half_width=float(config["half_width"]),
            half_height=float(config["half_height"]),
        )
    elif shape_type == "round":
        return RoundShape(
            x=x,
            y=y,
            radius=float(config["radius"]),
            trim=float(config.get("trim", 0.0)),
        )
    else:
        raise ValueError(f"Unknown obstacle type: {shape_type}")
