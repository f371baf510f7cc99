"""Obstacle shapes, obstacles and their aggregation."""

from .shapes import BoxShape, RoundShape, ShapeKind, create_shape_from_config
from .collision import (
    CircleSet,
    CollisionSet,
    IntervalSet,
    ProductSet,
    SafeSet,
    check_collision,
    pick_obstacle,
)
from .obstacle import Obstacle
from .obstaclescape import (
    SENTINEL_VALUE,
    Obstaclescape,
    create_obstaclescape_from_config,
)

__all__ = [
    "BoxShape",
    "RoundShape",
    "ShapeKind",
    "create_shape_from_config",
    "CollisionSet",
    "SafeSet",
    "IntervalSet",
    "ProductSet",
    "CircleSet",
    "check_collision",
    "pick_obstacle",
    "Obstacle",
    "Obstaclescape",
    "SENTINEL_VALUE",
    "create_obstaclescape_from_config",
]
