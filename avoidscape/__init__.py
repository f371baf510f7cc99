"""Safety evaluation of an agent against a landscape of avoid-set obstacles."""

from .errors import (
    AvoidscapeError,
    DimensionMismatchError,
    InvalidValueError,
    UnknownSetError,
)
from .obstacles import (
    SENTINEL_VALUE,
    BoxShape,
    Obstacle,
    Obstaclescape,
    RoundShape,
    ShapeKind,
)
from .palettes import AvoidSetPalette, FunctionPalette, GridPalette

__version__ = "0.1.0"

__all__ = [
    "AvoidscapeError",
    "DimensionMismatchError",
    "InvalidValueError",
    "UnknownSetError",
    "BoxShape",
    "RoundShape",
    "ShapeKind",
    "Obstacle",
    "Obstaclescape",
    "SENTINEL_VALUE",
    "AvoidSetPalette",
    "GridPalette",
    "FunctionPalette",
]
