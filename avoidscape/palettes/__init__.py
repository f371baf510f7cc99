"""Value-function palettes consumed by obstacles."""

from .base import AvoidSetPalette
from .grid import GridPalette
from .analytic import FunctionPalette

__all__ = [
    "AvoidSetPalette",
    "GridPalette",
    "FunctionPalette",
]
