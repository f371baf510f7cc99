"""Wrapping of periodic state coordinates."""

import numpy as np

FULL_TURN = 2 * np.pi


def wrap_periodic(values: np.ndarray, start: float, period: float = FULL_TURN) -> np.ndarray:
    """
    Wrap coordinates into one period beginning at ``start``.

    Args:
        values: Coordinates, any shape
        start: Lower end of the target interval
        period: Interval length (a full turn for headings)

    Returns:
        Wrapped coordinates in [start, start + period)
    """
    return np.mod(np.asarray(values, dtype=float) - start, period) + start
