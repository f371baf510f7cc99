"""Palette of value functions given as Python callables."""

from typing import Callable, Dict, Hashable, Optional, Sequence, Tuple

import numpy as np

from .base import AvoidSetPalette

ValueFunction = Callable[[np.ndarray], float]
GradientFunction = Callable[[np.ndarray], np.ndarray]


class FunctionPalette(AvoidSetPalette):
    """
    Value functions evaluated directly from callables.

    Useful for closed-form safety values and for testing. Sets registered
    without a gradient function get a central-difference gradient.
    """

    def __init__(
        self,
        dimension: int,
        extent: Optional[Sequence[Tuple[float, float]]] = None,
        resolution: int = 41,
        step: float = 1e-6,
    ):
        """
        Initialize an empty palette.

        Args:
            dimension: State dimension shared by every value function
            extent: Per-dimension (low, high) local bounds for display slices
            resolution: Samples per swept dimension when displaying
            step: Finite-difference step for numerical gradients
        """
        self.dimension = int(dimension)
        self.extent = None if extent is None else [tuple(map(float, e)) for e in extent]
        if self.extent is not None and len(self.extent) != self.dimension:
            raise ValueError("Extent must give one (low, high) pair per dimension")
        self.resolution = int(resolution)
        self.step = float(step)
        self._functions: Dict[Hashable, Tuple[ValueFunction, Optional[GradientFunction]]] = {}

    @property
    def set_ids(self) -> Tuple[Hashable, ...]:
        return tuple(self._functions)

    def add_set(
        self,
        set_id: Hashable,
        value_fn: ValueFunction,
        grad_fn: Optional[GradientFunction] = None,
    ) -> None:
        """
        Register a value function.

        Args:
            set_id: Identifier for the value function
            value_fn: Function local_state -> safety value
            grad_fn: Optional function local_state -> gradient vector
        """
        self._functions[set_id] = (value_fn, grad_fn)

    def value(self, set_id: Hashable, local_state: np.ndarray) -> float:
        self._check_set(set_id)
        local_state = self._check_state(local_state)
        value_fn, _ = self._functions[set_id]
        return float(value_fn(local_state))

    def grad_v(self, set_id: Hashable, local_state: np.ndarray) -> np.ndarray:
        self._check_set(set_id)
        local_state = self._check_state(local_state)
        value_fn, grad_fn = self._functions[set_id]
        if grad_fn is not None:
            return np.asarray(grad_fn(local_state), dtype=float).flatten()

        grad = np.zeros(self.dimension)
        for i in range(self.dimension):
            state_plus = local_state.copy()
            state_plus[i] += self.step
            state_minus = local_state.copy()
            state_minus[i] -= self.step
            grad[i] = (value_fn(state_plus) - value_fn(state_minus)) / (2 * self.step)
        return grad

    def sample_axes(self, set_id: Hashable, dim: int) -> np.ndarray:
        self._check_set(set_id)
        if self.extent is None:
            raise ValueError("FunctionPalette needs an extent to display a grid")
        low, high = self.extent[dim]
        return np.linspace(low, high, self.resolution)
