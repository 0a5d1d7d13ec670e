"""Abstract one-dimensional transform interface."""

from abc import ABC, abstractmethod

import numpy as np


class Transform1D(ABC):
    """Abstract base for all invertible, differentiable unary functions.

    Subclasses must keep ``apply()`` and ``apply_array()`` bit-identical
    for the same input: a batch conversion of a raster has to give exactly
    what converting each pixel one by one gives.
    """

    @abstractmethod
    def apply(self, value: float) -> float:
        """Transform a single value."""
        ...

    @abstractmethod
    def derivative(self, value: float) -> float:
        """Return the derivative of this function at ``value``."""
        ...

    @abstractmethod
    def inverse(self) -> "Transform1D":
        """Return the inverse function."""
        ...

    def apply_array(self, values: np.ndarray) -> np.ndarray:
        """Transform every element of a float64 array into a new float64 array.

        The default loops over ``apply()``; subclasses override it with a
        vectorised expression.
        """
        values = np.asarray(values, dtype=np.float64)
        out = np.empty(values.shape, dtype=np.float64)
        flat_in = values.reshape(-1)
        flat_out = out.reshape(-1)
        for i in range(flat_in.size):
            flat_out[i] = self.apply(float(flat_in[i]))
        return out

    def is_identity(self) -> bool:
        return False

    def __call__(self, value: float) -> float:
        return self.apply(value)


def apply_scalar(transform: Transform1D, value: float) -> float:
    """Evaluate ``transform.apply_array`` on one value.

    Used by transforms whose numpy kernels may round differently from the
    ``math`` module, so that the scalar path matches the array path exactly.
    """
    return float(transform.apply_array(np.array([value], dtype=np.float64))[0])
