"""Chaining of two transforms."""

import numpy as np

from .base import Transform1D


class ConcatenatedTransform(Transform1D):
    """The function ``y = second(first(x))``. Build with ``concatenate()``."""

    def __init__(self, first: Transform1D, second: Transform1D):
        self.first = first
        self.second = second

    def apply(self, value: float) -> float:
        return self.second.apply(self.first.apply(value))

    def apply_array(self, values: np.ndarray) -> np.ndarray:
        return self.second.apply_array(self.first.apply_array(values))

    def derivative(self, value: float) -> float:
        # Chain rule
        return self.second.derivative(self.first.apply(value)) * self.first.derivative(value)

    def inverse(self) -> Transform1D:
        return concatenate(self.second.inverse(), self.first.inverse())

    def __eq__(self, other):
        return (isinstance(other, ConcatenatedTransform)
                and self.first == other.first and self.second == other.second)

    def __hash__(self):
        return hash((ConcatenatedTransform, self.first, self.second))

    def __repr__(self):
        return f"ConcatenatedTransform({self.first!r}, {self.second!r})"


def concatenate(first: Transform1D, second: Transform1D) -> Transform1D:
    """Return ``second(first(x))``, eliding identity operands."""
    if first.is_identity():
        return second
    if second.is_identity():
        return first
    return ConcatenatedTransform(first, second)
