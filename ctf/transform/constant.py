"""Constant transform, used by qualitative categories.

A qualitative category maps every sample value of its range to one NaN
payload, and that payload back to a single sample value. Neither direction
is a true bijection, which is the controlled loss qualitative categories
accept.
"""

import math

import numpy as np

from ..numeric import raw_bits
from .base import Transform1D


class ConstantTransform(Transform1D):
    """The function ``y = value`` for every ``x``.

    Args:
        value: The constant result. May be a NaN with a payload; the bit
            pattern is preserved by both ``apply()`` and ``apply_array()``.
        inverse_value: Constant returned by the inverse function. Defaults to
            NaN, which makes the inverse map everything to "no value".
    """

    def __init__(self, value: float, inverse_value: float = math.nan):
        self.value = float(value)
        self.inverse_value = float(inverse_value)

    def apply(self, value: float) -> float:
        return self.value

    def apply_array(self, values: np.ndarray) -> np.ndarray:
        return np.full(np.shape(values), self.value, dtype=np.float64)

    def derivative(self, value: float) -> float:
        return 0.0

    def inverse(self) -> "ConstantTransform":
        return ConstantTransform(self.inverse_value, self.value)

    def __eq__(self, other):
        return (isinstance(other, ConstantTransform)
                and raw_bits(self.value) == raw_bits(other.value)
                and raw_bits(self.inverse_value) == raw_bits(other.inverse_value))

    def __hash__(self):
        return hash((ConstantTransform, raw_bits(self.value), raw_bits(self.inverse_value)))

    def __repr__(self):
        return f"ConstantTransform(value={self.value!r}, inverse_value={self.inverse_value!r})"
