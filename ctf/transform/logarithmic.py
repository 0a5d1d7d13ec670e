"""Exponential and logarithmic transforms.

Some products pack values on a logarithmic scale (chlorophyll concentration
for instance, where ``real = 10 ** (packed * scale + offset)``). These are
combined with a linear transform through ``concatenate()``.
"""

import math

import numpy as np

from ..numeric import raw_bits
from .base import Transform1D, apply_scalar


def _log(values: np.ndarray, base: float) -> np.ndarray:
    if base == 10:
        return np.log10(values)
    if base == 2:
        return np.log2(values)
    if base == math.e:
        return np.log(values)
    return np.log(values) / math.log(base)


class ExponentialTransform(Transform1D):
    """The function ``y = scale * base ** x``.

    Args:
        base: Positive base, different from 1.
        scale: Positive multiplication factor applied after exponentiation.
    """

    def __init__(self, base: float = 10.0, scale: float = 1.0):
        base = float(base)
        scale = float(scale)
        if not (base > 0 and base != 1 and math.isfinite(base)):
            raise ValueError(f"Exponential base must be positive and different from 1, got {base!r}")
        if not (scale > 0 and math.isfinite(scale)):
            raise ValueError(f"Exponential scale must be positive and finite, got {scale!r}")
        self.base = base
        self.scale = scale

    def apply(self, value: float) -> float:
        return apply_scalar(self, value)

    def apply_array(self, values: np.ndarray) -> np.ndarray:
        values = np.asarray(values, dtype=np.float64)
        with np.errstate(over="ignore"):
            if self.base == 10:
                out = np.power(10.0, values)
            elif self.base == math.e:
                out = np.exp(values)
            else:
                out = np.exp(values * math.log(self.base))
        if self.scale != 1:
            out *= self.scale
        return out

    def derivative(self, value: float) -> float:
        return self.apply(value) * math.log(self.base)

    def inverse(self) -> "LogarithmicTransform":
        # scale * base**x = y  =>  x = log_base(y) - log_base(scale)
        return LogarithmicTransform(self.base, -math.log(self.scale, self.base) if self.scale != 1 else 0.0)

    def __eq__(self, other):
        return (isinstance(other, ExponentialTransform)
                and raw_bits(self.base) == raw_bits(other.base)
                and raw_bits(self.scale) == raw_bits(other.scale))

    def __hash__(self):
        return hash((ExponentialTransform, self.base, self.scale))

    def __repr__(self):
        return f"ExponentialTransform(base={self.base!r}, scale={self.scale!r})"


class LogarithmicTransform(Transform1D):
    """The function ``y = log_base(x) + offset``.

    Values less than or equal to zero give NaN or negative infinity, as numpy
    does; no warning is emitted for them.
    """

    def __init__(self, base: float = 10.0, offset: float = 0.0):
        base = float(base)
        offset = float(offset)
        if not (base > 0 and base != 1 and math.isfinite(base)):
            raise ValueError(f"Logarithm base must be positive and different from 1, got {base!r}")
        if not math.isfinite(offset):
            raise ValueError(f"Logarithm offset must be finite, got {offset!r}")
        self.base = base
        self.offset = offset

    def apply(self, value: float) -> float:
        return apply_scalar(self, value)

    def apply_array(self, values: np.ndarray) -> np.ndarray:
        values = np.asarray(values, dtype=np.float64)
        with np.errstate(divide="ignore", invalid="ignore"):
            out = _log(values, self.base)
        if self.offset != 0:
            out += self.offset
        return out

    def derivative(self, value: float) -> float:
        with np.errstate(divide="ignore"):
            return float(np.divide(1.0, value * math.log(self.base)))

    def inverse(self) -> ExponentialTransform:
        # log_base(x) + offset = y  =>  x = base**(-offset) * base**y
        return ExponentialTransform(self.base, self.base ** -self.offset)

    def __eq__(self, other):
        return (isinstance(other, LogarithmicTransform)
                and raw_bits(self.base) == raw_bits(other.base)
                and raw_bits(self.offset) == raw_bits(other.offset))

    def __hash__(self):
        return hash((LogarithmicTransform, self.base, self.offset))

    def __repr__(self):
        return f"LogarithmicTransform(base={self.base!r}, offset={self.offset!r})"
