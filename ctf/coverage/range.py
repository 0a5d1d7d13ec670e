"""Numeric ranges of sample values."""

import math
from dataclasses import dataclass

import numpy as np

from ..errors import IllegalCategoryRangeError


def _format_bound(value: float) -> str:
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True)
class NumberRange:
    """A range of real numbers with inclusive or exclusive bounds.

    NaN bounds are not allowed; categories keyed by a NaN value have no range.
    """

    minimum: float
    maximum: float
    min_inclusive: bool = True
    max_inclusive: bool = True

    def __post_init__(self):
        object.__setattr__(self, "minimum", float(self.minimum))
        object.__setattr__(self, "maximum", float(self.maximum))
        if math.isnan(self.minimum) or math.isnan(self.maximum) or self.minimum > self.maximum:
            raise IllegalCategoryRangeError(self.minimum, self.maximum)

    @classmethod
    def of(cls, samples) -> "NumberRange":
        """Build a range from a ``NumberRange``, a single number or a ``(min, max)`` pair."""
        if isinstance(samples, NumberRange):
            return samples
        if isinstance(samples, (tuple, list)):
            if len(samples) != 2:
                raise ValueError(f"Expected a (minimum, maximum) pair, got {samples!r}")
            return cls(samples[0], samples[1])
        return cls(samples, samples)

    @property
    def inclusive_minimum(self) -> float:
        """Smallest value inside this range."""
        if self.min_inclusive:
            return self.minimum
        return float(np.nextafter(self.minimum, math.inf))

    @property
    def inclusive_maximum(self) -> float:
        """Largest value inside this range."""
        if self.max_inclusive:
            return self.maximum
        return float(np.nextafter(self.maximum, -math.inf))

    def is_empty(self) -> bool:
        return self.inclusive_minimum > self.inclusive_maximum

    def contains(self, value: float) -> bool:
        return self.inclusive_minimum <= value <= self.inclusive_maximum

    def span(self) -> float:
        return self.maximum - self.minimum

    def union(self, other: "NumberRange") -> "NumberRange":
        """Smallest range containing both ranges (gaps between them included)."""
        if other.minimum < self.minimum or (other.minimum == self.minimum and other.min_inclusive):
            lo, lo_inc = other.minimum, other.min_inclusive
        else:
            lo, lo_inc = self.minimum, self.min_inclusive
        if other.maximum > self.maximum or (other.maximum == self.maximum and other.max_inclusive):
            hi, hi_inc = other.maximum, other.max_inclusive
        else:
            hi, hi_inc = self.maximum, self.max_inclusive
        return NumberRange(lo, hi, lo_inc, hi_inc)

    def __contains__(self, value) -> bool:
        return self.contains(value)

    def __str__(self):
        left = "[" if self.min_inclusive else "("
        right = "]" if self.max_inclusive else ")"
        if self.minimum == self.maximum:
            return f"{left}{_format_bound(self.minimum)}{right}"
        return f"{left}{_format_bound(self.minimum)} … {_format_bound(self.maximum)}{right}"
