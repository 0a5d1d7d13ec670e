"""Categories: named ranges of sample values with their transfer function.

A ``Category`` lives in the packed (sample) domain. Its ``converse`` lives
in the real-value domain and converts back:

    Category("Temperature", (1, 254), LinearTransform(0.15, -5))
        .converse  -> ConvertedCategory over [-4.85 … 33.1]
        .converse.converse  -> the original category

Qualitative categories ("no data", "cloud"...) are converted to a NaN value
whose payload is the category ordinal. Identity categories are their own
converse.
"""

import logging
import math
import warnings
from numbers import Real
from typing import Optional

from ..errors import IllegalCategoryRangeError
from ..numeric import nan_ordinal, raw_bits, sort_key, to_nan_float
from ..transform import IDENTITY, ConstantTransform, Transform1D
from .range import NumberRange

logger = logging.getLogger(__name__)


class Category:
    """A named range of sample values and the function converting them.

    Args:
        name: Label used in diagnostics.
        samples: A ``NumberRange``, a single number, a ``(min, max)`` pair, or
            a NaN for a category keyed by one NaN bit pattern.
        to_converse: Transfer function to real values. ``None`` or an identity
            transform makes this category its own converse.
        units: Units of the real values, informative only.
        nan_ordinal: If given, the category is qualitative: every sample is
            converted to ``to_nan_float(nan_ordinal)`` and ``to_converse``
            is ignored.
    """

    def __init__(
        self,
        name: str,
        samples,
        to_converse: Optional[Transform1D] = None,
        units: Optional[str] = None,
        nan_ordinal: Optional[int] = None,
    ):
        self.name = str(name)
        if isinstance(samples, Real) and math.isnan(samples):
            self.range = None
            self.minimum = self.maximum = float(samples)
        else:
            extent = NumberRange.of(samples)
            if extent.is_empty():
                raise IllegalCategoryRangeError(extent.minimum, extent.maximum)
            self.range = extent
            self.minimum = extent.inclusive_minimum
            self.maximum = extent.inclusive_maximum

        if nan_ordinal is not None:
            nan = to_nan_float(nan_ordinal)
            self.units = None
            self.to_converse = ConstantTransform(nan, self.minimum)
            self.converse = ConvertedCategory(self, nan, nan, self.to_converse.inverse())
        elif to_converse is None or to_converse.is_identity():
            self.units = units
            self.to_converse = IDENTITY
            self.converse = self
        else:
            if self.range is None:
                raise ValueError(f"Category {self.name!r} is keyed by NaN and can not be converted")
            lower = to_converse.apply(self.minimum)
            upper = to_converse.apply(self.maximum)
            if lower > upper:  # decreasing function
                lower, upper = upper, lower
            if math.isnan(lower) or math.isnan(upper):
                raise IllegalCategoryRangeError(lower, upper)
            self.units = None
            self.to_converse = to_converse
            self.converse = ConvertedCategory(self, lower, upper, to_converse.inverse(), units)

    @classmethod
    def qualitative(cls, name: str, samples, ordinal: int) -> "Category":
        """A category converted to the NaN payload ``ordinal``."""
        return cls(name, samples, nan_ordinal=ordinal)

    @classmethod
    def quantitative(
        cls,
        name: str,
        samples,
        to_converse: Optional[Transform1D] = None,
        units: Optional[str] = None,
    ) -> "Category":
        """A category of measurements, identity when ``to_converse`` is None."""
        return cls(name, samples, to_converse=to_converse, units=units)

    @property
    def is_converted(self) -> bool:
        """Whether this category lives in the real-value domain."""
        return False

    @property
    def is_quantitative(self) -> bool:
        """Whether both this category and its converse have a range of real numbers."""
        return self.range is not None and self.converse.range is not None

    def reset(self, warn: bool = True) -> "Category":
        """Return a plain, unconverted copy of this category.

        An unconverted category is returned as-is. A converted one becomes an
        identity category over its own (real) values, so that a list built
        from it never composes two conversions.
        """
        if not self.is_converted:
            return self
        if warn:
            warnings.warn(
                f"Category {self.name!r} was already converted; using its real values as samples"
            )
        logger.debug("Resetting converted category %r over %s", self.name, self.range_label())
        samples = self.range if self.range is not None else self.minimum
        return Category(self.name, samples, units=self.units)

    def contains(self, value: float) -> bool:
        """Whether ``value`` is in ``[minimum … maximum]``, or is this category's NaN."""
        return self.minimum <= value <= self.maximum or raw_bits(value) == raw_bits(self.minimum)

    def range_label(self) -> str:
        """Human-readable range, e.g. ``[0 … 10]`` or ``NaN #3``."""
        if self.range is not None:
            return str(self.range)
        try:
            return f"NaN #{nan_ordinal(self.minimum)}"
        except ValueError:
            return f"NaN (0x{raw_bits(self.minimum) & 0xFFFFFFFFFFFFFFFF:016X})"

    def __eq__(self, other):
        if not isinstance(other, Category):
            return NotImplemented
        return (self.name == other.name
                and self.is_converted == other.is_converted
                and raw_bits(self.minimum) == raw_bits(other.minimum)
                and raw_bits(self.maximum) == raw_bits(other.maximum)
                and self.to_converse == other.to_converse)

    def __hash__(self):
        return hash((self.name, raw_bits(self.minimum), raw_bits(self.maximum)))

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r}, {self.range_label()})"


class ConvertedCategory(Category):
    """The real-value side of a category. Created by ``Category`` itself."""

    def __init__(
        self,
        original: Category,
        minimum: float,
        maximum: float,
        to_converse: Transform1D,
        units: Optional[str] = None,
    ):
        self.name = original.name
        self.units = units
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.range = None if math.isnan(self.minimum) else NumberRange(self.minimum, self.maximum)
        self.to_converse = to_converse
        self.converse = original

    @property
    def is_converted(self) -> bool:
        return True


def category_sort_key(category: Category) -> tuple:
    """Sort by minimum; NaN-keyed categories last, ordered by raw bits."""
    return sort_key(category.minimum)
