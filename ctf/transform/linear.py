"""Identity and linear (scale and offset) transforms.

Most packed rasters use ``real = packed * scale_factor + add_offset``, so
these two transforms carry nearly all the conversion work. Python floats
and numpy float64 arrays both round each multiply and add separately, so the
scalar and vectorised paths below give identical results.
"""

import numpy as np

from ..numeric import raw_bits
from .base import Transform1D


class IdentityTransform(Transform1D):
    """The function ``y = x``. Use the ``IDENTITY`` singleton."""

    def apply(self, value: float) -> float:
        return value

    def apply_array(self, values: np.ndarray) -> np.ndarray:
        return np.array(values, dtype=np.float64, copy=True)

    def derivative(self, value: float) -> float:
        return 1.0

    def inverse(self) -> "IdentityTransform":
        return self

    def is_identity(self) -> bool:
        return True

    def __eq__(self, other):
        return isinstance(other, IdentityTransform)

    def __hash__(self):
        return hash(IdentityTransform)

    def __repr__(self):
        return "IdentityTransform()"


IDENTITY = IdentityTransform()


class LinearTransform(Transform1D):
    """The function ``y = x * scale + offset``.

    Args:
        scale: Multiplication factor. Must be finite and non-zero.
        offset: Value added after the multiplication.
    """

    def __init__(self, scale: float, offset: float = 0.0):
        scale = float(scale)
        offset = float(offset)
        if scale == 0 or not np.isfinite(scale):
            raise ValueError(f"Linear transform scale must be finite and non-zero, got {scale!r}")
        if not np.isfinite(offset):
            raise ValueError(f"Linear transform offset must be finite, got {offset!r}")
        self.scale = scale
        self.offset = offset

    @staticmethod
    def create(scale: float, offset: float = 0.0) -> Transform1D:
        """Return ``IDENTITY`` for (1, 0), otherwise a new ``LinearTransform``."""
        if scale == 1 and offset == 0:
            return IDENTITY
        return LinearTransform(scale, offset)

    def apply(self, value: float) -> float:
        return value * self.scale + self.offset

    def apply_array(self, values: np.ndarray) -> np.ndarray:
        out = np.multiply(values, self.scale, dtype=np.float64)
        out += self.offset
        return out

    def derivative(self, value: float) -> float:
        return self.scale

    def inverse(self) -> "LinearTransform":
        # x = (y - offset) / scale, written in the same multiply-then-add form
        return LinearTransform(1.0 / self.scale, -self.offset / self.scale)

    def __eq__(self, other):
        return (isinstance(other, LinearTransform)
                and raw_bits(self.scale) == raw_bits(other.scale)
                and raw_bits(self.offset) == raw_bits(other.offset))

    def __hash__(self):
        return hash((LinearTransform, self.scale, self.offset))

    def __repr__(self):
        return f"LinearTransform(scale={self.scale!r}, offset={self.offset!r})"
