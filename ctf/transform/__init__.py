"""One-dimensional transforms applied by categories."""

from .base import Transform1D
from .linear import IDENTITY, IdentityTransform, LinearTransform
from .constant import ConstantTransform
from .logarithmic import ExponentialTransform, LogarithmicTransform
from .concatenated import ConcatenatedTransform, concatenate

__all__ = [
    "Transform1D",
    "IDENTITY",
    "IdentityTransform",
    "LinearTransform",
    "ConstantTransform",
    "ExponentialTransform",
    "LogarithmicTransform",
    "ConcatenatedTransform",
    "concatenate",
]
