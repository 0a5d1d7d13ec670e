"""Bit-level helpers for IEEE 754 doubles and NaN payloads.

Qualitative sample values ("no data", "cloud", "saturated"...) are converted
to NaN values whose payload identifies the category. Ordinary float
comparisons can not tell those NaNs apart, and neither can they tell
``+0.0`` from ``-0.0``, so every function here works on raw bit patterns:

    raw_bits(-0.0) != raw_bits(0.0)
    raw_bits(to_nan_float(1)) != raw_bits(to_nan_float(2))

The total order used for sorting categories is:

    -inf < ... < -0.0 < +0.0 < ... < +inf < NaN (ordered by signed raw bits)
"""

import math
import struct

import numpy as np

# Bits of the canonical quiet float32 NaN. Payload ordinals are added to it.
_NAN_FLOAT_BITS = 0x7FC00000

MIN_NAN_ORDINAL = 0
MAX_NAN_ORDINAL = 0x3FFFFF

# XOR mask mapping negative doubles to a monotonically increasing int64 key.
_SIGN_FLIP = np.int64(0x7FFFFFFFFFFFFFFF)


def raw_bits(value: float) -> int:
    """Return the signed 64-bit raw bit pattern of a double (NaN payload kept)."""
    return struct.unpack("<q", struct.pack("<d", value))[0]


def from_raw_bits(bits: int) -> float:
    """Return the double having the given signed or unsigned 64-bit pattern."""
    return struct.unpack("<d", struct.pack("<Q", bits & 0xFFFFFFFFFFFFFFFF))[0]


def is_same(a: float, b: float) -> bool:
    """Bit-exact equality: distinguishes signed zeros and NaN payloads."""
    return raw_bits(a) == raw_bits(b)


def to_nan_float(ordinal: int) -> float:
    """Return a quiet float32 NaN with the given payload, widened to a double.

    Widening float32 to float64 keeps the payload (shifted into the upper
    mantissa bits), so casting the result back to float32 gives the same
    bit pattern and ``nan_ordinal()`` recovers the ordinal from either width.

    Args:
        ordinal: Payload in ``[MIN_NAN_ORDINAL, MAX_NAN_ORDINAL]``.

    Returns:
        A NaN value unique to ``ordinal``.
    """
    if not MIN_NAN_ORDINAL <= ordinal <= MAX_NAN_ORDINAL:
        raise ValueError(
            f"NaN ordinal {ordinal} out of range [{MIN_NAN_ORDINAL}, {MAX_NAN_ORDINAL}]"
        )
    bits = np.array([_NAN_FLOAT_BITS + ordinal], dtype=np.uint32)
    return float(bits.view(np.float32)[0])


def nan_ordinal(value: float) -> int:
    """Return the ordinal encoded in a NaN created by ``to_nan_float()``."""
    if not math.isnan(value):
        raise ValueError(f"Not a NaN value: {value!r}")
    bits = int(np.array([value], dtype=np.float64).astype(np.float32).view(np.uint32)[0])
    ordinal = bits - _NAN_FLOAT_BITS
    if not MIN_NAN_ORDINAL <= ordinal <= MAX_NAN_ORDINAL:
        raise ValueError(f"NaN bit pattern 0x{bits:08X} does not encode an ordinal")
    return ordinal


def sort_key(value: float) -> tuple:
    """Key for ``sorted()`` implementing the total order described above."""
    if math.isnan(value):
        return (1, raw_bits(value))
    bits = raw_bits(value)
    return (0, bits ^ 0x7FFFFFFFFFFFFFFF if bits < 0 else bits)


def compare(a: float, b: float) -> int:
    """Three-way comparison in the total order. Returns -1, 0 or +1."""
    ka, kb = sort_key(a), sort_key(b)
    return (ka > kb) - (ka < kb)


def sortable_keys(values: np.ndarray) -> np.ndarray:
    """Vectorised ``sort_key`` for non-NaN doubles, as int64 keys.

    The result is meaningless for NaN elements; callers mask them out first.
    """
    bits = np.ascontiguousarray(values, dtype=np.float64).view(np.int64)
    return np.where(bits < 0, bits ^ _SIGN_FLIP, bits)


def binary_search(array, key: float) -> int:
    """Binary search which can differentiate the various NaN values.

    Similar to ``bisect`` over a sorted sequence of doubles, except that
    equality is bit-exact, NaN sorts after every real number and NaNs are
    ranked among themselves by their raw bits.

    Args:
        array: Sequence of doubles sorted in the total order of this module.
        key: Value to search.

    Returns:
        The index of a bit-exact match, or ``~insertion_point`` if not found.
    """
    low = 0
    high = len(array) - 1
    key_is_nan = math.isnan(key)
    key_bits = raw_bits(key)
    while low <= high:
        mid = (low + high) >> 1
        mid_val = float(array[mid])
        if mid_val < key:  # neither value is NaN
            low = mid + 1
            continue
        if mid_val > key:
            high = mid - 1
            continue
        mid_bits = raw_bits(mid_val)
        if mid_bits == key_bits:
            return mid
        mid_is_nan = math.isnan(mid_val)
        if key_is_nan:
            # (real, NaN): mid is lower. (NaN, NaN): compare raw bits.
            adjust_low = not mid_is_nan or mid_bits < key_bits
        else:
            # (NaN, real): mid is greater. Otherwise (-0.0, 0.0) or (0.0, -0.0).
            adjust_low = not mid_is_nan and mid_bits < key_bits
        if adjust_low:
            low = mid + 1
        else:
            high = mid - 1
    return ~low
