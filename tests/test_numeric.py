"""Tests for bit-level float helpers and the NaN-aware binary search."""

import math

import numpy as np
import pytest

from ctf.numeric import (
    MAX_NAN_ORDINAL,
    binary_search,
    compare,
    from_raw_bits,
    is_same,
    nan_ordinal,
    raw_bits,
    sortable_keys,
    to_nan_float,
)


class TestRawBits:
    def test_signed_zeros_differ(self):
        """+0.0 and -0.0 have different raw bits."""
        assert raw_bits(0.0) == 0
        assert raw_bits(-0.0) == -(2 ** 63)
        assert not is_same(0.0, -0.0)

    def test_roundtrip(self):
        """from_raw_bits inverts raw_bits, NaN payloads included."""
        for value in (1.5, -2.25, math.inf, to_nan_float(12)):
            assert raw_bits(from_raw_bits(raw_bits(value))) == raw_bits(value)


class TestNanOrdinals:
    def test_distinct_payloads(self):
        """Each ordinal gives a distinct NaN bit pattern."""
        values = [to_nan_float(i) for i in range(5)]
        assert all(math.isnan(v) for v in values)
        assert len({raw_bits(v) for v in values}) == 5

    def test_ordinal_roundtrip(self):
        """nan_ordinal recovers the ordinal from double and float32 NaNs."""
        assert nan_ordinal(to_nan_float(5)) == 5
        assert nan_ordinal(np.float32(to_nan_float(7))) == 7
        assert nan_ordinal(to_nan_float(MAX_NAN_ORDINAL)) == MAX_NAN_ORDINAL

    def test_ordinal_zero_is_canonical_nan(self):
        """Ordinal 0 is the bit pattern of the default quiet NaN."""
        assert is_same(to_nan_float(0), float(np.float64(np.nan)))

    def test_float32_roundtrip_keeps_bits(self):
        """Narrowing to float32 and widening back gives the same double."""
        value = to_nan_float(42)
        again = float(np.array([value]).astype(np.float32).astype(np.float64)[0])
        assert is_same(value, again)

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            to_nan_float(-1)
        with pytest.raises(ValueError):
            to_nan_float(MAX_NAN_ORDINAL + 1)

    def test_not_nan(self):
        with pytest.raises(ValueError):
            nan_ordinal(1.0)


class TestOrdering:
    def test_compare(self):
        """Total order: -0.0 < +0.0 < reals < NaN, NaNs by bits."""
        assert compare(-0.0, 0.0) == -1
        assert compare(0.0, -0.0) == 1
        assert compare(1.0, 1.0) == 0
        assert compare(math.inf, to_nan_float(0)) == -1
        assert compare(to_nan_float(1), to_nan_float(2)) == -1
        assert compare(to_nan_float(2), to_nan_float(2)) == 0

    def test_sortable_keys_monotonic(self):
        """Keys increase strictly with the value."""
        values = np.array([-math.inf, -1e300, -1.0, -1e-300, -0.0, 0.0, 1e-300, 1.0, 1e300, math.inf])
        keys = sortable_keys(values)
        assert keys.dtype == np.int64
        assert np.all(np.diff(keys) > 0)


class TestBinarySearch:
    def setup_method(self):
        self.array = np.array([0.0, 10.0, 20.0, to_nan_float(1), to_nan_float(2)])

    def test_exact_hits(self):
        assert binary_search(self.array, 10.0) == 1
        assert binary_search(self.array, to_nan_float(1)) == 3
        assert binary_search(self.array, to_nan_float(2)) == 4

    def test_misses(self):
        """Misses return ~insertion_point."""
        assert binary_search(self.array, 15.0) == ~2
        assert binary_search(self.array, -5.0) == ~0
        assert binary_search(self.array, 25.0) == ~3
        assert binary_search(self.array, to_nan_float(3)) == ~5
        assert binary_search(self.array, to_nan_float(0)) == ~3

    def test_signed_zero(self):
        """-0.0 is not found as +0.0 and sorts before it."""
        assert binary_search(self.array, -0.0) == ~0
        assert binary_search(np.array([-0.0, 1.0]), 0.0) == ~1

    def test_empty(self):
        assert binary_search([], 1.0) == ~0

    def test_matches_searchsorted_for_reals(self):
        """Agrees with numpy for ordinary sorted reals."""
        rng = np.random.RandomState(42)
        array = np.unique(rng.uniform(-100, 100, 200))
        for key in np.concatenate([rng.uniform(-120, 120, 100), array[::7]]):
            expected = np.searchsorted(array, key)
            found = binary_search(array, float(key))
            if expected < len(array) and array[expected] == key:
                assert found == expected
            else:
                assert found == ~expected
