"""Tests for NumberRange and Category."""

import math

import numpy as np
import pytest

from ctf.coverage import Category, ConvertedCategory, NumberRange
from ctf.errors import IllegalCategoryRangeError
from ctf.numeric import nan_ordinal, raw_bits, to_nan_float
from ctf.transform import IDENTITY, LinearTransform


class TestNumberRange:
    def test_of(self):
        assert NumberRange.of(5) == NumberRange(5, 5)
        assert NumberRange.of((0, 10)) == NumberRange(0, 10)
        r = NumberRange(1, 2)
        assert NumberRange.of(r) is r

    def test_illegal(self):
        """Minimum greater than maximum is rejected."""
        with pytest.raises(IllegalCategoryRangeError):
            NumberRange(10, 0)
        with pytest.raises(IllegalCategoryRangeError):
            NumberRange(math.nan, 1)

    def test_union(self):
        union = NumberRange(0, 10).union(NumberRange(20, 30))
        assert union.minimum == 0 and union.maximum == 30
        assert 15 in union

    def test_exclusive_bounds(self):
        r = NumberRange(0, 1, min_inclusive=False, max_inclusive=False)
        assert r.inclusive_minimum == np.nextafter(0.0, 1.0)
        assert r.inclusive_maximum == np.nextafter(1.0, 0.0)
        assert 0 not in r
        assert 0.5 in r

    def test_span(self):
        assert NumberRange(-5, 10).span() == 15
        assert NumberRange(255, 255).span() == 0

    def test_str(self):
        assert str(NumberRange(0, 10)) == "[0 … 10]"
        assert str(NumberRange(255, 255)) == "[255]"
        assert str(NumberRange(0.5, 1.5, max_inclusive=False)) == "[0.5 … 1.5)"


class TestQuantitativeCategory:
    def test_identity_is_own_converse(self):
        c = Category.quantitative("Depth", (0, 100))
        assert c.converse is c
        assert c.to_converse is IDENTITY
        assert c.is_quantitative
        assert not c.is_converted

    def test_linear_converse(self):
        """The converse spans the converted range and points back."""
        c = Category.quantitative("SST", (1, 254), LinearTransform(0.15, -5), units="°C")
        converse = c.converse
        assert isinstance(converse, ConvertedCategory)
        assert converse.is_converted
        assert converse.converse is c
        assert converse.minimum == pytest.approx(-4.85)
        assert converse.maximum == pytest.approx(33.1)
        assert converse.units == "°C"
        assert converse.is_quantitative

    def test_decreasing_transform(self):
        """Bounds are swapped for a decreasing transfer function."""
        c = Category.quantitative("Inverted", (0, 10), LinearTransform(-1, 0))
        assert c.converse.minimum == -10
        assert c.converse.maximum == 0

    def test_exclusive_samples(self):
        c = Category.quantitative("Open", NumberRange(0, 1, min_inclusive=False))
        assert c.minimum == np.nextafter(0.0, 1.0)
        assert c.maximum == 1.0


class TestQualitativeCategory:
    def test_converts_to_nan_payload(self):
        c = Category.qualitative("Cloud", 255, 3)
        assert not c.is_quantitative
        assert math.isnan(c.converse.minimum)
        assert nan_ordinal(c.converse.minimum) == 3
        assert c.converse.range is None
        assert raw_bits(c.to_converse.apply(255)) == raw_bits(to_nan_float(3))

    def test_converse_maps_back(self):
        """The NaN payload converts back to the first sample value."""
        c = Category.qualitative("Land", (250, 252), 1)
        assert c.converse.to_converse.apply(to_nan_float(1)) == 250.0
        assert not c.converse.is_quantitative

    def test_contains_nan_payload(self):
        """The converse owns its own NaN payload and no other."""
        c = Category.qualitative("Cloud", 255, 3)
        assert c.contains(255)
        assert not c.contains(254)
        assert c.converse.contains(to_nan_float(3))
        assert not c.converse.contains(to_nan_float(4))

    def test_range_label(self):
        c = Category.qualitative("Cloud", 255, 3)
        assert c.range_label() == "[255]"
        assert c.converse.range_label() == "NaN #3"


class TestReset:
    def test_unconverted_is_unchanged(self):
        c = Category.quantitative("Depth", (0, 100))
        assert c.reset() is c

    def test_converted_becomes_identity(self):
        """A converted category is reset to an identity category over its real values."""
        converse = Category.quantitative("SST", (1, 254), LinearTransform(0.5, 0)).converse
        with pytest.warns(UserWarning, match="already converted"):
            plain = converse.reset()
        assert not plain.is_converted
        assert plain.converse is plain
        assert plain.minimum == 0.5 and plain.maximum == 127.0

    def test_converted_nan_reset(self):
        converse = Category.qualitative("Cloud", 255, 2).converse
        plain = converse.reset(warn=False)
        assert plain.range is None
        assert raw_bits(plain.minimum) == raw_bits(to_nan_float(2))


class TestEquality:
    def test_equal_categories(self):
        a = Category.quantitative("SST", (1, 254), LinearTransform(0.15, -5))
        b = Category.quantitative("SST", (1, 254), LinearTransform(0.15, -5))
        assert a == b
        assert hash(a) == hash(b)
        assert a.converse == b.converse

    def test_different_categories(self):
        a = Category.qualitative("Cloud", 255, 1)
        assert a != Category.qualitative("Cloud", 255, 2)
        assert a != Category.qualitative("Land", 255, 1)
        assert a != a.converse
