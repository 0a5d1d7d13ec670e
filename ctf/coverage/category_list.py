"""The categorical transfer function engine.

A ``CategoryList`` is an immutable list of categories sorted by their
sample values, with no overlapping ranges. It can mix qualitative and
quantitative categories, and is itself a ``Transform1D`` converting packed
sample values to real values (qualitative samples becoming NaN payloads).
Its ``converse`` converts real values back to samples.

Lists are built in pairs: constructing the sample-domain list also builds the
real-value list, passing itself as the known converse so that the recursion
stops after one level. Only the real-value list extrapolates (values outside
every range are mapped through the nearest category and clamped); the
sample-domain list rejects unknown values with ``NoCategoryError``.

Instances are safe to share between threads. The only mutable field is the
``_last`` hint, always assigned an existing category; a stale or racing hint
costs an extra search, never a wrong result.
"""

import enum
import logging
import math
from collections.abc import Sequence
from typing import Optional

import numpy as np

from ..config import CTFConfig, DEFAULT_CONFIG
from ..errors import MismatchedDimensionError, NoCategoryError, OverlappingRangesError
from ..numeric import binary_search, compare, raw_bits, sortable_keys
from ..transform import Transform1D
from .category import Category, category_sort_key

logger = logging.getLogger(__name__)


class ConverseKind(enum.Enum):
    """How a list relates to the list of the opposite domain."""

    NO_QUANTITATIVE = "no_quantitative"  # converse is EMPTY
    IDENTITY = "identity"  # converse is the list itself
    DISTINCT = "distinct"  # converse is another list


class CategoryList(Transform1D, Sequence):
    """Sorted, non-overlapping categories and the conversion they define.

    Sorting and binary search are bit-exact (``-0.0`` ranks before ``+0.0``),
    but range membership treats signed zeros as equal: ``-0.0`` belongs to a
    category starting at ``+0.0``.

    Args:
        categories: Categories of the sample domain, in any order. Converted
            categories are reset to plain copies first.
        converse: Only for internal use: the sample-domain list when building
            its real-value converse.
        config: Engine settings; ``DEFAULT_CONFIG`` if omitted.

    Raises:
        OverlappingRangesError: If two categories have overlapping ranges.
    """

    def __init__(
        self,
        categories=(),
        converse: Optional["CategoryList"] = None,
        config: Optional[CTFConfig] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        categories = list(categories)
        if converse is None:
            categories = [c.reset(warn=self.config.warn_on_reset) for c in categories]
        categories.sort(key=category_sort_key)
        self._categories = tuple(categories)
        self._minimums = np.array([c.minimum for c in categories], dtype=np.float64)
        self._maximums = np.array([c.maximum for c in categories], dtype=np.float64)

        # Check for overlaps and build the union of all ranges.
        union = None
        for i, category in enumerate(categories):
            if i != 0:
                previous = categories[i - 1]
                if compare(category.minimum, previous.maximum) <= 0:
                    raise OverlappingRangesError(previous, category)
            if category.range is not None:
                # Seeded with the first range, which covers the most in common cases.
                if union is None:
                    union = categories[0].range
                union = union.union(category.range)
        self.range = union

        # Search tables. NaN-keyed categories are sorted last.
        self._n_real = int(np.count_nonzero(~np.isnan(self._minimums)))
        self._real_keys = sortable_keys(self._minimums[:self._n_real])
        self._nan_bits = np.ascontiguousarray(self._minimums[self._n_real:]).view(np.int64)

        extrapolation = None
        self._extrapolation_index = -1
        if converse is None:
            has_conversion = any(c.converse is not c for c in categories)
            has_quantitative = any(c.converse.range is not None for c in categories)
            if not has_quantitative:
                self.converse_kind = ConverseKind.NO_QUANTITATIVE
                self._converse = None
            elif has_conversion:
                self.converse_kind = ConverseKind.DISTINCT
                self._converse = CategoryList([c.converse for c in categories], self, self.config)
            else:
                self.converse_kind = ConverseKind.IDENTITY
                self._converse = None
        else:
            # Real values greater than every range extrapolate through the
            # last category having a range of real numbers.
            for i in range(len(categories) - 1, -1, -1):
                if not math.isnan(categories[i].maximum):
                    extrapolation = categories[i]
                    self._extrapolation_index = i
                    break
            self.converse_kind = ConverseKind.DISTINCT
            self._converse = converse
        self.extrapolation = extrapolation
        self._last = categories[0] if categories else None

        logger.debug(
            "Built category list of %d categories (%s converse, extrapolation: %s)",
            len(categories), self.converse_kind.value,
            extrapolation.name if extrapolation is not None else None,
        )

    # ---- Structure ----

    @property
    def categories(self) -> tuple:
        return self._categories

    @property
    def minimums(self) -> np.ndarray:
        """``Category.minimum`` of every category, in list order (read-only copy)."""
        return self._minimums.copy()

    @property
    def converse(self) -> "CategoryList":
        """The list of the opposite domain: ``EMPTY``, ``self`` or another list."""
        if self.converse_kind is ConverseKind.NO_QUANTITATIVE:
            return EMPTY
        if self.converse_kind is ConverseKind.IDENTITY:
            return self
        return self._converse

    @property
    def source_dimensions(self) -> int:
        return 1

    @property
    def target_dimensions(self) -> int:
        return 1

    def size(self) -> int:
        return len(self._categories)

    def get(self, i: int) -> Category:
        return self._categories[i]

    def __len__(self):
        return len(self._categories)

    def __getitem__(self, i):
        return self._categories[i]

    def is_identity(self) -> bool:
        return self.converse is self

    def inverse(self) -> "CategoryList":
        return self.converse

    def transfer_function(self) -> Transform1D:
        """The transform shared by every category, or this list if they differ."""
        if not self._categories:
            return self
        transform = self._categories[0].to_converse
        for category in self._categories[1:]:
            if category.to_converse != transform:
                return self
        return transform

    # ---- Search ----

    def search(self, sample: float) -> Optional[Category]:
        """Return the category of the given value, or ``None`` if none fits.

        NaN values match only the category keyed by the same bit pattern.
        Real values match the category whose range contains them; when this
        list extrapolates, values between two ranges go to the closer one
        (the lower one on ties), values below every range go to the first
        category and values above go to ``extrapolation``.
        """
        sample = float(sample)
        categories = self._categories
        i = binary_search(self._minimums, sample)
        if i >= 0:
            return categories[i]
        if math.isnan(sample):
            # Not one of the NaN values known to this list.
            return None
        # Insertion point: 'sample' is lower than categories[i].minimum, so only
        # the previous category can contain it.
        i = ~i
        if i > 0:
            category = categories[i - 1]
            if sample <= category.maximum:
                return category
        if i < len(categories) and sample == categories[i].minimum:
            # -0.0 and +0.0 belong to the same category.
            return categories[i]
        if self.extrapolation is not None:
            if i > 0:
                category = categories[i - 1]
                if i < len(categories):
                    following = categories[i]
                    # NaN minimum (qualitative) compares false: keep the lower category.
                    if following.minimum - sample < sample - category.maximum:
                        return following
                    return category
                return self.extrapolation
            if categories and not math.isnan(categories[0].minimum):
                return categories[0]
        return None

    def search_array(self, values) -> np.ndarray:
        """Vectorised ``search()``: index of the category of each value, -1 if none.

        Args:
            values: Array of any shape, converted to float64.

        Returns:
            Integer array with the shape of ``values``.
        """
        values = np.asarray(values, dtype=np.float64)
        flat = values.reshape(-1)
        result = np.full(flat.shape, -1, dtype=np.intp)
        n_real = self._n_real
        is_nan = np.isnan(flat)

        if self._nan_bits.size and is_nan.any():
            bits = np.ascontiguousarray(flat[is_nan]).view(np.int64)
            pos = np.minimum(np.searchsorted(self._nan_bits, bits), self._nan_bits.size - 1)
            hit = self._nan_bits[pos] == bits
            result[is_nan] = np.where(hit, n_real + pos, -1)

        real = ~is_nan
        if n_real and real.any():
            x = flat[real]
            below = np.searchsorted(self._real_keys, sortable_keys(x), side="right") - 1
            prev = np.maximum(below, 0)
            following = below + 1
            following_c = np.minimum(following, n_real - 1)
            found = np.where((following < n_real) & (x == self._minimums[following_c]), following, -1)
            found = np.where((below >= 0) & (x <= self._maximums[prev]), below, found)

            if self.extrapolation is not None:
                unresolved = found < 0
                n = len(self._categories)
                following_all = np.minimum(following, n - 1)
                with np.errstate(invalid="ignore"):
                    closer_next = (self._minimums[following_all] - x) < (x - self._maximums[prev])
                between = np.where(following < n, np.where(closer_next, following, below),
                                   self._extrapolation_index)
                found = np.where(unresolved & (below >= 0), between, found)
                found = np.where(unresolved & (below < 0), 0, found)
            result[real] = found
        return result.reshape(values.shape)

    # ---- Scalar transforms ----

    def _resolve(self, value: float) -> Category:
        category = self._last
        if category is None or not self._in_hint(category, value):
            category = self.search(value)
            if category is None:
                raise NoCategoryError(value)
            self._last = category
        return category

    @staticmethod
    def _in_hint(category: Category, value):
        inside = (value >= category.minimum) & (value <= category.maximum)
        if category.minimum == 0 or category.maximum == 0:
            # Zero on a bound: let search() decide between -0.0 and +0.0.
            inside = inside & (value != 0)
        elif math.isnan(category.minimum):
            inside = inside | (np.asarray(value, dtype=np.float64).view(np.int64) == raw_bits(category.minimum))
        return inside

    def transform(self, value: float) -> float:
        """Convert one value to the opposite domain.

        Raises:
            NoCategoryError: If no category owns ``value``.
        """
        value = float(value)
        category = self._resolve(value)
        result = category.to_converse.apply(value)
        if self.extrapolation is not None:
            converse = category.converse
            if result < converse.minimum:
                result = converse.minimum
            elif result > converse.maximum:
                result = converse.maximum
        if self.config.check_converse and self.converse_kind is not ConverseKind.NO_QUANTITATIVE:
            found = self.converse.search(result)
            if found is None or found.converse is not category:
                raise AssertionError(
                    f"Value {value} converted to {result} by {category!r} does not convert back"
                )
        return result

    def derivative(self, value: float) -> float:
        """Derivative of the conversion at ``value``."""
        value = float(value)
        return self._resolve(value).to_converse.derivative(value)

    def apply(self, value: float) -> float:
        return self.transform(value)

    def apply_array(self, values: np.ndarray) -> np.ndarray:
        values = np.asarray(values)
        return self.transform_array(values).reshape(values.shape)

    def transform_point(self, point, dst=None) -> np.ndarray:
        """Transform a one-dimensional point.

        Args:
            point: Sequence or array with exactly one coordinate.
            dst: Optional one-element array receiving the result.

        Returns:
            ``dst``, or a new float64 array of one element.
        """
        coordinates = np.asarray(point, dtype=np.float64).reshape(-1)
        if coordinates.size != 1:
            raise MismatchedDimensionError("point", 1, coordinates.size)
        if dst is None:
            dst = np.empty(1, dtype=np.float64)
        elif np.size(dst) != 1:
            raise MismatchedDimensionError("dst", 1, np.size(dst))
        dst[0] = self.transform(coordinates[0])
        return dst

    def derivative_at(self, point) -> np.ndarray:
        """Derivative at a one-dimensional point, as a 1×1 matrix."""
        coordinates = np.asarray(point, dtype=np.float64).reshape(-1)
        if coordinates.size != 1:
            raise MismatchedDimensionError("point", 1, coordinates.size)
        return np.array([[self.derivative(coordinates[0])]], dtype=np.float64)

    # ---- Batch transform ----

    def transform_array(self, src, src_off: int = 0, dst=None, dst_off: int = 0,
                        count: Optional[int] = None) -> np.ndarray:
        """Convert ``count`` values of ``src`` into ``dst``, one transform call per run.

        Consecutive values owned by the same category form a run converted by
        a single ``apply_array()`` call. ``src`` may have any numeric dtype;
        ``dst`` must be float32 or float64. Both are read as flat arrays.
        ``dst`` may be ``src`` itself (or overlap it): runs are processed
        backward when the destination starts after the source, so no value is
        overwritten before being read.

        Every value is classified before anything is written. If one of them
        has no category, ``NoCategoryError`` is raised and ``dst`` is left
        unmodified.

        Args:
            src: Source values.
            src_off: Index of the first value to read in the flattened ``src``.
            dst: Destination array, or None to allocate one of
                ``config.output_dtype`` (shaped like ``src`` when the whole
                source is converted).
            dst_off: Index of the first value to write in the flattened ``dst``.
            count: Number of values, default to the rest of ``src``.

        Returns:
            The destination array.
        """
        src = np.asarray(src)
        src_flat = src.reshape(-1)
        if count is None:
            count = src_flat.size - src_off
        if count < 0 or src_off < 0 or src_off + count > src_flat.size:
            raise ValueError(
                f"Source range [{src_off}, {src_off + count}) out of bounds for {src_flat.size} values"
            )
        whole = dst is None and src_off == 0 and dst_off == 0 and count == src_flat.size
        if dst is None:
            dst = np.empty(count + dst_off, dtype=self.config.output_dtype)
        if not isinstance(dst, np.ndarray) or dst.dtype not in (np.float32, np.float64):
            raise ValueError("Destination must be a float32 or float64 numpy array")
        if not dst.flags.c_contiguous:
            raise ValueError("Destination array must be C-contiguous")
        dst_flat = dst.reshape(-1)
        if dst_off < 0 or dst_off + count > dst_flat.size:
            raise ValueError(
                f"Destination range [{dst_off}, {dst_off + count}) out of bounds for {dst_flat.size} values"
            )
        if count == 0:
            return dst.reshape(src.shape) if whole else dst

        samples = np.asarray(src_flat[src_off:src_off + count], dtype=np.float64)
        target = dst_flat[dst_off:dst_off + count]
        backward = (np.may_share_memory(samples, target)
                    and target.__array_interface__["data"][0] > samples.__array_interface__["data"][0])

        runs = self._runs(samples, backward)
        if backward:
            runs.reverse()
        for start, stop, category in runs:
            converted = category.to_converse.apply_array(samples[start:stop])
            if self.extrapolation is not None and category.converse.range is not None:
                np.clip(converted, category.converse.minimum, category.converse.maximum, out=converted)
            target[start:stop] = converted
        self._last = runs[-1][2]
        return dst.reshape(src.shape) if whole else dst

    def _runs(self, samples: np.ndarray, backward: bool) -> list:
        """Split ``samples`` in ``(start, stop, category)`` runs, in forward order."""
        hint = self._last
        if self.config.batch_fast_path and hint is not None and np.all(self._in_hint(hint, samples)):
            return [(0, samples.size, hint)]
        indices = self.search_array(samples)
        missing = np.flatnonzero(indices < 0)
        if missing.size:
            # Report the first value met in processing order.
            raise NoCategoryError(float(samples[missing[-1] if backward else missing[0]]))
        starts = np.concatenate(([0], np.flatnonzero(np.diff(indices)) + 1))
        stops = np.concatenate((starts[1:], [samples.size]))
        return [(int(a), int(b), self._categories[indices[a]]) for a, b in zip(starts, stops)]

    # ---- Object protocol ----

    def __eq__(self, other):
        if not isinstance(other, CategoryList):
            return NotImplemented
        return self._categories == other._categories

    def __hash__(self):
        return hash(self._categories)

    def __repr__(self):
        lines = [f"CategoryList({len(self)} categories, {self.converse_kind.value})"]
        for category in self._categories:
            lines.append(f"  {category.range_label():<24} {category.name}")
        return "\n".join(lines)


EMPTY = CategoryList()
