"""Helper for creating category lists of a raster band.

Qualitative categories receive their NaN ordinals in a fixed order: the
background (fill value) first, then the other qualitative categories in
declaration order. Two builders fed the same declarations therefore produce
bit-identical NaN payloads, which is what lets independent readers of the
same file agree on which NaN means "missing".
"""

from typing import Optional

from ..config import CTFConfig
from ..transform import LinearTransform, Transform1D, concatenate
from .category import Category
from .category_list import CategoryList


class CategoryListBuilder:
    """Collect category declarations, then ``build()`` a ``CategoryList``.

    Example:
        >>> categories = (CategoryListBuilder()
        ...     .set_background("Fill value", 0)
        ...     .add_qualitative("Cloud", 255)
        ...     .add_quantitative("Temperature", (1, 254), scale=0.15, offset=-5, units="°C")
        ...     .build())
    """

    def __init__(self, config: Optional[CTFConfig] = None):
        self.config = config
        self._background = None
        self._qualitative = []
        self._quantitative = []

    def set_background(self, name: str, samples) -> "CategoryListBuilder":
        """Declare the fill value category. It always gets NaN ordinal 0."""
        self._background = (name, samples)
        return self

    def add_qualitative(self, name: str, samples) -> "CategoryListBuilder":
        """Declare a category converted to its own NaN value."""
        self._qualitative.append((name, samples))
        return self

    def add_quantitative(
        self,
        name: str,
        samples,
        scale: float = 1.0,
        offset: float = 0.0,
        units: Optional[str] = None,
        post: Optional[Transform1D] = None,
    ) -> "CategoryListBuilder":
        """Declare a category of measurements.

        Args:
            name: Category name.
            samples: Range of packed values.
            scale: Multiplication factor (``scale_factor`` in netCDF files).
            offset: Value added after scaling (``add_offset``).
            units: Units of the real values.
            post: Optional transform applied after the linear one, e.g. an
                ``ExponentialTransform`` for logarithmically packed values.
        """
        transform = LinearTransform.create(scale, offset)
        if post is not None:
            transform = concatenate(transform, post)
        self._quantitative.append(Category(name, samples, transform, units))
        return self

    def add_category(self, category: Category) -> "CategoryListBuilder":
        """Add a category created by the caller."""
        self._quantitative.append(category)
        return self

    def clear(self) -> "CategoryListBuilder":
        self._background = None
        self._qualitative.clear()
        self._quantitative.clear()
        return self

    def categories(self) -> list:
        """Categories declared so far, with their NaN ordinals assigned."""
        declared = list(self._qualitative)
        if self._background is not None:
            declared.insert(0, self._background)
        result = [Category.qualitative(name, samples, ordinal)
                  for ordinal, (name, samples) in enumerate(declared)]
        return result + self._quantitative

    def build(self) -> CategoryList:
        """Create the list. Raises ``OverlappingRangesError`` on conflicting declarations."""
        return CategoryList(self.categories(), config=self.config)
