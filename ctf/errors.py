"""Exceptions raised by category lists and their categories.

All messages come from the ``MESSAGES`` table so that a caller can reformat
them (for example in another locale) from the attributes carried by each
exception without parsing strings.
"""

MESSAGES = {
    "category_range_overlap": (
        "Category \"{0}\" with range {1} overlaps category \"{2}\" with range {3}."
    ),
    "illegal_category_range": "Illegal range [{0} … {1}] for a category.",
    "no_category_for_value": "No category for value {0}.",
    "mismatched_dimension": "Argument '{0}' has {2} dimensions, while {1} was expected.",
}


def format_message(key: str, *args) -> str:
    """Format the message registered under ``key`` with positional arguments."""
    return MESSAGES[key].format(*args)


class CategoryError(ValueError):
    """Base class of all errors raised by this package."""


class OverlappingRangesError(CategoryError):
    """Two categories claim overlapping sample value ranges."""

    def __init__(self, category_a, category_b):
        self.category_a = category_a
        self.category_b = category_b
        super().__init__(format_message(
            "category_range_overlap",
            category_a.name, category_a.range_label(),
            category_b.name, category_b.range_label(),
        ))


class IllegalCategoryRangeError(CategoryError):
    """A category range has its minimum greater than its maximum."""

    def __init__(self, minimum, maximum):
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(format_message("illegal_category_range", minimum, maximum))


class NoCategoryError(CategoryError):
    """No category owns the given value and extrapolation is not allowed."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(format_message("no_category_for_value", value))


class MismatchedDimensionError(CategoryError):
    """A point given to a one-dimensional transform does not have one coordinate."""

    def __init__(self, name: str, expected: int, actual: int):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(format_message("mismatched_dimension", name, expected, actual))
