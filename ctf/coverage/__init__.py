"""Categories, category lists and their builder."""

from .range import NumberRange
from .category import Category, ConvertedCategory, category_sort_key
from .category_list import EMPTY, CategoryList, ConverseKind
from .builder import CategoryListBuilder

__all__ = [
    "NumberRange",
    "Category",
    "ConvertedCategory",
    "category_sort_key",
    "CategoryList",
    "ConverseKind",
    "EMPTY",
    "CategoryListBuilder",
]
