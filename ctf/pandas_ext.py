"""Pandas integration for category list conversions.

Usage:
    import ctf.pandas_ext  # registers the accessor

    real = df["sst"].ctf.to_real(categories)
    packed = real.ctf.to_samples(categories)
    labels = df["sst"].ctf.classify(categories)

    # Or convert several columns at once
    converted = ctf.pandas_ext.convert_dataframe(df, categories, columns=["sst"])
"""

import numpy as np
import pandas as pd

from .coverage.category_list import CategoryList


# ---- Functional API ----

def convert_series(series: pd.Series, categories: CategoryList) -> pd.Series:
    """Convert a numeric Series through ``categories``, keeping its index and name.

    Raises:
        NoCategoryError: If a value has no category.
    """
    values = series.to_numpy(dtype=np.float64)
    converted = categories.transform_array(values)
    return pd.Series(converted, index=series.index, name=series.name)


def convert_dataframe(
    df: pd.DataFrame,
    categories: CategoryList,
    columns: list = None,
) -> pd.DataFrame:
    """Convert numeric columns of a DataFrame, returning a new DataFrame.

    Args:
        df: DataFrame to convert.
        categories: Category list to apply.
        columns: Specific columns to convert (default: all numeric columns).

    Returns:
        Copy of ``df`` with the selected columns converted to float64.
    """
    if columns is None:
        columns = list(df.select_dtypes(include=[np.number]).columns)
    if not columns:
        raise ValueError("No numeric columns found in DataFrame")

    result = df.copy()
    for col in columns:
        result[col] = convert_series(df[col], categories)
    return result


# ---- Pandas accessor ----

@pd.api.extensions.register_series_accessor("ctf")
class CTFAccessor:
    """Pandas Series accessor for category list conversions.

    Usage:
        import ctf.pandas_ext

        real = packed.ctf.to_real(categories)
    """

    def __init__(self, pandas_obj):
        self._obj = pandas_obj

    def to_real(self, categories: CategoryList) -> pd.Series:
        """Convert packed sample values to real values."""
        return convert_series(self._obj, categories)

    def to_samples(self, categories: CategoryList) -> pd.Series:
        """Convert real values back to packed sample values."""
        return convert_series(self._obj, categories.inverse())

    def classify(self, categories: CategoryList) -> pd.Series:
        """Name of the category of each value, None where no category fits."""
        values = self._obj.to_numpy(dtype=np.float64)
        indices = categories.search_array(values)
        names = np.array([c.name for c in categories] + [None], dtype=object)
        return pd.Series(names[indices], index=self._obj.index, name=self._obj.name)
