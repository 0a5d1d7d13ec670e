"""Categorical Transfer Functions (CTF): conversion between packed and real raster values.

Core API (numpy only):
    import ctf
    categories = (ctf.CategoryListBuilder()
                  .set_background("No data", 0)
                  .add_quantitative("Elevation", (1, 65535), scale=0.1, offset=-500, units="m")
                  .build())
    real = categories.transform_array(packed)           # "No data" becomes a NaN payload
    packed_again = categories.inverse().transform_array(real)

Pandas API (requires pandas):
    import ctf.pandas_ext
    real = df["band1"].ctf.to_real(categories)
"""

__version__ = "0.1.0"

from .config import CTFConfig, DEFAULT_CONFIG
from .errors import (
    CategoryError,
    IllegalCategoryRangeError,
    MismatchedDimensionError,
    NoCategoryError,
    OverlappingRangesError,
)
from .numeric import binary_search, nan_ordinal, to_nan_float
from .transform import (
    IDENTITY,
    ConstantTransform,
    ExponentialTransform,
    LinearTransform,
    LogarithmicTransform,
    Transform1D,
    concatenate,
)
from .coverage import (
    EMPTY,
    Category,
    CategoryList,
    CategoryListBuilder,
    ConverseKind,
    ConvertedCategory,
    NumberRange,
)


# ---- Lazy imports for pandas-dependent functions ----
# `import ctf` works without pandas installed.

_LAZY_IMPORTS = {
    "convert_series": "pandas_ext",
    "convert_dataframe": "pandas_ext",
}


def __getattr__(name):
    if name in _LAZY_IMPORTS:
        module_name = _LAZY_IMPORTS[name]
        import importlib
        mod = importlib.import_module(f".{module_name}", __package__)
        return getattr(mod, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "CTFConfig",
    "DEFAULT_CONFIG",
    "CategoryError",
    "IllegalCategoryRangeError",
    "MismatchedDimensionError",
    "NoCategoryError",
    "OverlappingRangesError",
    "binary_search",
    "nan_ordinal",
    "to_nan_float",
    "IDENTITY",
    "ConstantTransform",
    "ExponentialTransform",
    "LinearTransform",
    "LogarithmicTransform",
    "Transform1D",
    "concatenate",
    "EMPTY",
    "Category",
    "CategoryList",
    "CategoryListBuilder",
    "ConverseKind",
    "ConvertedCategory",
    "NumberRange",
    "convert_series",
    "convert_dataframe",
]
