"""Central configuration for categorical transfer functions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CTFConfig:
    """Engine settings shared by a category list and its converse."""

    # --- Batch transforms ---
    batch_fast_path: bool = True  # Try the last matched category for the whole array first
    output_dtype: str = "float64"  # dtype allocated by transform_array() when no destination is given

    # --- Diagnostics ---
    check_converse: bool = False  # Verify converse.search(result) after each scalar transform
    warn_on_reset: bool = True  # warnings.warn when an already-converted category is reset

    def __post_init__(self):
        if self.output_dtype not in ("float32", "float64"):
            raise ValueError(
                f"Unknown output dtype: {self.output_dtype!r}. Choose from ['float32', 'float64']"
            )


DEFAULT_CONFIG = CTFConfig()
