"""Schema diffing."""

from automigrate.diff.engine import (
    build_descriptors,
    classify_columns,
    compute_diff,
    diff,
)

__all__ = ["build_descriptors", "classify_columns", "compute_diff", "diff"]
