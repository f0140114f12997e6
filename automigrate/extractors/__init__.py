"""Column extraction from model declarations."""

from automigrate.extractors.columns import extract_columns
from automigrate.extractors.sqlmodel_provider import (
    SQLModelProvider,
    column_type_tag,
    discover_models,
    renamed_from,
)

__all__ = [
    "SQLModelProvider",
    "column_type_tag",
    "discover_models",
    "extract_columns",
    "renamed_from",
]
