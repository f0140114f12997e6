"""Data models for automigrate."""

from automigrate.models.columns import (
    ColumnDefinition,
    Snapshot,
    TableSnapshot,
    copy_table,
    table_payload,
    tables_equal,
)
from automigrate.models.descriptors import (
    ColumnChanges,
    DiffResult,
    MigrationDescriptor,
    SchemaOperation,
)
from automigrate.models.provider import (
    AttributeSpec,
    DeclaredModel,
    MigrationOptions,
    ModelProvider,
)

__all__ = [
    # Columns
    "ColumnDefinition",
    "Snapshot",
    "TableSnapshot",
    "copy_table",
    "table_payload",
    "tables_equal",
    # Descriptors
    "ColumnChanges",
    "DiffResult",
    "MigrationDescriptor",
    "SchemaOperation",
    # Providers
    "AttributeSpec",
    "DeclaredModel",
    "MigrationOptions",
    "ModelProvider",
]
