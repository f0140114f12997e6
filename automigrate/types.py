"""Common type definitions for automigrate."""

from enum import Enum
from typing import Any, TypeAlias

# Plain JSON payload of one column definition, as persisted and rendered
ColumnPayload: TypeAlias = dict[str, Any]


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class ChangeKind(str, Enum):
    """Classification buckets produced by the diff engine."""

    NEW = "new"
    CHANGE = "change"
    RENAME = "rename"
    REMOVE = "remove"


class OperationKind(str, Enum):
    """Schema-mutation calls a generated migration can make."""

    CREATE_TABLE = "create_table"
    DROP_TABLE = "drop_table"
    ADD_COLUMN = "add_column"
    REMOVE_COLUMN = "remove_column"
    CHANGE_COLUMN = "change_column"
    RENAME_COLUMN = "rename_column"


class ModelStatus(str, Enum):
    """Per-model outcome of a migration run."""

    CREATED = "created"
    NO_CHANGE = "no_change"
    ERROR = "error"
