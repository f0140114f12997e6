"""Constants shared by the extractor, diff engine and renderer."""

from typing import Final

from .types import ChangeKind

# Implicit columns managed through table options rather than attributes
PRIMARY_KEY_COLUMN: Final[str] = "id"
CREATED_AT_COLUMN: Final[str] = "created_at"
UPDATED_AT_COLUMN: Final[str] = "updated_at"
DELETED_AT_COLUMN: Final[str] = "deleted_at"

RESERVED_COLUMNS: Final[frozenset[str]] = frozenset(
    {PRIMARY_KEY_COLUMN, CREATED_AT_COLUMN, UPDATED_AT_COLUMN, DELETED_AT_COLUMN}
)

PRIMARY_KEY_DEFINITION: Final[dict[str, object]] = {
    "type": "INTEGER",
    "allow_null": False,
    "auto_increment": True,
    "primary_key": True,
}
TIMESTAMP_DEFINITION: Final[dict[str, object]] = {
    "type": "DATETIME",
    "allow_null": False,
}
SOFT_DELETE_DEFINITION: Final[dict[str, object]] = {"type": "DATETIME"}

# Type tag of attributes that have no backing column
VIRTUAL_TYPE: Final[str] = "VIRTUAL"

# ORM runtime objects that look like models but never get migrations
INTERNAL_MODEL_NAMES: Final[frozenset[str]] = frozenset({"SQLModel", "sqlmodel"})

# Identifier generated migrations use to reference column types
TYPE_NAMESPACE: Final[str] = "types"

MIGRATION_EXTENSION: Final[str] = "py"

INITIAL_LABEL: Final[str] = "initial"

# (singular, plural) labels, in the order descriptors are emitted
CHANGE_LABELS: Final[dict[ChangeKind, tuple[str, str]]] = {
    ChangeKind.NEW: ("add-column-to", "add-columns-to"),
    ChangeKind.CHANGE: ("change-column-to", "change-columns-to"),
    ChangeKind.RENAME: ("rename-column-to", "rename-columns-to"),
    ChangeKind.REMOVE: ("remove-column-from", "remove-columns-from"),
}
