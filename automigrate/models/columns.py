"""Column definition models shared by the extractor, diff engine and snapshot."""

from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from automigrate.types import ColumnPayload


class ColumnDefinition(BaseModel):
    """One column's full description."""

    model_config = ConfigDict(extra="forbid")

    type: str = Field(..., min_length=1, description="Canonical type tag")
    allow_null: bool | None = None
    unique: bool | None = None
    primary_key: bool | None = None
    default_value: Any = None
    auto_increment: bool | None = None
    prev_column_name: str | None = Field(
        default=None,
        exclude=True,
        description="Name this column had before; only consulted while diffing",
    )

    def to_payload(self) -> ColumnPayload:
        """Plain dict of every set field, without the rename hint."""
        return self.model_dump(exclude_none=True)

    def same_shape(self, other: "ColumnDefinition") -> bool:
        """Check whether both definitions describe the same physical column."""
        return self.to_payload() == other.to_payload()

    def detached(self) -> "ColumnDefinition":
        """Deep copy that shares no state with this definition."""
        return self.model_copy(deep=True)

    @classmethod
    def from_payload(cls, payload: ColumnPayload) -> "ColumnDefinition":
        return cls.model_validate(payload)


# Column name -> definition for one table, in declaration order
TableSnapshot: TypeAlias = dict[str, ColumnDefinition]

# Table name -> column definitions
Snapshot: TypeAlias = dict[str, TableSnapshot]


def copy_table(columns: TableSnapshot) -> TableSnapshot:
    """Deep copy a table snapshot."""
    return {name: definition.detached() for name, definition in columns.items()}


def tables_equal(left: TableSnapshot, right: TableSnapshot) -> bool:
    """Compare two tables ignoring column order and rename hints."""
    return table_payload(left) == table_payload(right)


def table_payload(columns: TableSnapshot) -> dict[str, ColumnPayload]:
    """Plain JSON-ready form of a table snapshot."""
    return {name: definition.to_payload() for name, definition in columns.items()}
