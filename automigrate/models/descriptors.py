"""Migration descriptor models produced by the diff engine."""

from pydantic import BaseModel, Field

from automigrate.models.columns import ColumnDefinition, TableSnapshot, copy_table
from automigrate.types import OperationKind


class SchemaOperation(BaseModel):
    """A single schema-mutation call inside a migration."""

    kind: OperationKind
    table_name: str
    column_name: str | None = None
    new_column_name: str | None = None
    definition: ColumnDefinition | None = None
    columns: TableSnapshot | None = None

    @classmethod
    def create_table(cls, table_name: str, columns: TableSnapshot) -> "SchemaOperation":
        return cls(
            kind=OperationKind.CREATE_TABLE,
            table_name=table_name,
            columns=copy_table(columns),
        )

    @classmethod
    def drop_table(cls, table_name: str) -> "SchemaOperation":
        return cls(kind=OperationKind.DROP_TABLE, table_name=table_name)

    @classmethod
    def add_column(
        cls, table_name: str, column_name: str, definition: ColumnDefinition
    ) -> "SchemaOperation":
        return cls(
            kind=OperationKind.ADD_COLUMN,
            table_name=table_name,
            column_name=column_name,
            definition=definition.detached(),
        )

    @classmethod
    def remove_column(cls, table_name: str, column_name: str) -> "SchemaOperation":
        return cls(
            kind=OperationKind.REMOVE_COLUMN,
            table_name=table_name,
            column_name=column_name,
        )

    @classmethod
    def change_column(
        cls, table_name: str, column_name: str, definition: ColumnDefinition
    ) -> "SchemaOperation":
        return cls(
            kind=OperationKind.CHANGE_COLUMN,
            table_name=table_name,
            column_name=column_name,
            definition=definition.detached(),
        )

    @classmethod
    def rename_column(
        cls,
        table_name: str,
        old_name: str,
        new_name: str,
        definition: ColumnDefinition,
    ) -> "SchemaOperation":
        return cls(
            kind=OperationKind.RENAME_COLUMN,
            table_name=table_name,
            column_name=old_name,
            new_column_name=new_name,
            definition=definition.detached(),
        )

    def apply(self, columns: TableSnapshot) -> TableSnapshot:
        """Return the table state after this operation, leaving ``columns`` intact.

        Args:
            columns: Table state before the operation

        Returns:
            New table state
        """
        if self.kind == OperationKind.CREATE_TABLE:
            return copy_table(self.columns or {})
        if self.kind == OperationKind.DROP_TABLE:
            return {}

        result = copy_table(columns)
        if self.kind == OperationKind.REMOVE_COLUMN:
            result.pop(self.column_name, None)
        elif self.kind in (OperationKind.ADD_COLUMN, OperationKind.CHANGE_COLUMN):
            result[self.column_name] = self.definition.detached()
        elif self.kind == OperationKind.RENAME_COLUMN:
            # Keep the renamed column where the old one was
            result = {
                (self.new_column_name if name == self.column_name else name): (
                    self.definition.detached()
                    if name == self.column_name
                    else definition
                )
                for name, definition in result.items()
            }
        return result


class MigrationDescriptor(BaseModel):
    """One migration file worth of reversible operations."""

    label: str
    table_name: str
    up: list[SchemaOperation] = Field(default_factory=list)
    down: list[SchemaOperation] = Field(default_factory=list)

    def apply(self, columns: TableSnapshot) -> TableSnapshot:
        """Table state after running this migration's up operations."""
        for operation in self.up:
            columns = operation.apply(columns)
        return columns


class ColumnChanges(BaseModel):
    """Disjoint classification of the columns of one table."""

    new: list[str] = Field(default_factory=list)
    change: list[str] = Field(default_factory=list)
    # New column name -> the previous name it was renamed from
    rename: dict[str, str] = Field(default_factory=dict)
    remove: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.new or self.change or self.rename or self.remove)


class DiffResult(BaseModel):
    """Outcome of diffing one table against its snapshot entry."""

    table_name: str
    frozen_prior: TableSnapshot | None = None
    current: TableSnapshot
    changes: ColumnChanges = Field(default_factory=ColumnChanges)
    descriptors: list[MigrationDescriptor] = Field(default_factory=list)

    @property
    def is_initial(self) -> bool:
        return self.frozen_prior is None

    def final_columns(self) -> TableSnapshot:
        """Table state once every descriptor has been applied."""
        columns = copy_table(self.frozen_prior or {})
        for descriptor in self.descriptors:
            columns = descriptor.apply(columns)
        return columns
