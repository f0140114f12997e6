"""Render migration descriptors into Python migration modules."""

import re

import black
from pydantic import BaseModel

from automigrate.constants import MIGRATION_EXTENSION, TYPE_NAMESPACE
from automigrate.exceptions import RenderError
from automigrate.log import get_logger
from automigrate.models.columns import ColumnDefinition, TableSnapshot
from automigrate.models.descriptors import MigrationDescriptor, SchemaOperation
from automigrate.types import OperationKind

logger = get_logger(__name__)

MIGRATION_TEMPLATE = '''"""Migration: {label} {table_name}."""


async def up(schema, types):
{up}


async def down(schema, types):
{down}
'''

INDENT = " " * 4

# Quoted type placeholder inside a serialized definition, e.g. 'type': 'types.STRING'
TYPE_TOKEN_PATTERN = re.compile(
    r"""['"]type['"]:\s*(['"]"""
    + re.escape(TYPE_NAMESPACE)
    + r"""\.[A-Za-z_][A-Za-z0-9_]*['"])"""
)


class RenderedMigration(BaseModel):
    """Formatted migration source and the file name it is written under."""

    filename: str
    source: str


def format_type_tokens(source: str) -> str:
    """Unquote every type placeholder so it references the ``types`` argument.

    Each distinct token is rewritten once, across the whole text.
    """
    tokens = dict.fromkeys(
        match.group(1) for match in TYPE_TOKEN_PATTERN.finditer(source)
    )
    for token in tokens:
        source = source.replace(token, token[1:-1])
    return source


def build_filename(descriptor: MigrationDescriptor, timestamp: str) -> str:
    """File name of a migration: ``<timestamp>-<label>-<table>.py``."""
    label = f"{descriptor.label}-{descriptor.table_name}"
    return f"{timestamp}-{label}.{MIGRATION_EXTENSION}"


def definition_literal(definition: ColumnDefinition) -> str:
    """Python literal of a column definition with a placeholder type."""
    payload = definition.to_payload()
    payload["type"] = f"{TYPE_NAMESPACE}.{payload['type']}"
    return repr(payload)


def _columns_literal(columns: TableSnapshot) -> str:
    items = ", ".join(
        f"{name!r}: {definition_literal(definition)}"
        for name, definition in columns.items()
    )
    return "{" + items + "}"


def render_operation(operation: SchemaOperation) -> str:
    """Render one schema-mutation call as an awaited statement."""
    table = repr(operation.table_name)
    column = repr(operation.column_name)

    if operation.kind == OperationKind.CREATE_TABLE:
        args = f"{table}, {_columns_literal(operation.columns or {})}"
    elif operation.kind == OperationKind.DROP_TABLE:
        args = table
    elif operation.kind == OperationKind.REMOVE_COLUMN:
        args = f"{table}, {column}"
    elif operation.kind in (OperationKind.ADD_COLUMN, OperationKind.CHANGE_COLUMN):
        args = f"{table}, {column}, {definition_literal(operation.definition)}"
    elif operation.kind == OperationKind.RENAME_COLUMN:
        args = (
            f"{table}, {column}, {operation.new_column_name!r}, "
            f"{definition_literal(operation.definition)}"
        )
    else:
        raise RenderError(f"Unsupported operation: {operation.kind}")

    return f"await schema.{operation.kind.value}({args})"


class MigrationRenderer:
    """Turn descriptors into formatted migration modules."""

    def __init__(self, line_length: int = 120) -> None:
        self.mode = black.Mode(line_length=line_length)

    def render_source(self, descriptor: MigrationDescriptor) -> str:
        """Render and format the module text of a descriptor.

        Raises:
            RenderError: If the generated text cannot be formatted
        """
        source = MIGRATION_TEMPLATE.format(
            label=descriptor.label,
            table_name=descriptor.table_name,
            up=self._body(descriptor.up),
            down=self._body(descriptor.down),
        )
        source = format_type_tokens(source)

        try:
            return black.format_str(source, mode=self.mode)
        except black.InvalidInput as e:
            raise RenderError(
                f"Failed to format {descriptor.label} migration for "
                f"{descriptor.table_name}: {e}"
            ) from e

    def render(
        self, descriptor: MigrationDescriptor, timestamp: str
    ) -> RenderedMigration:
        """Render a descriptor together with its file name."""
        filename = build_filename(descriptor, timestamp)
        source = self.render_source(descriptor)
        logger.debug(f"Rendered {filename}")
        return RenderedMigration(filename=filename, source=source)

    @staticmethod
    def _body(operations: list[SchemaOperation]) -> str:
        if not operations:
            return f"{INDENT}pass"
        return "\n".join(INDENT + render_operation(op) for op in operations)
