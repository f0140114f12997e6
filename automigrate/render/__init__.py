"""Migration source rendering."""

from automigrate.render.renderer import (
    MigrationRenderer,
    RenderedMigration,
    build_filename,
    definition_literal,
    format_type_tokens,
    render_operation,
)

__all__ = [
    "MigrationRenderer",
    "RenderedMigration",
    "build_filename",
    "definition_literal",
    "format_type_tokens",
    "render_operation",
]
