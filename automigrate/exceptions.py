"""Exceptions for migration generation."""


class MigrationError(Exception):
    """Base exception for migration generation errors."""

    pass


class NoStructuralChange(MigrationError):
    """Raised when a model's columns exactly match the snapshot."""

    def __init__(self, table_name: str) -> None:
        super().__init__(f"No structural change in table '{table_name}'")
        self.table_name = table_name


class ExtractionError(MigrationError):
    """Raised when model attribute metadata is malformed or unresolvable."""

    pass


class PersistenceError(MigrationError):
    """Raised when the snapshot or a migration file cannot be read or written."""

    pass


class RenderError(MigrationError):
    """Raised when generated migration source fails formatting."""

    pass
