"""Test helper utilities for automigrate tests."""

from typing import Any

from automigrate.models.columns import ColumnDefinition, TableSnapshot
from automigrate.models.provider import AttributeSpec, DeclaredModel, MigrationOptions


class TestDataFactory:
    """Factory class for creating test data objects."""

    __test__ = False

    @staticmethod
    def create_model(
        name: str = "User",
        table_name: str = "users",
        attributes: dict[str, dict[str, Any]] | None = None,
        auto_migrations: bool = True,
        timestamps: bool = False,
        paranoid: bool = False,
    ) -> DeclaredModel:
        """Create a DeclaredModel from plain attribute dicts."""
        return DeclaredModel(
            name=name,
            options=MigrationOptions(
                table_name=table_name,
                auto_migrations=auto_migrations,
                timestamps=timestamps,
                paranoid=paranoid,
            ),
            declared={
                key: AttributeSpec(**spec) for key, spec in (attributes or {}).items()
            },
        )

    @staticmethod
    def create_table(**columns: dict[str, Any]) -> TableSnapshot:
        """Create a table snapshot, e.g. create_table(name={"type": "STRING"})."""
        return {name: ColumnDefinition(**spec) for name, spec in columns.items()}
