"""Model provider contract consumed by the column extractor."""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field


class AttributeSpec(BaseModel):
    """Declared metadata of one model attribute."""

    type: str = Field(..., min_length=1, description="Declared type tag")
    allow_null: bool | None = None
    unique: bool | None = None
    primary_key: bool | None = None
    prev_column_name: str | None = None
    default_value: Any = None
    physical_name: str | None = Field(
        default=None, description="Column name when it differs from the attribute"
    )


class MigrationOptions(BaseModel):
    """Table-level options of a model."""

    table_name: str = Field(..., min_length=1)
    auto_migrations: bool = Field(
        default=False, description="Whether migrations are generated for the model"
    )
    timestamps: bool = Field(
        default=False, description="Add created_at/updated_at columns"
    )
    paranoid: bool = Field(default=False, description="Add a deleted_at column")


@runtime_checkable
class ModelProvider(Protocol):
    """Anything that can describe a model's attributes and table options."""

    name: str
    options: MigrationOptions

    def attributes(self) -> Mapping[str, AttributeSpec | Mapping[str, Any]]: ...


class DeclaredModel(BaseModel):
    """Model described directly by its attribute metadata."""

    name: str
    options: MigrationOptions
    declared: dict[str, AttributeSpec] = Field(default_factory=dict)

    def attributes(self) -> dict[str, AttributeSpec]:
        return dict(self.declared)
