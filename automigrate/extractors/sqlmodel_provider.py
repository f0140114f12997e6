"""Model provider backed by SQLModel table classes."""

import importlib
from functools import cached_property
from types import ModuleType
from typing import Any

from pydantic import ValidationError
from sqlalchemy import Column, Table
from sqlalchemy.types import TypeDecorator, TypeEngine
from sqlmodel import SQLModel

from automigrate.constants import INTERNAL_MODEL_NAMES, VIRTUAL_TYPE
from automigrate.exceptions import ExtractionError
from automigrate.log import get_logger
from automigrate.models.provider import AttributeSpec, MigrationOptions

logger = get_logger(__name__)

# Key in Column.info holding the column's previous name
PREV_COLUMN_INFO_KEY = "prev_column_name"

# Class attribute holding a model's MigrationOptions (or a mapping of them)
OPTIONS_ATTRIBUTE = "__migration_options__"


def renamed_from(previous_name: str) -> dict[str, Any]:
    """Build ``sa_column_kwargs`` marking a column as renamed.

    Example:
        mail: str = Field(sa_column_kwargs=renamed_from("email"))
    """
    return {"info": {PREV_COLUMN_INFO_KEY: previous_name}}


def column_type_tag(sa_type: TypeEngine[Any]) -> str:
    """Canonical type tag of a SQLAlchemy column type (e.g. ``STRING``)."""
    if isinstance(sa_type, TypeDecorator):
        sa_type = sa_type.impl_instance
    return str(sa_type.__visit_name__).upper()


class SQLModelProvider:
    """Expose a SQLModel table class through the model provider contract."""

    def __init__(self, model: type[SQLModel]) -> None:
        table = getattr(model, "__table__", None)
        if not isinstance(table, Table):
            raise ExtractionError(f"{model.__name__} is not a SQLModel table class")
        self.model = model
        self.table = table
        self.name = model.__name__

    @cached_property
    def options(self) -> MigrationOptions:
        raw = getattr(self.model, OPTIONS_ATTRIBUTE, None)
        if isinstance(raw, MigrationOptions):
            return raw.model_copy()

        try:
            values = {"table_name": self.table.name, **dict(raw or {})}
            return MigrationOptions.model_validate(values)
        except (ValidationError, TypeError, ValueError) as e:
            raise ExtractionError(
                f"Invalid migration options on {self.name}: {e}"
            ) from e

    def attributes(self) -> dict[str, AttributeSpec]:
        attributes: dict[str, AttributeSpec] = {}

        for column in self.table.columns:
            attributes[column.key] = AttributeSpec(
                type=column_type_tag(column.type),
                allow_null=False if column.nullable is False else None,
                unique=True if column.unique else None,
                primary_key=True if column.primary_key else None,
                prev_column_name=column.info.get(PREV_COLUMN_INFO_KEY),
                default_value=_scalar_default(column),
                physical_name=column.name,
            )

        # Computed fields live only on the Python side
        for name in self.model.model_computed_fields:
            attributes.setdefault(name, AttributeSpec(type=VIRTUAL_TYPE))

        return attributes

    def __repr__(self) -> str:
        return f"SQLModelProvider({self.name})"


def _scalar_default(column: Column[Any]) -> Any:
    default = column.default
    if default is None or not getattr(default, "is_scalar", False):
        return None
    return default.arg


def discover_models(module: ModuleType | str) -> dict[str, SQLModelProvider]:
    """Collect the SQLModel table classes reachable from a module.

    Args:
        module: Module object or dotted module name

    Returns:
        Class name -> provider, in the module's definition order
    """
    if isinstance(module, str):
        module = importlib.import_module(module)

    models: dict[str, SQLModelProvider] = {}
    for name, obj in vars(module).items():
        if name in INTERNAL_MODEL_NAMES or obj is SQLModel:
            continue
        if not (isinstance(obj, type) and issubclass(obj, SQLModel)):
            continue
        if not isinstance(getattr(obj, "__table__", None), Table):
            continue
        models[name] = SQLModelProvider(obj)

    logger.debug(f"Discovered {len(models)} models in {module.__name__}")
    return models
