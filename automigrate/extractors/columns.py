"""Extract canonical column definitions from a model provider."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from automigrate.constants import (
    CREATED_AT_COLUMN,
    DELETED_AT_COLUMN,
    PRIMARY_KEY_COLUMN,
    PRIMARY_KEY_DEFINITION,
    RESERVED_COLUMNS,
    SOFT_DELETE_DEFINITION,
    TIMESTAMP_DEFINITION,
    UPDATED_AT_COLUMN,
    VIRTUAL_TYPE,
)
from automigrate.exceptions import ExtractionError
from automigrate.log import get_logger
from automigrate.models.columns import ColumnDefinition, TableSnapshot
from automigrate.models.provider import AttributeSpec, ModelProvider

logger = get_logger(__name__)


def extract_columns(model: ModelProvider) -> TableSnapshot:
    """Build the current column definitions of a model's table.

    Args:
        model: Provider exposing attribute metadata and table options

    Returns:
        Column name -> definition, implicit columns included

    Raises:
        ExtractionError: If the attribute metadata is malformed
    """
    try:
        raw_attributes = model.attributes()
    except ExtractionError:
        raise
    except Exception as e:
        raise ExtractionError(f"Could not read attributes of {model.name}: {e}") from e

    attributes = {
        name: _coerce_attribute(model.name, name, raw)
        for name, raw in raw_attributes.items()
    }

    columns: TableSnapshot = {}

    if PRIMARY_KEY_COLUMN in attributes:
        columns[PRIMARY_KEY_COLUMN] = ColumnDefinition(**PRIMARY_KEY_DEFINITION)

    for name, attribute in attributes.items():
        if name in RESERVED_COLUMNS:
            continue
        if attribute.type.upper() == VIRTUAL_TYPE:
            logger.debug(f"Skipping virtual attribute {model.name}.{name}")
            continue

        column_name = attribute.physical_name or name
        columns[column_name] = _build_definition(model.name, name, attribute)

    if model.options.timestamps:
        columns[CREATED_AT_COLUMN] = ColumnDefinition(**TIMESTAMP_DEFINITION)
        columns[UPDATED_AT_COLUMN] = ColumnDefinition(**TIMESTAMP_DEFINITION)

    if model.options.paranoid:
        columns[DELETED_AT_COLUMN] = ColumnDefinition(**SOFT_DELETE_DEFINITION)

    return columns


def _coerce_attribute(
    model_name: str, name: str, raw: AttributeSpec | Mapping[str, Any]
) -> AttributeSpec:
    """Validate one attribute's metadata into an independent AttributeSpec."""
    try:
        if isinstance(raw, AttributeSpec):
            return raw.model_copy(deep=True)
        return AttributeSpec.model_validate(dict(raw))
    except (ValidationError, TypeError, ValueError) as e:
        raise ExtractionError(
            f"Invalid metadata for attribute {model_name}.{name}: {e}"
        ) from e


def _build_definition(
    model_name: str, name: str, attribute: AttributeSpec
) -> ColumnDefinition:
    try:
        default_value = to_jsonable_python(attribute.default_value)
    except PydanticSerializationError as e:
        raise ExtractionError(
            f"Default value of {model_name}.{name} is not serializable: {e}"
        ) from e

    return ColumnDefinition(
        type=attribute.type,
        allow_null=False if attribute.allow_null is False else None,
        unique=attribute.unique,
        primary_key=attribute.primary_key,
        prev_column_name=attribute.prev_column_name,
        default_value=default_value,
    )
