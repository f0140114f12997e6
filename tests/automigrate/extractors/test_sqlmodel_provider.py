"""Tests for the SQLModel model provider."""

from datetime import datetime
from types import ModuleType

import pytest
from sqlalchemy import Integer, String
from sqlmodel import Field, SQLModel
from sqlmodel.sql.sqltypes import AutoString

from automigrate.exceptions import ExtractionError
from automigrate.extractors.columns import extract_columns
from automigrate.extractors.sqlmodel_provider import (
    SQLModelProvider,
    column_type_tag,
    discover_models,
    renamed_from,
)
from automigrate.models.columns import table_payload
from automigrate.models.provider import MigrationOptions


class ProviderAccount(SQLModel, table=True):
    """Account table used by the provider tests."""

    __tablename__ = "provider_accounts"
    __migration_options__ = {"auto_migrations": True, "timestamps": True}

    id: int | None = Field(default=None, primary_key=True)
    mail: str = Field(unique=True, sa_column_kwargs=renamed_from("email"))
    nickname: str | None = Field(default=None)
    score: int = Field(default=0)
    active: bool = Field(default=True)
    last_seen: datetime | None = None
    created_at: datetime | None = None


class ProviderNote(SQLModel, table=True):
    """Table without migration options."""

    __tablename__ = "provider_notes"

    note_id: int | None = Field(default=None, primary_key=True)
    body: str


class ProviderBase(SQLModel):
    """Non-table model that must never be discovered."""

    title: str


class ProviderBadOptions(SQLModel, table=True):
    """Table with malformed options."""

    __tablename__ = "provider_bad_options"
    __migration_options__ = {"auto_migrations": "sometimes"}

    id: int | None = Field(default=None, primary_key=True)


def test_column_type_tag() -> None:
    """Test SQLAlchemy types map to upper-case tags."""
    assert column_type_tag(Integer()) == "INTEGER"
    assert column_type_tag(String(50)) == "STRING"
    assert column_type_tag(AutoString()) == "STRING"


def test_renamed_from() -> None:
    """Test the hint lands in the column info."""
    assert renamed_from("email") == {"info": {"prev_column_name": "email"}}


def test_attributes_follow_table_columns() -> None:
    """Test attribute metadata is read from the SQLAlchemy table."""
    attributes = SQLModelProvider(ProviderAccount).attributes()

    assert list(attributes)[:3] == ["id", "mail", "nickname"]
    assert attributes["id"].primary_key is True
    assert attributes["mail"].type == "STRING"
    assert attributes["mail"].unique is True
    assert attributes["mail"].allow_null is False
    assert attributes["mail"].prev_column_name == "email"
    assert attributes["nickname"].allow_null is None
    assert attributes["score"].default_value == 0
    assert attributes["active"].type == "BOOLEAN"
    assert attributes["last_seen"].type == "DATETIME"


def test_options_from_class_attribute() -> None:
    """Test options mapping is merged with the table name."""
    options = SQLModelProvider(ProviderAccount).options

    assert options == MigrationOptions(
        table_name="provider_accounts", auto_migrations=True, timestamps=True
    )


def test_options_default_to_disabled() -> None:
    """Test models without options are not auto-migrated."""
    options = SQLModelProvider(ProviderNote).options

    assert options.table_name == "provider_notes"
    assert options.auto_migrations is False


def test_malformed_options_raise_extraction_error() -> None:
    """Test invalid options surface as ExtractionError."""
    provider = SQLModelProvider(ProviderBadOptions)

    with pytest.raises(ExtractionError, match="ProviderBadOptions"):
        provider.options


def test_non_table_model_is_rejected() -> None:
    """Test plain SQLModel classes cannot be providers."""
    with pytest.raises(ExtractionError):
        SQLModelProvider(ProviderBase)


def test_extract_columns_from_sqlmodel() -> None:
    """Test the full extraction of a SQLModel table."""
    columns = extract_columns(SQLModelProvider(ProviderAccount))

    assert list(columns) == [
        "id",
        "mail",
        "nickname",
        "score",
        "active",
        "last_seen",
        "created_at",
        "updated_at",
    ]
    payload = table_payload(columns)
    assert payload["id"]["auto_increment"] is True
    assert payload["mail"] == {"type": "STRING", "allow_null": False, "unique": True}
    assert payload["score"] == {
        "type": "INTEGER",
        "allow_null": False,
        "default_value": 0,
    }
    assert payload["created_at"] == {"type": "DATETIME", "allow_null": False}
    assert columns["mail"].prev_column_name == "email"


def test_discover_models() -> None:
    """Test only table classes are discovered, in definition order."""
    module = ModuleType("provider_models")
    module.SQLModel = SQLModel
    module.ProviderBase = ProviderBase
    module.ProviderAccount = ProviderAccount
    module.ProviderNote = ProviderNote
    module.helper = lambda: None

    models = discover_models(module)

    assert list(models) == ["ProviderAccount", "ProviderNote"]
    assert models["ProviderAccount"].model is ProviderAccount
