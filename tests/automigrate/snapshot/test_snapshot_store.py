"""Tests for the JSON snapshot store."""

import json
from pathlib import Path

import pytest

from automigrate.exceptions import PersistenceError
from automigrate.models.columns import ColumnDefinition
from automigrate.snapshot.store import SnapshotStore

from tests.utils.test_helpers import TestDataFactory


def test_open_creates_empty_snapshot(tmp_path: Path) -> None:
    """Test a missing snapshot file is created with an empty mapping."""
    path = tmp_path / "database" / "migrations" / "meta.json"

    store = SnapshotStore.open(path)

    assert path.read_text(encoding="utf-8") == "{}"
    assert store.table_names() == []
    assert "users" not in store


def test_open_existing_snapshot(tmp_path: Path) -> None:
    """Test an existing snapshot is loaded into column definitions."""
    path = tmp_path / "meta.json"
    path.write_text(
        json.dumps(
            {"users": {"name": {"type": "STRING", "allow_null": False}}}
        ),
        encoding="utf-8",
    )

    store = SnapshotStore.open(path)

    assert "users" in store
    assert store.get_table("users") == {
        "name": ColumnDefinition(type="STRING", allow_null=False)
    }
    assert store.get_table("posts") is None


def test_malformed_snapshot_raises(tmp_path: Path) -> None:
    """Test invalid JSON is reported as PersistenceError."""
    path = tmp_path / "meta.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(PersistenceError, match="Malformed snapshot"):
        SnapshotStore.open(path)


def test_snapshot_with_unknown_keys_raises(tmp_path: Path) -> None:
    """Test column entries must match the definition schema."""
    path = tmp_path / "meta.json"
    path.write_text(
        json.dumps({"users": {"name": {"type": "STRING", "colour": "red"}}}),
        encoding="utf-8",
    )

    with pytest.raises(PersistenceError):
        SnapshotStore.open(path)


def test_get_table_returns_copy(snapshot_store: SnapshotStore) -> None:
    """Test callers cannot mutate the stored state through a returned table."""
    snapshot_store.replace_table(
        "users", TestDataFactory.create_table(name={"type": "STRING"})
    )

    table = snapshot_store.get_table("users")
    table["name"].unique = True
    table["age"] = ColumnDefinition(type="INTEGER")

    assert snapshot_store.to_payload() == {"users": {"name": {"type": "STRING"}}}


def test_flush_round_trip(snapshot_store: SnapshotStore) -> None:
    """Test flushed tables are read back identically."""
    columns = TestDataFactory.create_table(
        id={
            "type": "INTEGER",
            "allow_null": False,
            "auto_increment": True,
            "primary_key": True,
        },
        active={"type": "BOOLEAN", "default_value": False},
    )
    snapshot_store.replace_table("users", columns)

    snapshot_store.flush()
    reopened = SnapshotStore.open(snapshot_store.path)

    assert reopened.snapshot() == {"users": columns}
    assert snapshot_store.path.read_text(encoding="utf-8").endswith("}\n")
    assert not snapshot_store.path.with_name("meta.json.tmp").exists()


def test_rename_hint_is_not_persisted(snapshot_store: SnapshotStore) -> None:
    """Test the previous-name hint never reaches the file."""
    snapshot_store.replace_table(
        "users",
        TestDataFactory.create_table(
            mail={"type": "STRING", "prev_column_name": "email"}
        ),
    )

    snapshot_store.flush()

    data = json.loads(snapshot_store.path.read_text(encoding="utf-8"))
    assert data == {"users": {"mail": {"type": "STRING"}}}


def test_context_manager_flushes_on_exit(migrations_dir: Path) -> None:
    """Test pending updates are written when the block exits cleanly."""
    path = migrations_dir / "meta.json"

    with SnapshotStore(path) as store:
        store.replace_table(
            "posts", TestDataFactory.create_table(title={"type": "STRING"})
        )

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"posts": {"title": {"type": "STRING"}}}


def test_context_manager_skips_flush_on_error(migrations_dir: Path) -> None:
    """Test an exception inside the block leaves the file untouched."""
    path = migrations_dir / "meta.json"

    with pytest.raises(RuntimeError):
        with SnapshotStore(path) as store:
            store.replace_table(
                "posts", TestDataFactory.create_table(title={"type": "STRING"})
            )
            raise RuntimeError("boom")

    assert path.read_text(encoding="utf-8") == "{}"


def test_unwritable_location_raises(tmp_path: Path) -> None:
    """Test a snapshot path below a regular file cannot be created."""
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(PersistenceError, match="Cannot access snapshot"):
        SnapshotStore.open(blocker / "meta.json")
