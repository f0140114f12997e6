"""Persisted schema snapshot backed by a JSON file."""

import json
import os
from pathlib import Path
from types import TracebackType

from pydantic import TypeAdapter, ValidationError

from automigrate.exceptions import PersistenceError
from automigrate.log import get_logger
from automigrate.models.columns import (
    Snapshot,
    TableSnapshot,
    copy_table,
    table_payload,
)

logger = get_logger(__name__)

_snapshot_adapter: TypeAdapter[Snapshot] = TypeAdapter(Snapshot)


class SnapshotStore:
    """Last-known schema of every table, loaded once per run.

    Table entries are only ever replaced as a whole, and ``flush`` rewrites the
    whole file, so the file on disk always holds complete table states.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._tables: Snapshot = {}
        self._dirty = False
        self._loaded = False

    @classmethod
    def open(cls, path: Path) -> "SnapshotStore":
        """Load the snapshot at ``path``, creating an empty one if absent.

        Raises:
            PersistenceError: If the snapshot cannot be read or created
        """
        store = cls(path)
        store.load()
        return store

    def load(self) -> None:
        """Read the snapshot file into memory."""
        try:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text("{}", encoding="utf-8")
                logger.info(f"Created empty snapshot: {self.path}")
                self._tables = {}
            else:
                self._tables = _snapshot_adapter.validate_json(
                    self.path.read_text(encoding="utf-8")
                )
        except OSError as e:
            raise PersistenceError(f"Cannot access snapshot {self.path}: {e}") from e
        except ValidationError as e:
            raise PersistenceError(f"Malformed snapshot {self.path}: {e}") from e

        self._dirty = False
        self._loaded = True
        logger.debug(f"Loaded snapshot with {len(self._tables)} tables")

    def __contains__(self, table_name: str) -> bool:
        return table_name in self._tables

    def table_names(self) -> list[str]:
        return list(self._tables)

    def get_table(self, table_name: str) -> TableSnapshot | None:
        """Independent copy of a table's columns, None for unknown tables."""
        columns = self._tables.get(table_name)
        return copy_table(columns) if columns is not None else None

    def replace_table(self, table_name: str, columns: TableSnapshot) -> None:
        """Swap in the complete new column state of one table."""
        self._tables[table_name] = copy_table(columns)
        self._dirty = True

    def snapshot(self) -> Snapshot:
        """Deep copy of every table."""
        return {name: copy_table(columns) for name, columns in self._tables.items()}

    def to_payload(self) -> dict[str, dict[str, dict]]:
        return {name: table_payload(columns) for name, columns in self._tables.items()}

    def flush(self) -> None:
        """Overwrite the snapshot file with the in-memory state.

        Raises:
            PersistenceError: If the file cannot be written
        """
        content = json.dumps(self.to_payload(), indent=2, ensure_ascii=False)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            tmp_path.write_text(content + "\n", encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceError(f"Cannot write snapshot {self.path}: {e}") from e

        self._dirty = False

    def close(self) -> None:
        """Flush pending table updates."""
        if self._loaded and self._dirty:
            self.flush()

    def __enter__(self) -> "SnapshotStore":
        if not self._loaded:
            self.load()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
