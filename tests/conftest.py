"""Global pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from automigrate import setup_test_logging
from automigrate.render.renderer import MigrationRenderer
from automigrate.services.migration_service import MigrationService
from automigrate.services.writer import MigrationWriter
from automigrate.snapshot.store import SnapshotStore


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture
def migrations_dir(tmp_path: Path) -> Path:
    """Directory receiving migration files and the snapshot."""
    return tmp_path / "database" / "migrations"


@pytest.fixture
def snapshot_store(migrations_dir: Path) -> SnapshotStore:
    """Open an empty snapshot store."""
    return SnapshotStore.open(migrations_dir / "meta.json")


@pytest.fixture
def renderer() -> MigrationRenderer:
    """Create MigrationRenderer instance."""
    return MigrationRenderer(line_length=120)


@pytest.fixture
def writer(migrations_dir: Path) -> MigrationWriter:
    """Create MigrationWriter instance."""
    return MigrationWriter(migrations_dir)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock frozen at 2024-05-01 12:30:45."""
    return lambda: datetime(2024, 5, 1, 12, 30, 45)


@pytest.fixture
def migration_service(
    renderer: MigrationRenderer,
    writer: MigrationWriter,
    fixed_clock: Callable[[], datetime],
) -> MigrationService:
    """Create MigrationService instance with a frozen clock."""
    return MigrationService(renderer=renderer, writer=writer, clock=fixed_clock)
