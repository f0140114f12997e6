"""Reversible migration generation from declarative models."""

from .config import Settings, settings
from .diff import compute_diff
from .exceptions import (
    ExtractionError,
    MigrationError,
    NoStructuralChange,
    PersistenceError,
    RenderError,
)
from .extractors import (
    SQLModelProvider,
    discover_models,
    extract_columns,
    renamed_from,
)
from .log import get_logger, setup_logging, setup_test_logging
from .render import MigrationRenderer
from .services import MigrationService, MigrationWriter, RunReport
from .snapshot import SnapshotStore
from .types import Environment

__all__ = [
    "Environment",
    "Settings",
    "settings",
    "get_logger",
    "setup_logging",
    "setup_test_logging",
    # Errors
    "MigrationError",
    "NoStructuralChange",
    "ExtractionError",
    "PersistenceError",
    "RenderError",
    # Pipeline
    "SQLModelProvider",
    "discover_models",
    "extract_columns",
    "renamed_from",
    "compute_diff",
    "MigrationRenderer",
    "MigrationWriter",
    "MigrationService",
    "RunReport",
    "SnapshotStore",
]
