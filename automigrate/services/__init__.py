"""Migration services package."""

from .migration_service import MigrationService, ModelReport, RunReport
from .writer import MigrationWriter

__all__ = [
    "MigrationService",
    "MigrationWriter",
    "ModelReport",
    "RunReport",
]
