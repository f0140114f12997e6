"""Write rendered migrations to the migrations directory."""

from pathlib import Path

from automigrate.exceptions import PersistenceError
from automigrate.log import get_logger
from automigrate.render.renderer import RenderedMigration

logger = get_logger(__name__)


class MigrationWriter:
    """Persist migration modules as files."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def write(self, migration: RenderedMigration) -> Path:
        """Write one migration file.

        Args:
            migration: Rendered migration

        Returns:
            Path of the written file

        Raises:
            PersistenceError: If the file cannot be written
        """
        path = self.output_dir / migration.filename
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(migration.source, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot write migration {path}: {e}") from e

        logger.debug(f"Wrote {len(migration.source)} bytes to {path}")
        return path
