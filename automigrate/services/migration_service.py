"""Service generating migrations for every auto-migrated model."""

from collections.abc import Callable, Mapping
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from automigrate.constants import INTERNAL_MODEL_NAMES
from automigrate.diff.engine import compute_diff
from automigrate.exceptions import MigrationError, NoStructuralChange
from automigrate.extractors.columns import extract_columns
from automigrate.log import get_logger
from automigrate.models.columns import copy_table
from automigrate.models.provider import ModelProvider
from automigrate.render.renderer import MigrationRenderer
from automigrate.services.writer import MigrationWriter
from automigrate.snapshot.store import SnapshotStore
from automigrate.types import ModelStatus
from automigrate.utils import migration_timestamp

logger = get_logger(__name__)


class ModelReport(BaseModel):
    """Outcome of one model in a migration run."""

    model_config = ConfigDict(protected_namespaces=())

    model_name: str
    table_name: str | None = None
    status: ModelStatus
    files: list[str] = Field(default_factory=list)
    message: str | None = None


class RunReport(BaseModel):
    """Outcome of a whole migration run."""

    models: list[ModelReport] = Field(default_factory=list)

    def with_status(self, status: ModelStatus) -> list[ModelReport]:
        return [report for report in self.models if report.status == status]

    @property
    def files(self) -> list[str]:
        return [name for report in self.models for name in report.files]

    @property
    def has_errors(self) -> bool:
        return bool(self.with_status(ModelStatus.ERROR))


class MigrationService:
    """Extract, diff, render and write migrations model by model."""

    def __init__(
        self,
        renderer: MigrationRenderer,
        writer: MigrationWriter,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize migration service."""
        self.renderer = renderer
        self.writer = writer
        self.clock = clock

    def run(
        self, models: Mapping[str, ModelProvider], store: SnapshotStore
    ) -> RunReport:
        """Generate migrations for every model flagged for auto migrations.

        Models are processed in the mapping's order; a failing model is
        reported and the run moves on.

        Args:
            models: Model name -> provider
            store: Open snapshot store, flushed after every written file

        Returns:
            Per-model report
        """
        report = RunReport()

        for model_name, model in models.items():
            if model_name in INTERNAL_MODEL_NAMES:
                continue
            model_report = self.process_model(model_name, model, store)
            if model_report is not None:
                report.models.append(model_report)

        logger.info(
            f"Migration run finished: "
            f"{len(report.with_status(ModelStatus.CREATED))} updated, "
            f"{len(report.with_status(ModelStatus.NO_CHANGE))} unchanged, "
            f"{len(report.with_status(ModelStatus.ERROR))} failed"
        )
        return report

    def process_model(
        self, model_name: str, model: ModelProvider, store: SnapshotStore
    ) -> ModelReport | None:
        """Generate the migrations of one model.

        Returns:
            Report for the model, None if it does not use auto migrations
        """
        table_name: str | None = None
        files: list[str] = []

        try:
            if not model.options.auto_migrations:
                logger.debug(f"Skipping {model_name}: auto migrations disabled")
                return None

            table_name = model.options.table_name
            columns = extract_columns(model)
            result = compute_diff(table_name, columns, store.get_table(table_name))

            # Render everything first so a formatting error writes nothing
            timestamp = migration_timestamp(self.clock())
            rendered = [
                self.renderer.render(descriptor, timestamp)
                for descriptor in result.descriptors
            ]

            state = copy_table(result.frozen_prior or {})
            for descriptor, migration in zip(result.descriptors, rendered):
                path = self.writer.write(migration)
                files.append(path.name)
                logger.info(f"Migration created: {migration.filename}")

                state = descriptor.apply(state)
                store.replace_table(table_name, state)
                store.flush()

            return ModelReport(
                model_name=model_name,
                table_name=table_name,
                status=ModelStatus.CREATED,
                files=files,
            )

        except NoStructuralChange as e:
            logger.info(f"Model {model_name}: no changes")
            return ModelReport(
                model_name=model_name,
                table_name=table_name,
                status=ModelStatus.NO_CHANGE,
                message=str(e),
            )
        except MigrationError as e:
            logger.error(f"Model {model_name}: {e}")
            return self._error_report(model_name, table_name, files, e)
        except Exception as e:
            logger.exception(f"Model {model_name}: unexpected error")
            return self._error_report(model_name, table_name, files, e)

    @staticmethod
    def _error_report(
        model_name: str, table_name: str | None, files: list[str], error: Exception
    ) -> ModelReport:
        return ModelReport(
            model_name=model_name,
            table_name=table_name,
            status=ModelStatus.ERROR,
            files=files,
            message=str(error),
        )
