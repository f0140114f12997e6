"""Command line entry point: generate migrations for a models module."""

import argparse
import logging
import sys
from pathlib import Path

from automigrate.config import Settings, settings
from automigrate.exceptions import PersistenceError
from automigrate.extractors.sqlmodel_provider import discover_models
from automigrate.log import get_logger, setup_logging
from automigrate.render.renderer import MigrationRenderer
from automigrate.services.migration_service import MigrationService
from automigrate.services.writer import MigrationWriter
from automigrate.snapshot.store import SnapshotStore

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="automigrate",
        description="Generate reversible migrations from SQLModel declarations",
    )
    parser.add_argument(
        "--models",
        default=None,
        help=f"Module containing the models (default: {settings.models_module})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help=f"Migrations directory (default: {settings.migrations_dir})",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.log_level})",
    )
    return parser


def resolve_settings(args: argparse.Namespace, base: Settings = settings) -> Settings:
    """Apply command line overrides on top of the environment settings."""
    overrides = {
        "models_module": args.models,
        "migrations_dir": args.output,
        "log_level": args.log_level,
    }
    return base.model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )


def main(argv: list[str] | None = None) -> int:
    """Run one migration generation pass.

    Returns:
        Process exit code; 1 only when the run could not start
    """
    args = build_parser().parse_args(argv)
    config = resolve_settings(args)

    setup_logging(
        level=getattr(logging, config.log_level, logging.INFO),
        enable_file_logging=config.log_to_file,
    )

    # Models modules are usually addressed relative to the project root
    if str(Path.cwd()) not in sys.path:
        sys.path.insert(0, str(Path.cwd()))

    try:
        models = discover_models(config.models_module)
    except ImportError as e:
        logger.critical(f"Cannot import models module {config.models_module}: {e}")
        return 1

    try:
        store = SnapshotStore.open(config.snapshot_path)
    except PersistenceError as e:
        logger.critical(str(e))
        return 1

    service = MigrationService(
        renderer=MigrationRenderer(line_length=config.line_length),
        writer=MigrationWriter(config.migrations_dir),
    )
    with store:
        service.run(models, store)

    return 0


if __name__ == "__main__":
    sys.exit(main())
