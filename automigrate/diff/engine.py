"""Diff engine comparing model columns against the schema snapshot.

The engine never mutates its inputs while classifying. It computes a
``DiffResult`` from a frozen copy of the snapshot entry; callers commit the
result to the snapshot afterwards, either all at once (``diff``) or one
descriptor at a time (the migration service).
"""

from automigrate.constants import CHANGE_LABELS, INITIAL_LABEL
from automigrate.exceptions import NoStructuralChange
from automigrate.log import get_logger
from automigrate.models.columns import (
    Snapshot,
    TableSnapshot,
    copy_table,
    tables_equal,
)
from automigrate.models.descriptors import (
    ColumnChanges,
    DiffResult,
    MigrationDescriptor,
    SchemaOperation,
)
from automigrate.types import ChangeKind

logger = get_logger(__name__)


def classify_columns(current: TableSnapshot, prior: TableSnapshot) -> ColumnChanges:
    """Sort every column into the new/change/rename/remove buckets.

    Args:
        current: Columns computed from the model, in declaration order
        prior: Columns recorded by the last run

    Returns:
        Disjoint column classification
    """
    changes = ColumnChanges()
    # Prior names claimed by a current column, directly or through a rename
    consumed: set[str] = set()

    for name, definition in current.items():
        if name in prior:
            consumed.add(name)
            if not prior[name].same_shape(definition):
                changes.change.append(name)
            continue

        previous = definition.prev_column_name
        if (
            previous
            and previous != name
            and previous in prior
            and previous not in current
            and previous not in consumed
        ):
            consumed.add(previous)
            changes.rename[name] = previous
        else:
            changes.new.append(name)

    changes.remove = [name for name in prior if name not in consumed]
    return changes


def compute_diff(
    table_name: str, current: TableSnapshot, prior: TableSnapshot | None
) -> DiffResult:
    """Diff one table without touching the snapshot.

    Args:
        table_name: Physical table name
        current: Columns computed from the model
        prior: Snapshot entry of the table, None if the table is new

    Returns:
        Classification and ordered migration descriptors

    Raises:
        NoStructuralChange: If the snapshot already matches the model
    """
    current = copy_table(current)

    if prior is None:
        descriptor = MigrationDescriptor(
            label=INITIAL_LABEL,
            table_name=table_name,
            up=[SchemaOperation.create_table(table_name, current)],
            down=[SchemaOperation.drop_table(table_name)],
        )
        return DiffResult(
            table_name=table_name, current=current, descriptors=[descriptor]
        )

    frozen_prior = copy_table(prior)
    if tables_equal(frozen_prior, current):
        raise NoStructuralChange(table_name)

    changes = classify_columns(current, frozen_prior)
    logger.debug(
        f"{table_name}: new={changes.new} change={changes.change} "
        f"rename={changes.rename} remove={changes.remove}"
    )

    return DiffResult(
        table_name=table_name,
        frozen_prior=frozen_prior,
        current=current,
        changes=changes,
        descriptors=build_descriptors(table_name, changes, frozen_prior, current),
    )


def build_descriptors(
    table_name: str,
    changes: ColumnChanges,
    frozen_prior: TableSnapshot,
    current: TableSnapshot,
) -> list[MigrationDescriptor]:
    """Turn a classification into descriptors, one per non-empty bucket.

    Down operations always use the frozen prior definitions.
    """
    descriptors: list[MigrationDescriptor] = []

    if changes.new:
        descriptors.append(
            MigrationDescriptor(
                label=_label(ChangeKind.NEW, len(changes.new)),
                table_name=table_name,
                up=[
                    SchemaOperation.add_column(table_name, name, current[name])
                    for name in changes.new
                ],
                down=[
                    SchemaOperation.remove_column(table_name, name)
                    for name in changes.new
                ],
            )
        )

    if changes.change:
        descriptors.append(
            MigrationDescriptor(
                label=_label(ChangeKind.CHANGE, len(changes.change)),
                table_name=table_name,
                up=[
                    SchemaOperation.change_column(table_name, name, current[name])
                    for name in changes.change
                ],
                down=[
                    SchemaOperation.change_column(table_name, name, frozen_prior[name])
                    for name in changes.change
                ],
            )
        )

    if changes.rename:
        descriptors.append(
            MigrationDescriptor(
                label=_label(ChangeKind.RENAME, len(changes.rename)),
                table_name=table_name,
                up=[
                    SchemaOperation.rename_column(table_name, old, new, current[new])
                    for new, old in changes.rename.items()
                ],
                down=[
                    SchemaOperation.rename_column(
                        table_name, new, old, frozen_prior[old]
                    )
                    for new, old in changes.rename.items()
                ],
            )
        )

    if changes.remove:
        descriptors.append(
            MigrationDescriptor(
                label=_label(ChangeKind.REMOVE, len(changes.remove)),
                table_name=table_name,
                up=[
                    SchemaOperation.remove_column(table_name, name)
                    for name in changes.remove
                ],
                down=[
                    SchemaOperation.add_column(table_name, name, frozen_prior[name])
                    for name in changes.remove
                ],
            )
        )

    return descriptors


def diff(
    table_name: str, current_columns: TableSnapshot, snapshot: Snapshot
) -> list[MigrationDescriptor]:
    """Diff a table and commit the new column state to ``snapshot``.

    Args:
        table_name: Physical table name
        current_columns: Columns computed from the model
        snapshot: In-memory snapshot, updated for ``table_name``

    Returns:
        Ordered migration descriptors

    Raises:
        NoStructuralChange: If the snapshot already matches the model
    """
    result = compute_diff(table_name, current_columns, snapshot.get(table_name))
    snapshot[table_name] = result.final_columns()
    return result.descriptors


def _label(kind: ChangeKind, count: int) -> str:
    singular, plural = CHANGE_LABELS[kind]
    return plural if count > 1 else singular
