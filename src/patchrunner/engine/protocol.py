"""Read, apply, write, report: the round trip shared by the edit tools.

Nothing is written unless every operation succeeded. A failed write after a
successful apply is reported separately (E_NOT_PERSISTED) because the computed
content and the stored resource now disagree.

The round trip holds no lock. A resource changed by someone else between the
read and the write is overwritten; callers that share resources must serialize
their edits.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from patchrunner.core.exceptions import (
    EditValidationError,
    PatchRunnerException,
    ResourceError,
    format_error_for_log,
)
from patchrunner.core.logger import PatchRunnerLogger
from patchrunner.core.resources import ResourceStore
from patchrunner.engine.apply import PatchResult, apply_edits
from patchrunner.engine.operations import EditOperation
from patchrunner.engine.report import ChangeReport, summarize
from patchrunner.engine.validator import validate_operations


@dataclass(frozen=True)
class EditOutcome:
    """Everything a caller needs to report an edit."""

    resource_id: str
    operations: tuple[EditOperation, ...]
    patch: PatchResult | None = None
    report: ChangeReport | None = None
    error: PatchRunnerException | None = None
    original_content: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def persisted(self) -> bool:
        return self.success

    @property
    def final_content(self) -> str | None:
        return self.patch.final_content if self.patch else None


def run_edit(
    store: ResourceStore,
    resource_id: str,
    operations: Sequence[EditOperation],
    logger: PatchRunnerLogger | None = None,
    dry_run: bool = False,
) -> EditOutcome:
    """Apply ``operations`` to a stored resource atomically.

    Args:
        store: Where the resource is read from and written to
        resource_id: Resource address (a workspace path for file stores)
        operations: Ordered edit operations
        logger: Optional structured logger
        dry_run: Compute the result and report without writing

    Returns:
        EditOutcome; ``error`` is set on any failure
    """
    ops = tuple(operations)

    def failed(
        error: PatchRunnerException,
        patch: PatchResult | None = None,
        report: ChangeReport | None = None,
        original: str | None = None,
    ) -> EditOutcome:
        if logger:
            logger.warn("Edit failed", resource_id=resource_id, error=format_error_for_log(error))
        return EditOutcome(
            resource_id=resource_id,
            operations=ops,
            patch=patch,
            report=report,
            error=error,
            original_content=original,
        )

    try:
        validate_operations(ops)
    except EditValidationError as e:
        return failed(e)

    read = store.read_text(resource_id)
    if not read.success or read.data is None:
        return failed(
            ResourceError(
                read.error or "Failed to read resource",
                resource_id=resource_id,
                stage="read",
            )
        )

    original = read.data
    patch = apply_edits(original, ops)
    if patch.error is not None or patch.final_content is None:
        return failed(
            patch.error or PatchRunnerException("Edit produced no content"),
            patch=patch,
            original=original,
        )

    report = summarize(original, patch.final_content, patch.replacement_counts)

    if not dry_run:
        write = store.write_text(resource_id, patch.final_content)
        if not write.success:
            return failed(
                ResourceError(
                    write.error or "Failed to write resource",
                    resource_id=resource_id,
                    stage="write",
                ),
                patch=patch,
                report=report,
                original=original,
            )

    if logger:
        logger.info(
            "Edit applied",
            resource_id=resource_id,
            edit_count=len(ops),
            total_replacements=report.total_replacements,
            dry_run=dry_run,
        )

    return EditOutcome(
        resource_id=resource_id,
        operations=ops,
        patch=patch,
        report=report,
        original_content=original,
    )
