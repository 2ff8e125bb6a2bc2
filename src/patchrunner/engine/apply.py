"""Sequential, all-or-nothing application of edit operations.

Operations run in list order and each one matches against the output of the
previous one, never the original. The first failing operation ends the run:
the result carries the failure and no content, so a caller that follows the
result can never persist a partially edited buffer.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from patchrunner.core.exceptions import (
    AmbiguousMatchError,
    EditValidationError,
    MatchNotFoundError,
    PatchRunnerException,
)
from patchrunner.engine.matcher import locate_unique, replace_every, replace_span
from patchrunner.engine.operations import EditOperation
from patchrunner.engine.validator import validate_operations


@dataclass(frozen=True)
class PatchResult:
    """Outcome of applying an operation list.

    On success ``final_content`` holds the edited text and
    ``replacement_counts`` one entry per operation. On failure ``error`` names
    the failing operation and both other fields are empty.
    """

    final_content: str | None = None
    replacement_counts: tuple[int, ...] = ()
    error: PatchRunnerException | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def failed_index(self) -> int | None:
        return getattr(self.error, "index", None)

    @property
    def total_replacements(self) -> int:
        return sum(self.replacement_counts)

    @classmethod
    def failure(cls, error: PatchRunnerException) -> "PatchResult":
        return cls(error=error)

    def unwrap(self) -> str:
        """Return the final content, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        if self.final_content is None:
            raise PatchRunnerException("Patch result holds no content")
        return self.final_content


def _missing_replacement(index: int) -> EditValidationError:
    return EditValidationError(
        f"Edit {index + 1}: new_string is required (can be empty string to delete)",
        index=index,
        reason="missing_new_string",
    )


def _not_found(index: int) -> MatchNotFoundError:
    return MatchNotFoundError(
        f"Edit {index + 1}: Could not find old_string in file. "
        "Note: Earlier edits may have changed the file content. "
        "Make sure old_string matches exactly (including whitespace/indentation) "
        "and reflects the state after previous edits.",
        index=index,
    )


def _ambiguous(index: int, count: int) -> AmbiguousMatchError:
    return AmbiguousMatchError(
        f"Edit {index + 1}: Found {count} occurrences of old_string. "
        "Either provide more surrounding context to make it unique "
        "or use replace_all: true",
        index=index,
        count=count,
    )


def apply_operation(
    content: str, operation: EditOperation, index: int = 0
) -> tuple[str | None, int, PatchRunnerException | None]:
    """Apply one validated operation to ``content``.

    Returns:
        Tuple of (new_content, replacement_count, error); new_content is None on error
    """
    replacement = operation.new_string
    if replacement is None:
        return None, 0, _missing_replacement(index)

    if operation.replace_all:
        new_content, count = replace_every(content, operation.old_string, replacement)
        if count == 0:
            return None, 0, _not_found(index)
        return new_content, count, None

    outcome = locate_unique(content, operation.old_string)
    if outcome.count == 0:
        return None, 0, _not_found(index)
    if outcome.span is None:
        return None, 0, _ambiguous(index, outcome.count)

    return replace_span(content, outcome.span, replacement), 1, None


def apply_edits(initial_content: str, operations: Sequence[EditOperation]) -> PatchResult:
    """Fold an operation list over ``initial_content`` as one transaction.

    The list is validated first; a malformed operation fails the whole call
    before any matching happens.

    Args:
        initial_content: Text of the resource as read
        operations: Ordered edit operations

    Returns:
        PatchResult with the final content, or the first failure
    """
    try:
        validated = validate_operations(operations)
    except EditValidationError as e:
        return PatchResult.failure(e)

    current = initial_content
    counts: list[int] = []

    for index, operation in enumerate(validated):
        new_content, count, error = apply_operation(current, operation, index)
        if error is not None or new_content is None:
            return PatchResult.failure(error or _not_found(index))
        counts.append(count)
        current = new_content

    return PatchResult(final_content=current, replacement_counts=tuple(counts))
