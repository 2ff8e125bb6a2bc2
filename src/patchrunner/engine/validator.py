"""Well-formedness checks for edit operations.

Validation looks at each operation on its own. It never reads content and
never simulates earlier operations, so it can run before anything is read.
"""

from collections.abc import Sequence

from patchrunner.core.exceptions import EditValidationError
from patchrunner.engine.operations import EditOperation


def validate_operation(operation: EditOperation, index: int = 0) -> EditOperation:
    """Check a single operation.

    Raises:
        EditValidationError: On empty search text, missing replacement, or a no-op edit
    """
    label = f"Edit {index + 1}"

    if not operation.old_string.strip():
        raise EditValidationError(
            f"{label}: old_string cannot be empty or whitespace-only",
            index=index,
            reason="empty_old_string",
        )

    if operation.new_string is None:
        raise EditValidationError(
            f"{label}: new_string is required (can be empty string to delete)",
            index=index,
            reason="missing_new_string",
        )

    if operation.old_string == operation.new_string:
        raise EditValidationError(
            f"{label}: old_string and new_string must be different",
            index=index,
            reason="no_op",
        )

    return operation


def validate_operations(operations: Sequence[EditOperation]) -> list[EditOperation]:
    """Validate an operation list in order and return it unchanged.

    Raises:
        EditValidationError: For an empty list or the first malformed operation
    """
    if not operations:
        raise EditValidationError("edits must be a non-empty list", reason="empty_list")

    for index, operation in enumerate(operations):
        validate_operation(operation, index)

    return list(operations)
