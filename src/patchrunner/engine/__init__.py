"""Sequential atomic text-patch engine.

Validates literal find/replace operations, applies them in order as a single
all-or-nothing transaction, and summarizes the change.
"""

from .apply import PatchResult, apply_edits, apply_operation
from .matcher import (
    MatchOutcome,
    count_occurrences,
    find_occurrences,
    locate_unique,
    replace_every,
    replace_span,
)
from .operations import EditOperation, operations_from_arguments
from .protocol import EditOutcome, run_edit
from .report import ChangeReport, count_lines, summarize
from .validator import validate_operation, validate_operations

__all__ = [
    # Operations and validation
    "EditOperation",
    "operations_from_arguments",
    "validate_operation",
    "validate_operations",
    # Matching
    "MatchOutcome",
    "count_occurrences",
    "find_occurrences",
    "locate_unique",
    "replace_every",
    "replace_span",
    # Applying
    "PatchResult",
    "apply_edits",
    "apply_operation",
    # Reporting
    "ChangeReport",
    "count_lines",
    "summarize",
    # Caller protocol
    "EditOutcome",
    "run_edit",
]
