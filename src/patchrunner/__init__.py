"""
patchrunner

Atomic, literal find-and-replace editing for AI coding agents: a sequential
patch engine plus the single-replace and multi-edit tools built on it.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from patchrunner.core.exceptions import (
    AmbiguousMatchError,
    ConfigurationError,
    EditValidationError,
    MatchNotFoundError,
    PatchRunnerException,
    ResourceError,
)
from patchrunner.engine import (
    ChangeReport,
    EditOperation,
    EditOutcome,
    PatchResult,
    apply_edits,
    run_edit,
    summarize,
    validate_operations,
)
from patchrunner.tools import MultiEditTool, SingleFindAndReplaceTool

__all__ = [
    # Version
    "__version__",
    # Engine
    "ChangeReport",
    "EditOperation",
    "EditOutcome",
    "PatchResult",
    "apply_edits",
    "run_edit",
    "summarize",
    "validate_operations",
    # Tools
    "MultiEditTool",
    "SingleFindAndReplaceTool",
    # Exceptions
    "AmbiguousMatchError",
    "ConfigurationError",
    "EditValidationError",
    "MatchNotFoundError",
    "PatchRunnerException",
    "ResourceError",
]
