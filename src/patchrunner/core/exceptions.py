"""Exception hierarchy with error codes for patchrunner.

Every error carries a tool-protocol error code so that tool results, CLI output
and structured logs all report failures the same way.
"""

from dataclasses import dataclass, field
from typing import Any

# Standard error codes from Tool Protocol
E_NOT_FOUND = "E_NOT_FOUND"
E_NOT_UNIQUE = "E_NOT_UNIQUE"
E_VALIDATION = "E_VALIDATION"
E_PERMISSIONS = "E_PERMISSIONS"
E_RESOURCE = "E_RESOURCE"
E_NOT_PERSISTED = "E_NOT_PERSISTED"
E_TOOL_UNKNOWN = "E_TOOL_UNKNOWN"


@dataclass
class PatchRunnerException(Exception):  # noqa: N818
    """Base exception for all patchrunner errors.

    Provides structured error handling with error codes and metadata for
    consistent error reporting across the system.
    """

    message: str
    error_code: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable error message."""
        return self.message

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)


@dataclass
class EditValidationError(PatchRunnerException):
    """Malformed edit operation or operation list.

    Raised before any content is matched. ``index`` is the 0-based position of
    the offending operation, or None when the list as a whole is invalid.
    """

    index: int | None = None
    reason: str = ""

    def __post_init__(self) -> None:
        if not self.error_code:
            self.error_code = E_VALIDATION
        if self.index is not None:
            self.metadata["index"] = self.index
        if self.reason:
            self.metadata["reason"] = self.reason
        super().__post_init__()


@dataclass
class MatchNotFoundError(PatchRunnerException):
    """Search text of an operation has no occurrence in the current content."""

    index: int = 0

    def __post_init__(self) -> None:
        if not self.error_code:
            self.error_code = E_NOT_FOUND
        self.metadata["index"] = self.index
        super().__post_init__()


@dataclass
class AmbiguousMatchError(PatchRunnerException):
    """Search text of a single-replacement operation occurs more than once."""

    index: int = 0
    count: int = 0

    def __post_init__(self) -> None:
        if not self.error_code:
            self.error_code = E_NOT_UNIQUE
        self.metadata["index"] = self.index
        self.metadata["count"] = self.count
        super().__post_init__()


@dataclass
class ResourceError(PatchRunnerException):
    """Read or write of the underlying resource failed.

    A failure at the ``write`` stage means the edits were computed but not
    persisted, and is reported with E_NOT_PERSISTED.
    """

    resource_id: str = ""
    stage: str = "read"

    def __post_init__(self) -> None:
        if not self.error_code:
            self.error_code = E_NOT_PERSISTED if self.stage == "write" else E_RESOURCE
        if self.resource_id:
            self.metadata["resource_id"] = self.resource_id
        self.metadata["stage"] = self.stage
        super().__post_init__()


@dataclass
class ToolExecutionError(PatchRunnerException):
    """Error during tool execution.

    Raised when a tool fails unexpectedly, with specific error code
    and tool information for debugging.
    """

    tool_name: str = ""
    details: str | None = None

    def __post_init__(self) -> None:
        """Initialize with tool-specific metadata."""
        if self.tool_name:
            self.metadata["tool_name"] = self.tool_name
        if self.details:
            self.metadata["details"] = self.details
        super().__post_init__()


@dataclass
class WorkspaceSecurityError(PatchRunnerException):
    """Error when workspace security constraints are violated.

    Raised for path traversal attempts, access outside workspace root,
    and other security violations.
    """

    path: str = ""
    reason: str = ""

    def __post_init__(self) -> None:
        """Initialize with security-specific metadata."""
        if not self.error_code:
            self.error_code = E_PERMISSIONS
        if self.path:
            self.metadata["path"] = self.path
        if self.reason:
            self.metadata["reason"] = self.reason
        super().__post_init__()


@dataclass
class ConfigurationError(PatchRunnerException):
    """Error in system configuration.

    Raised for invalid config values, missing required settings,
    or configuration file problems.
    """

    key: str = ""
    reason: str = ""

    def __post_init__(self) -> None:
        """Initialize with configuration-specific metadata."""
        if not self.error_code:
            self.error_code = E_VALIDATION
        if self.key:
            self.metadata["config_key"] = self.key
        if self.reason:
            self.metadata["reason"] = self.reason
        super().__post_init__()


def format_error_for_user(exception: PatchRunnerException) -> str:
    """Format exception for user-friendly display.

    Args:
        exception: The patchrunner exception to format

    Returns:
        Human-readable error message without internal details
    """
    if isinstance(exception, ResourceError):
        if exception.stage == "write":
            return (
                f"Edits computed but not persisted to '{exception.resource_id}': "
                f"{exception.message}"
            )
        return f"Could not read '{exception.resource_id}': {exception.message}"

    if isinstance(exception, EditValidationError | MatchNotFoundError | AmbiguousMatchError):
        return f"Atomic edit failed (file unchanged): {exception.message}"

    if isinstance(exception, ToolExecutionError):
        if exception.tool_name:
            return f"Tool '{exception.tool_name}' failed: {exception.message}"
        return f"Tool execution failed: {exception.message}"

    if isinstance(exception, WorkspaceSecurityError):
        if exception.path:
            return f"Security error with path '{exception.path}': {exception.message}"
        return f"Workspace security error: {exception.message}"

    if isinstance(exception, ConfigurationError):
        if exception.key:
            return f"Configuration error '{exception.key}': {exception.message}"
        return f"Configuration error: {exception.message}"

    return str(exception.message)


def format_error_for_log(exception: PatchRunnerException) -> dict[str, Any]:
    """Format exception for structured logging.

    Args:
        exception: The patchrunner exception to format

    Returns:
        Dictionary with structured error information for logs
    """
    log_data: dict[str, Any] = {
        "error_type": type(exception).__name__,
        "message": exception.message,
        "error_code": exception.error_code,
    }

    if exception.metadata:
        log_data["metadata"] = exception.metadata

    if isinstance(exception, EditValidationError | MatchNotFoundError | AmbiguousMatchError):
        if exception.index is not None:
            log_data["index"] = exception.index
        if isinstance(exception, AmbiguousMatchError):
            log_data["count"] = exception.count

    elif isinstance(exception, ResourceError):
        log_data["resource_id"] = exception.resource_id
        log_data["stage"] = exception.stage

    elif isinstance(exception, ToolExecutionError):
        if exception.tool_name:
            log_data["tool_name"] = exception.tool_name
        if exception.details:
            log_data["details"] = exception.details

    elif isinstance(exception, WorkspaceSecurityError):
        if exception.path:
            log_data["path"] = exception.path
        if exception.reason:
            log_data["reason"] = exception.reason

    elif isinstance(exception, ConfigurationError):
        if exception.key:
            log_data["config_key"] = exception.key
        if exception.reason:
            log_data["reason"] = exception.reason

    return log_data
