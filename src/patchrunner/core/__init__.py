"""Core modules for patchrunner.

This package contains the shared infrastructure used by the patch engine and
the tools: exceptions, logging, configuration, workspace sandboxing, resource
stores and the tool protocol.
"""

from .config import EditConfig, load_config
from .exceptions import (
    # Error codes
    E_NOT_FOUND,
    E_NOT_PERSISTED,
    E_NOT_UNIQUE,
    E_PERMISSIONS,
    E_RESOURCE,
    E_TOOL_UNKNOWN,
    E_VALIDATION,
    AmbiguousMatchError,
    ConfigurationError,
    EditValidationError,
    MatchNotFoundError,
    PatchRunnerException,
    ResourceError,
    ToolExecutionError,
    WorkspaceSecurityError,
    format_error_for_log,
    format_error_for_user,
)
from .logger import PatchRunnerLogger
from .resources import InMemoryResourceStore, ResourceOutcome, ResourceStore, WorkspaceFileStore
from .tool_protocol import ToolCall, ToolDefinition, ToolResult
from .workspace import Workspace

__all__ = [
    # Error codes
    "E_NOT_FOUND",
    "E_NOT_PERSISTED",
    "E_NOT_UNIQUE",
    "E_PERMISSIONS",
    "E_RESOURCE",
    "E_TOOL_UNKNOWN",
    "E_VALIDATION",
    # Exception classes
    "AmbiguousMatchError",
    "ConfigurationError",
    "EditValidationError",
    "MatchNotFoundError",
    "PatchRunnerException",
    "ResourceError",
    "ToolExecutionError",
    "WorkspaceSecurityError",
    # Error formatting utilities
    "format_error_for_log",
    "format_error_for_user",
    # Configuration and logging
    "EditConfig",
    "PatchRunnerLogger",
    "load_config",
    # Resources
    "InMemoryResourceStore",
    "ResourceOutcome",
    "ResourceStore",
    "WorkspaceFileStore",
    "Workspace",
    # Tool protocol
    "ToolCall",
    "ToolDefinition",
    "ToolResult",
]
