"""Tool protocol core types and helpers."""

from dataclasses import dataclass, field
from typing import Any

from patchrunner.core.exceptions import (
    E_NOT_FOUND,
    E_NOT_PERSISTED,
    E_NOT_UNIQUE,
    E_PERMISSIONS,
    E_RESOURCE,
    E_TOOL_UNKNOWN,
    E_VALIDATION,
)

__all__ = [
    "E_NOT_FOUND",
    "E_NOT_PERSISTED",
    "E_NOT_UNIQUE",
    "E_PERMISSIONS",
    "E_RESOURCE",
    "E_TOOL_UNKNOWN",
    "E_VALIDATION",
    "ToolCall",
    "ToolDefinition",
    "ToolResult",
    "validate_tool_schema",
]


@dataclass
class ToolCall:
    """Represents a tool call request from LLM."""

    id: str
    name: str
    arguments: dict[str, Any]


@dataclass
class ToolResult:
    """Result from tool execution."""

    success: bool
    output: str | None = None
    error: str | None = None
    error_code: str | None = None
    data: dict[str, Any] | None = None
    diffs: list[dict[str, Any]] | None = None
    files_changed: list[str] | None = None


@dataclass
class ToolDefinition:
    """Tool definition with JSON Schema and safety flags."""

    name: str
    description: str
    parameters: dict[str, Any]  # JSON Schema
    safety: dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate tool definition structure."""
        if not isinstance(self.parameters, dict):
            raise ValueError("Tool parameters must be a dictionary")
        if "type" not in self.parameters:
            raise ValueError("Tool parameters must specify 'type'")

        safety_defaults = {"requires_read_first": False, "requires_confirmation": False}
        for key, default in safety_defaults.items():
            self.safety.setdefault(key, default)


def validate_tool_schema(tool_def: ToolDefinition) -> bool:
    """Check that a tool definition carries a usable JSON Schema.

    Object schemas must have a properties dict, a list for ``required`` and a
    ``type`` on every property.
    """
    try:
        params = tool_def.parameters

        if not isinstance(params.get("type"), str):
            return False

        if params["type"] == "object":
            if not isinstance(params.get("properties"), dict):
                return False
            if "required" in params and not isinstance(params["required"], list):
                return False

        for prop_def in params.get("properties", {}).values():
            if not isinstance(prop_def, dict) or "type" not in prop_def:
                return False

        return True

    except (KeyError, TypeError, AttributeError):
        return False
