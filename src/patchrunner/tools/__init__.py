"""Tool implementations for patchrunner.

Provides the single find-and-replace and multi-edit file tools.
"""

from patchrunner.tools.base import BaseTool, ToolContext, ToolRegistry
from patchrunner.tools.edit import MultiEditTool, SingleFindAndReplaceTool

__all__ = [
    # Base classes
    "BaseTool",
    "ToolContext",
    "ToolRegistry",
    # File editing
    "MultiEditTool",
    "SingleFindAndReplaceTool",
]
