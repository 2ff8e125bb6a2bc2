"""Base tool framework and registry.

Defines the abstract interface for all tools and the registry for managing them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from patchrunner.core.config import EditConfig
from patchrunner.core.exceptions import E_TOOL_UNKNOWN, E_VALIDATION, ToolExecutionError
from patchrunner.core.logger import PatchRunnerLogger
from patchrunner.core.resources import ResourceStore, WorkspaceFileStore
from patchrunner.core.tool_protocol import (
    ToolCall,
    ToolDefinition,
    ToolResult,
    validate_tool_schema,
)
from patchrunner.core.workspace import Workspace


@dataclass
class ToolContext:
    """Context provided to tools during execution.

    ``resources`` defaults to the files of ``workspace``; pass another store to
    edit buffers that live elsewhere (an editor, a test fixture).
    """

    workspace: Workspace
    logger: PatchRunnerLogger
    model_id: str
    config: EditConfig = field(default_factory=EditConfig)
    resources: ResourceStore | None = None

    def __post_init__(self) -> None:
        if self.resources is None:
            self.resources = WorkspaceFileStore(
                self.workspace,
                encoding=self.config.encoding,
                max_bytes=self.config.max_file_bytes,
            )


class BaseTool(ABC):
    """Abstract base class for all tools.

    To create a new tool:
    1. Subclass BaseTool
    2. Implement execute() method
    3. Implement get_definition() to return ToolDefinition
    4. Register with ToolRegistry
    """

    @abstractmethod
    async def execute(self, call: ToolCall, context: ToolContext) -> ToolResult:
        """Execute the tool with given arguments.

        Args:
            call: Tool call with name and arguments
            context: Execution context (workspace, logger, config, resources)

        Returns:
            ToolResult with success status and output/error
        """
        raise NotImplementedError

    @abstractmethod
    def get_definition(self) -> ToolDefinition:
        """Get the tool's definition for LLM."""
        raise NotImplementedError

    def get_name(self) -> str:
        return self.get_definition().name

    def get_description(self) -> str:
        return self.get_definition().description


class ToolRegistry:
    """Registry for managing and executing tools."""

    def __init__(self, context: ToolContext) -> None:
        self.context = context
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """Register a tool.

        Raises:
            ValueError: If tool with same name already registered, or its schema is invalid
        """
        definition = tool.get_definition()
        name = definition.name
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")
        if not validate_tool_schema(definition):
            raise ValueError(f"Invalid parameter schema for tool: {name}")

        self._tools[name] = tool
        self.context.logger.debug("Tool registered", tool_name=name)

    def has(self, name: str) -> bool:
        return name in self._tools

    def get(self, name: str) -> BaseTool | None:
        return self._tools.get(name)

    async def execute(self, call: ToolCall) -> ToolResult:
        """Execute a tool call.

        Unknown tools yield an E_TOOL_UNKNOWN result. Unexpected exceptions
        from a tool are wrapped in ToolExecutionError.

        Raises:
            ToolExecutionError: If the tool raised
        """
        tool = self._tools.get(call.name)
        if tool is None:
            self.context.logger.warn("Unknown tool requested", tool_name=call.name)
            return ToolResult(
                success=False,
                error=f"Unknown tool: {call.name}",
                error_code=E_TOOL_UNKNOWN,
            )

        try:
            self.context.logger.debug("Executing tool", tool_name=call.name)
            result = await tool.execute(call, self.context)
        except Exception as e:
            self.context.logger.error(
                "Tool execution failed",
                tool_name=call.name,
                error=str(e),
            )
            raise ToolExecutionError(
                f"Tool {call.name} failed: {e}",
                error_code=E_VALIDATION,
                tool_name=call.name,
            ) from e

        self.context.logger.info(
            "Tool executed",
            tool_name=call.name,
            success=result.success,
            error_code=result.error_code,
        )
        return result

    def get_definitions(self) -> list[ToolDefinition]:
        return [tool.get_definition() for tool in self._tools.values()]

    def list_tools(self) -> list[str]:
        return list(self._tools.keys())

    def clear(self) -> None:
        self._tools.clear()
        self.context.logger.debug("Tool registry cleared")
