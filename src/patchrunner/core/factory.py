"""Factory functions for wiring a tool context and registry.

Used by the CLI and by embedders that want the edit tools with default
configuration.
"""

from pathlib import Path

from patchrunner.core.config import EditConfig, load_config
from patchrunner.core.logger import PatchRunnerLogger
from patchrunner.core.resources import ResourceStore
from patchrunner.core.workspace import Workspace
from patchrunner.tools.base import BaseTool, ToolContext, ToolRegistry
from patchrunner.tools.edit import MultiEditTool, SingleFindAndReplaceTool

DEFAULT_TOOL_CLASSES: list[type[BaseTool]] = [SingleFindAndReplaceTool, MultiEditTool]


def create_tool_context(
    workspace_root: str | Path,
    config: EditConfig | None = None,
    logger: PatchRunnerLogger | None = None,
    resources: ResourceStore | None = None,
    model_id: str = "patchrunner-cli",
    profile_name: str = "default",
) -> ToolContext:
    """Build a ToolContext rooted at ``workspace_root``.

    When ``config`` is not given it is loaded from the profile, the project
    directory (the workspace root) and the environment.

    Raises:
        ConfigurationError: If a config source is invalid
        WorkspaceSecurityError: If the workspace root is not absolute
    """
    root = Path(workspace_root).expanduser().resolve()
    if config is None:
        config = load_config(profile_name, project_root=root)

    return ToolContext(
        workspace=Workspace(str(root)),
        logger=logger or PatchRunnerLogger(),
        model_id=model_id,
        config=config,
        resources=resources,
    )


def create_tool_registry(
    context: ToolContext, tool_classes: list[type[BaseTool]] | None = None
) -> ToolRegistry:
    """Create a registry holding one instance of each tool class."""
    registry = ToolRegistry(context)
    for tool_class in tool_classes or DEFAULT_TOOL_CLASSES:
        registry.register(tool_class())
    return registry
