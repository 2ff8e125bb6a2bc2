"""Tests for the base tool framework and registry."""

import pytest

from patchrunner.core.config import EditConfig
from patchrunner.core.exceptions import ToolExecutionError
from patchrunner.core.logger import PatchRunnerLogger
from patchrunner.core.resources import InMemoryResourceStore, WorkspaceFileStore
from patchrunner.core.tool_protocol import (
    E_TOOL_UNKNOWN,
    ToolCall,
    ToolDefinition,
    ToolResult,
)
from patchrunner.core.workspace import Workspace
from patchrunner.tools.base import BaseTool, ToolContext, ToolRegistry


class EchoTool(BaseTool):
    async def execute(self, call, context):
        return ToolResult(success=True, output=call.arguments.get("text", ""))

    def get_definition(self):
        return ToolDefinition(
            name="echo",
            description="Echo text back",
            parameters={"type": "object", "properties": {"text": {"type": "string"}}},
        )


class UntypedParamTool(BaseTool):
    async def execute(self, call, context):
        return ToolResult(success=True)

    def get_definition(self):
        return ToolDefinition(
            name="untyped",
            description="Parameter without a type",
            parameters={"type": "object", "properties": {"text": {}}},
        )


class BrokenTool(BaseTool):
    async def execute(self, call, context):
        raise RuntimeError("kaboom")

    def get_definition(self):
        return ToolDefinition(
            name="broken",
            description="Always raises",
            parameters={"type": "object", "properties": {}},
        )


@pytest.fixture
def context(tmp_path):
    return ToolContext(
        workspace=Workspace(str(tmp_path / "ws")),
        logger=PatchRunnerLogger(log_dir=str(tmp_path / "logs")),
        model_id="test-model",
    )


@pytest.fixture
def registry(context):
    return ToolRegistry(context)


class TestToolContext:
    def test_default_resources_follow_config(self, tmp_path):
        context = ToolContext(
            workspace=Workspace(str(tmp_path / "ws")),
            logger=PatchRunnerLogger(log_dir=str(tmp_path / "logs")),
            model_id="m",
            config=EditConfig(encoding="latin-1", max_file_bytes=10),
        )
        assert isinstance(context.resources, WorkspaceFileStore)
        assert context.resources.encoding == "latin-1"
        assert context.resources.max_bytes == 10

    def test_explicit_resources_kept(self, tmp_path):
        store = InMemoryResourceStore()
        context = ToolContext(
            workspace=Workspace(str(tmp_path / "ws")),
            logger=PatchRunnerLogger(log_dir=str(tmp_path / "logs")),
            model_id="m",
            resources=store,
        )
        assert context.resources is store


class TestBaseTool:
    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            BaseTool()

    def test_name_and_description(self):
        tool = EchoTool()
        assert tool.get_name() == "echo"
        assert tool.get_description() == "Echo text back"


class TestToolRegistry:
    def test_register_and_lookup(self, registry):
        tool = EchoTool()
        registry.register(tool)

        assert registry.has("echo")
        assert registry.get("echo") is tool
        assert registry.get("missing") is None
        assert registry.list_tools() == ["echo"]
        assert [d.name for d in registry.get_definitions()] == ["echo"]

    def test_duplicate_registration(self, registry):
        registry.register(EchoTool())
        with pytest.raises(ValueError, match="already registered"):
            registry.register(EchoTool())

    def test_invalid_schema_rejected(self, registry):
        with pytest.raises(ValueError, match="Invalid parameter schema"):
            registry.register(UntypedParamTool())
        assert not registry.has("untyped")

    def test_clear(self, registry):
        registry.register(EchoTool())
        registry.clear()
        assert registry.list_tools() == []

    @pytest.mark.asyncio
    async def test_execute(self, registry):
        registry.register(EchoTool())
        result = await registry.execute(ToolCall(id="1", name="echo", arguments={"text": "hi"}))
        assert result.success
        assert result.output == "hi"

    @pytest.mark.asyncio
    async def test_execute_unknown_tool(self, registry):
        result = await registry.execute(ToolCall(id="1", name="nope", arguments={}))
        assert not result.success
        assert result.error_code == E_TOOL_UNKNOWN
        assert "nope" in result.error

    @pytest.mark.asyncio
    async def test_execute_wraps_exceptions(self, registry):
        registry.register(BrokenTool())
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.execute(ToolCall(id="1", name="broken", arguments={}))

        assert exc_info.value.tool_name == "broken"
        assert "kaboom" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RuntimeError)
