"""File editing tools: single find-and-replace and atomic multi-edit.

Both tools build EditOperations from the call arguments and hand them to
``execute_edit``, which applies the configured limits and runs ``run_edit``.
They differ only in how many operations a call carries.
"""

import difflib
from collections.abc import Sequence
from typing import Any

from patchrunner.core.exceptions import (
    E_RESOURCE,
    E_VALIDATION,
    EditValidationError,
    PatchRunnerException,
    format_error_for_user,
)
from patchrunner.core.tool_protocol import ToolCall, ToolDefinition, ToolResult
from patchrunner.engine.operations import EditOperation, operations_from_arguments
from patchrunner.engine.protocol import EditOutcome, run_edit
from patchrunner.engine.report import ChangeReport
from patchrunner.tools.base import BaseTool, ToolContext

_EDIT_ITEM_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "old_string": {
            "type": "string",
            "description": "Text to replace - must match exactly, including whitespace",
        },
        "new_string": {
            "type": "string",
            "description": "Replacement text (empty string deletes old_string)",
        },
        "replace_all": {
            "type": "boolean",
            "default": False,
            "description": "Replace all occurrences of old_string",
        },
    },
    "required": ["old_string", "new_string"],
}


def generate_unified_diff(old_content: str, new_content: str, filepath: str) -> list[str]:
    """Generate unified diff lines between old and new content."""
    return list(
        difflib.unified_diff(
            old_content.splitlines(keepends=True),
            new_content.splitlines(keepends=True),
            fromfile=f"a/{filepath}",
            tofile=f"b/{filepath}",
            lineterm="",
        )
    )


def _validation_failure(message: str) -> ToolResult:
    return ToolResult(success=False, error=message, error_code=E_VALIDATION)


def _error_result(error: PatchRunnerException) -> ToolResult:
    """Turn an edit failure into a ToolResult an agent can act on."""
    data: dict[str, Any] = {"error_type": type(error).__name__}
    for key in ("index", "count", "stage"):
        value = getattr(error, key, None)
        if value is not None:
            data[key] = value

    return ToolResult(
        success=False,
        error=format_error_for_user(error),
        error_code=error.error_code or E_VALIDATION,
        data=data,
    )


def _get_file_path(call: ToolCall) -> str | None:
    file_path = call.arguments.get("file_path")
    if not isinstance(file_path, str) or not file_path:
        return None
    return file_path


def execute_edit(
    tool_name: str,
    file_path: str,
    operations: Sequence[EditOperation],
    context: ToolContext,
    dry_run: bool = False,
) -> ToolResult | tuple[EditOutcome, ChangeReport]:
    """Run the shared read-apply-write protocol under the context's limits.

    Returns:
        The successful outcome with its report, or a failed ToolResult
    """
    if len(operations) > context.config.max_edits:
        return _validation_failure(
            f"Too many edits: {len(operations)} (limit {context.config.max_edits})"
        )
    if context.resources is None:
        return ToolResult(
            success=False, error="No resource store configured", error_code=E_RESOURCE
        )

    with context.logger.operation(tool_name, file_path=file_path, edit_count=len(operations)):
        outcome = run_edit(
            context.resources, file_path, operations, logger=context.logger, dry_run=dry_run
        )

    if outcome.error is not None:
        return _error_result(outcome.error)
    if outcome.report is None:
        return _error_result(PatchRunnerException("Edit produced no report", E_RESOURCE))
    return outcome, outcome.report


def _success_result(
    outcome: EditOutcome, report: ChangeReport, output: str, context: ToolContext
) -> ToolResult:
    diffs = None
    if context.config.include_diff:
        diff_lines = generate_unified_diff(
            outcome.original_content or "", outcome.final_content or "", outcome.resource_id
        )
        diffs = [{"path": outcome.resource_id, "diff": "\n".join(diff_lines)}]

    return ToolResult(
        success=True,
        output=output,
        data=report.to_dict(),
        diffs=diffs,
        files_changed=[outcome.resource_id],
    )


class SingleFindAndReplaceTool(BaseTool):
    """Exact string replacement in one file."""

    async def execute(self, call: ToolCall, context: ToolContext) -> ToolResult:
        """Replace one unique occurrence (or every occurrence) of old_string."""
        file_path = _get_file_path(call)
        if file_path is None:
            return _validation_failure("Missing required argument: file_path")

        try:
            operation = EditOperation.from_arguments(call.arguments)
        except EditValidationError as e:
            return _error_result(e)

        result = execute_edit("single_find_and_replace", file_path, [operation], context)
        if isinstance(result, ToolResult):
            return result

        outcome, report = result
        output = "\n".join(
            [
                f"Successfully replaced {report.total_replacements} occurrence(s) in {file_path}",
                "",
                f"File: {file_path}",
                f"Occurrences replaced: {report.total_replacements}",
                f"Lines added: {report.lines_added}",
                f"Lines removed: {report.lines_removed}",
                f"Replace all: {str(operation.replace_all).lower()}",
            ]
        )
        return _success_result(outcome, report, output, context)

    def get_definition(self) -> ToolDefinition:
        return ToolDefinition(
            name="single_find_and_replace",
            description=(
                "Performs an exact string replacement in a file.\n\n"
                "IMPORTANT:\n"
                "- Read the file just before editing to see its up-to-date contents\n"
                "- old_string must match exactly, including whitespace and indentation\n"
                "- old_string is matched literally; regex syntax has no meaning\n"
                "- Use replace_all for renaming a variable across the file\n\n"
                "WARNINGS:\n"
                "- Without replace_all the edit FAILS if old_string is not unique; "
                "add surrounding context or set replace_all: true\n"
                "- old_string and new_string MUST be different"
            ),
            parameters={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Path to the file, relative to the workspace root",
                    },
                    **_EDIT_ITEM_SCHEMA["properties"],
                },
                "required": ["file_path", "old_string", "new_string"],
            },
            safety={"requires_read_first": True},
        )


class MultiEditTool(BaseTool):
    """Several sequential replacements in one file, applied atomically."""

    async def execute(self, call: ToolCall, context: ToolContext) -> ToolResult:
        """Apply every edit in order, or none of them."""
        file_path = _get_file_path(call)
        if file_path is None:
            return _validation_failure("Missing required argument: file_path")
        if "edits" not in call.arguments:
            return _validation_failure("Missing required argument: edits")

        try:
            operations = operations_from_arguments(call.arguments["edits"])
        except EditValidationError as e:
            return _error_result(e)

        result = execute_edit("multi_edit", file_path, operations, context)
        if isinstance(result, ToolResult):
            return result

        outcome, report = result
        output = "\n".join(
            [
                f"Successfully applied {len(operations)} edit operation(s) to {file_path}",
                "",
                f"File: {file_path}",
                *report.summary_lines(),
                "",
                "All edits applied atomically (all-or-nothing).",
            ]
        )
        return _success_result(outcome, report, output, context)

    def get_definition(self) -> ToolDefinition:
        return ToolDefinition(
            name="multi_edit",
            description=(
                "Make several find-and-replace edits to a single file in one operation.\n\n"
                "IMPORTANT:\n"
                "- Edits are applied SEQUENTIALLY in the order provided\n"
                "- Each edit operates on the result of the previous edit\n"
                "- Edits are ATOMIC: all succeed or none are applied\n"
                "- Files may change between tool calls, so make all edits to a file in ONE call\n"
                "- Use replace_all for renaming a variable across the file\n\n"
                "WARNINGS:\n"
                "- If an earlier edit changes text a later edit searches for, the call fails\n"
                "- old_string must match exactly (including whitespace) and differ from new_string"
            ),
            parameters={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Path to the file, relative to the workspace root",
                    },
                    "edits": {
                        "type": "array",
                        "description": "Edit operations to perform sequentially on the file",
                        "items": _EDIT_ITEM_SCHEMA,
                        "minItems": 1,
                    },
                },
                "required": ["file_path", "edits"],
            },
            safety={"requires_read_first": True},
        )
