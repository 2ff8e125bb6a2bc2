"""CLI entry points for patchrunner.

Implements click-based CLI around the edit tools.
"""

import asyncio
import json
import sys
import uuid
from pathlib import Path
from typing import Any, NoReturn

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from patchrunner import __version__
from patchrunner.core.config import load_config
from patchrunner.core.exceptions import (
    ConfigurationError,
    EditValidationError,
    PatchRunnerException,
    format_error_for_user,
)
from patchrunner.core.factory import create_tool_context, create_tool_registry
from patchrunner.core.tool_protocol import ToolCall, ToolResult
from patchrunner.engine.operations import EditOperation, operations_from_arguments
from patchrunner.tools.base import ToolContext
from patchrunner.tools.edit import execute_edit, generate_unified_diff

# Load .env file from current directory or parent directories
load_dotenv()

console = Console()


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    sys.exit(1)


def _build_context(workspace: str, profile: str) -> ToolContext:
    try:
        return create_tool_context(workspace, profile_name=profile)
    except PatchRunnerException as e:
        _fail(format_error_for_user(e))


def _print_result(result: ToolResult) -> None:
    if not result.success:
        console.print(
            f"[bold red]✗ {escape(result.error_code or 'ERROR')}[/bold red] "
            f"{escape(result.error or '')}"
        )
        sys.exit(1)

    console.print(
        Panel(escape(result.output or ""), title="[green]✓ Edited[/green]", expand=False)
    )
    for diff in result.diffs or []:
        if diff.get("diff"):
            console.print(Syntax(diff["diff"], "diff", theme="ansi_dark"))


def _dry_run(
    context: ToolContext, tool_name: str, file_path: str, operations: list[EditOperation]
) -> None:
    result = execute_edit(tool_name, file_path, operations, context, dry_run=True)
    if isinstance(result, ToolResult):
        _print_result(result)
        return

    outcome, report = result
    summary = "\n".join([f"File: {file_path}", *report.summary_lines()])
    console.print(
        Panel(escape(summary), title="[yellow]Dry run (not written)[/yellow]", expand=False)
    )
    diff = "\n".join(
        generate_unified_diff(
            outcome.original_content or "", outcome.final_content or "", file_path
        )
    )
    if diff:
        console.print(Syntax(diff, "diff", theme="ansi_dark"))


def _run_tool(context: ToolContext, name: str, arguments: dict[str, Any]) -> None:
    registry = create_tool_registry(context)
    call = ToolCall(id=str(uuid.uuid4()), name=name, arguments=arguments)
    try:
        result = asyncio.run(registry.execute(call))
    except PatchRunnerException as e:
        _fail(format_error_for_user(e))
    _print_result(result)


@click.group()
@click.version_option(version=__version__, prog_name="patchrunner")
def cli() -> None:
    """patchrunner - atomic literal find-and-replace for files."""


@cli.command()
@click.argument("file_path")
@click.argument("old_string")
@click.argument("new_string")
@click.option("--replace-all", is_flag=True, help="Replace every occurrence")
@click.option("--workspace", "-w", default=".", help="Workspace directory")
@click.option("--profile", "-p", default="default", help="Configuration profile")
@click.option("--dry-run", is_flag=True, help="Show the result without writing the file")
def replace(
    file_path: str,
    old_string: str,
    new_string: str,
    replace_all: bool,
    workspace: str,
    profile: str,
    dry_run: bool,
) -> None:
    """Replace OLD_STRING with NEW_STRING in FILE_PATH.

    Without --replace-all, OLD_STRING must occur exactly once.
    """
    context = _build_context(workspace, profile)
    arguments = {
        "file_path": file_path,
        "old_string": old_string,
        "new_string": new_string,
        "replace_all": replace_all,
    }

    if dry_run:
        try:
            operation = EditOperation.from_arguments(arguments)
        except EditValidationError as e:
            _fail(format_error_for_user(e))
        _dry_run(context, "single_find_and_replace", file_path, [operation])
        return

    _run_tool(context, "single_find_and_replace", arguments)


@cli.command("multi-edit")
@click.argument("file_path")
@click.option(
    "--edits",
    "-e",
    "edits_source",
    required=True,
    help="JSON file holding a list of edits, or '-' to read stdin",
)
@click.option("--workspace", "-w", default=".", help="Workspace directory")
@click.option("--profile", "-p", default="default", help="Configuration profile")
@click.option("--dry-run", is_flag=True, help="Show the result without writing the file")
def multi_edit(
    file_path: str, edits_source: str, workspace: str, profile: str, dry_run: bool
) -> None:
    """Apply a list of edits to FILE_PATH atomically.

    Each edit is an object with old_string, new_string and optional
    replace_all. Edits run in order; if any fails, the file is untouched.
    """
    try:
        if edits_source == "-":
            raw_edits = json.loads(click.get_text_stream("stdin").read())
        else:
            raw_edits = json.loads(Path(edits_source).read_text())
    except (OSError, json.JSONDecodeError) as e:
        _fail(f"Could not load edits from {edits_source}: {e}")

    context = _build_context(workspace, profile)

    if dry_run:
        try:
            operations = operations_from_arguments(raw_edits)
        except EditValidationError as e:
            _fail(format_error_for_user(e))
        _dry_run(context, "multi_edit", file_path, operations)
        return

    _run_tool(context, "multi_edit", {"file_path": file_path, "edits": raw_edits})


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print JSON schemas")
def tools(as_json: bool) -> None:
    """List the available edit tools."""
    context = _build_context(".", "default")
    definitions = create_tool_registry(context).get_definitions()

    if as_json:
        click.echo(
            json.dumps(
                [
                    {"name": d.name, "description": d.description, "parameters": d.parameters}
                    for d in definitions
                ],
                indent=2,
            )
        )
        return

    table = Table(title="Edit tools")
    table.add_column("Name", style="cyan")
    table.add_column("Summary")
    for definition in definitions:
        table.add_row(definition.name, escape(definition.description.splitlines()[0]))
    console.print(table)


@cli.group()
def config() -> None:
    """Manage configuration profiles."""


@config.command("show")
@click.argument("profile_name", default="default")
def config_show(profile_name: str) -> None:
    """Show the merged configuration for a profile."""
    try:
        config_data = load_config(profile_name)
    except ConfigurationError as e:
        _fail(format_error_for_user(e))

    console.print(f"[bold]Profile: {escape(profile_name)}[/bold]\n")
    console.print(f"Max edits per call: {config_data.max_edits}")
    console.print(f"Max file size: {config_data.max_file_bytes} bytes")
    console.print(f"Encoding: {config_data.encoding}")
    console.print(f"Include diff: {config_data.include_diff}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
