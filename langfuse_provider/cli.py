"""
Langfuse provider CLI - Manage Langfuse organizations and projects as code.
"""

import asyncio
import logging
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .core import ProvisionerCore
from .models import sensitive_fields
from .provider import LangfuseProvider
from .settings import get_settings

# Setup
app = typer.Typer(
    name="langfuse-provider",
    help="Manage Langfuse organizations and projects as code",
    add_completion=False,
)
console = Console()


class ResourceKind(str, Enum):
    organization = "organization"
    project = "project"


def configure_logging():
    """Configure logging based on settings."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Configure logging on module import
configure_logging()


def _get_main_file() -> Path:
    """Check for main.py in current directory and return Path.

    Raises:
        SystemExit: If main.py is not found
    """
    main_file = Path.cwd() / "main.py"
    if not main_file.exists():
        console.print(
            "[bold red]✗ Error:[/bold red] No main.py found in current directory"
        )
        console.print(
            "[dim]Hint: cd into your project directory that contains main.py[/dim]"
        )
        raise typer.Exit(code=1)
    return main_file


def _create_command_panel(title: str, color: str) -> Panel:
    settings = get_settings()
    return Panel.fit(
        f"[bold {color}]{title}[/bold {color}]\n"
        f"Directory: {Path.cwd().name}\n"
        f"Langfuse: {settings.base_url}",
        border_style=color,
    )


def _handle_command_error(e: Exception, command_type: str) -> None:
    """Print the error and exit with code 1.

    Raises:
        SystemExit: Always exits with code 1
    """
    console.print(f"\n[bold red]✗ {command_type.capitalize()} failed:[/bold red] {e}")
    raise typer.Exit(code=1)


def _run_command(
    command_name: str,
    panel_title: str,
    panel_color: str,
    core_method: str,
    success_handler,
    admin_api_key: str | None = None,
    base_url: str | None = None,
):
    """Execute a stack command with common setup and error handling.

    Args:
        command_name: Command name for error messages (e.g., "apply", "plan")
        panel_title: Title for the command panel
        panel_color: Border color for the panel
        core_method: Name of the ProvisionerCore method to call
        success_handler: Callable that takes result dict and prints success output
        admin_api_key: Optional admin API key override
        base_url: Optional base URL override
    """
    main_file = _get_main_file()
    console.print(_create_command_panel(panel_title, panel_color))

    try:
        core = ProvisionerCore(admin_api_key=admin_api_key, base_url=base_url)
        result = asyncio.run(getattr(core, core_method)(main_file))
    except Exception as e:
        _handle_command_error(e, command_name)

    success_handler(result)


@app.command()
def apply(
    admin_api_key: str = typer.Option(
        None, "--admin-api-key", help="Langfuse Admin API key (overrides .env)"
    ),
    base_url: str = typer.Option(
        None, "--base-url", help="Langfuse base URL (overrides .env)"
    ),
):
    """Apply main.py: create, rename or delete Langfuse entities to match it."""

    def _handle_success(result):
        if not result.get("success"):
            console.print(
                f"\n[bold red]✗ Deployment failed:[/bold red] {result.get('error', 'Unknown error')}"
            )
            raise typer.Exit(code=1)

        console.print("\n[bold green]✓ Deployment successful![/bold green]")
        summary = result.get("summary") or {}
        changes = summary.get("resource_changes", {})
        if changes:
            console.print(
                f"[dim]Resources: +{changes.get('create', 0)} ~{changes.get('update', 0)} -{changes.get('delete', 0)}[/dim]"
            )
        if result.get("outputs"):
            console.print("\n[dim]Outputs:[/dim]")
            for key, value in result["outputs"].items():
                console.print(f"  {key}: {value}")

    _run_command(
        command_name="deployment",
        panel_title="Langfuse Apply",
        panel_color="blue",
        core_method="apply",
        success_handler=_handle_success,
        admin_api_key=admin_api_key,
        base_url=base_url,
    )


@app.command()
def plan(
    admin_api_key: str = typer.Option(
        None, "--admin-api-key", help="Langfuse Admin API key (overrides .env)"
    ),
    base_url: str = typer.Option(
        None, "--base-url", help="Langfuse base URL (overrides .env)"
    ),
):
    """Preview changes without touching Langfuse."""

    def _handle_success(result):
        console.print("\n[bold]Plan Summary:[/bold]")
        console.print(f"  Resources: {result['resources']}")

        preview = result.get("preview", {})
        if preview.get("success"):
            change_summary = preview["summary"].get("change_summary", {})
            console.print("\n[bold]Planned Changes (preview only):[/bold]")
            console.print(f"  Would create: {change_summary.get('create', 0)}")
            console.print(f"  Would update: {change_summary.get('update', 0)}")
            console.print(f"  Would delete: {change_summary.get('delete', 0)}")
        elif preview.get("error"):
            console.print(f"\n[yellow]⚠ Preview error:[/yellow] {preview['error']}")

        console.print("\n[dim]Run 'langfuse-provider apply' to deploy these resources.[/dim]")

    _run_command(
        command_name="plan",
        panel_title="Langfuse Plan",
        panel_color="cyan",
        core_method="plan",
        success_handler=_handle_success,
        admin_api_key=admin_api_key,
        base_url=base_url,
    )


@app.command()
def destroy(
    admin_api_key: str = typer.Option(
        None, "--admin-api-key", help="Langfuse Admin API key (overrides .env)"
    ),
    base_url: str = typer.Option(
        None, "--base-url", help="Langfuse base URL (overrides .env)"
    ),
):
    """Destroy every Langfuse entity managed by this project's stack."""

    def _handle_success(result):
        if result.get("success"):
            console.print("\n[bold green]✓ Resources destroyed successfully![/bold green]")
        else:
            console.print(
                f"\n[bold red]✗ Destroy failed:[/bold red] {result.get('error', 'Unknown error')}"
            )
            raise typer.Exit(code=1)

    _run_command(
        command_name="destroy",
        panel_title="Langfuse Destroy",
        panel_color="red",
        core_method="destroy",
        success_handler=_handle_success,
        admin_api_key=admin_api_key,
        base_url=base_url,
    )


@app.command()
def show(
    kind: ResourceKind = typer.Argument(..., help="Resource kind"),
    import_id: str = typer.Argument(
        ..., help="Organization id, or <organization_id>/<project_id> for projects"
    ),
    admin_api_key: str = typer.Option(
        None, "--admin-api-key", help="Langfuse Admin API key (overrides .env)"
    ),
    base_url: str = typer.Option(
        None, "--base-url", help="Langfuse base URL (overrides .env)"
    ),
):
    """Import an existing entity by id and print its current state."""
    try:
        provider = LangfuseProvider()
        provider.configure(admin_api_key=admin_api_key, base_url=base_url)
        reconciler = provider.resource(f"langfuse_{kind.value}")
        state = reconciler.read(reconciler.import_state(import_id))
    except Exception as e:
        _handle_command_error(e, "show")

    hidden = sensitive_fields(type(state))
    table = Table(title=f"langfuse_{kind.value}")
    table.add_column("Attribute", style="bold")
    table.add_column("Value")
    for key, value in state.model_dump().items():
        if key in hidden and value is not None:
            value = "(sensitive)"
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@app.command()
def version():
    """Show provider version."""
    from . import __version__

    console.print(f"Langfuse provider version: [bold]{__version__}[/bold]")


if __name__ == "__main__":
    app()
