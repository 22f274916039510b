"""Install and registry CLI commands."""
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from lampfm.cli_support import cli_errors, open_context, print_error, print_success, print_warning
from lampfm.core.installer import InstallWorkflow
from lampfm.core.registry import Registry
from lampfm.models.results import InstallOutcome, InstallReport

# Module-level console instance (will be set by register function)
console: Console = Console()

OUTCOME_STYLE = {
    InstallOutcome.ALREADY_PRESENT: "[dim]present[/dim]",
    InstallOutcome.INSTALLED: "[green]installed[/green]",
    InstallOutcome.FAILED: "[red]failed[/red]",
}


def render_report(report: InstallReport) -> None:
    """Print a per-package summary of an install run."""
    table = Table(title="Install summary" + (" (dry-run)" if report.dry_run else ""))
    table.add_column("Component", style="cyan")
    table.add_column("Package")
    table.add_column("Result")
    for result in report.packages:
        outcome = OUTCOME_STYLE[result.outcome]
        if report.dry_run and result.outcome == InstallOutcome.INSTALLED:
            outcome = "[yellow]would install[/yellow]"
        table.add_row(result.component, result.package, outcome)
    console.print(table)

    for action in report.actions:
        if not action.ok:
            print_warning(console, f"{action.description} failed: {action.error}")

    if report.failed:
        print_error(console, f"{len(report.failed)} package(s) failed to install, see the log")
    else:
        print_success(console, "All components installed and configured.")


def install(
    ctx: typer.Context,
    component: Optional[List[str]] = typer.Option(
        None, "--component", "-c", help="Only install this component (repeatable)."
    ),
    no_upgrade: bool = typer.Option(False, "--no-upgrade", help="Skip upgrading installed packages."),
):
    """Install all missing components.

    Examples:
        lampfm install                    # Everything in the registry
        lampfm install -c php -c git      # Just PHP and Git
        lampfm -n install                 # Show what would be run
    """
    run_ctx = open_context(ctx, console)
    workflow = InstallWorkflow(run_ctx)

    try:
        workflow.select(component)
    except KeyError as e:
        raise typer.BadParameter(f"Unknown component {e}", param_hint="--component")

    with cli_errors(console):
        report = workflow.run(component, upgrade=not no_upgrade)

    render_report(report)


def components():
    """List registry components and the packages they install."""
    registry = Registry.load()
    table = Table(title="Components")
    table.add_column("Name", style="cyan")
    table.add_column("Title")
    table.add_column("Packages")
    table.add_column("Services", style="dim")
    for comp in registry.components:
        services = [s for s in (registry.service_for(p) for p in comp.packages) if s]
        table.add_row(comp.name, comp.title, " ".join(comp.packages), " ".join(services))
    console.print(table)


def register_install_commands(app: typer.Typer, shared_console: Console) -> None:
    """Register install commands with the main Typer app."""
    global console
    console = shared_console

    app.command()(install)
    app.command()(components)
