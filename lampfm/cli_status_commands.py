"""Status CLI commands (packages / services)."""
import typer
from rich.console import Console
from rich.table import Table

from lampfm.cli_support import LampfmGroup, open_context
from lampfm.core.status import status_packages, status_services
from lampfm.models.results import ServiceState

StatusTyper = typer.Typer(cls=LampfmGroup, help="Show package and service status")

STATE_STYLE = {
    ServiceState.RUNNING: "[green]running[/green]",
    ServiceState.STOPPED: "[red]stopped[/red]",
    ServiceState.NOT_INSTALLED: "[yellow]not installed[/yellow]",
}


def register_status_commands(root: typer.Typer, console: Console) -> None:
    """Attach the status group to the main CLI."""

    @StatusTyper.command("packages")
    def packages_command(ctx: typer.Context) -> None:
        """Show installed/missing packages."""
        run_ctx = open_context(ctx, console)
        table = Table(title="Package status")
        table.add_column("Component", style="cyan")
        table.add_column("Package")
        table.add_column("Status")
        for status in status_packages(run_ctx):
            table.add_row(
                status.component,
                status.package,
                "[green]OK[/green]" if status.present else "[red]MISSING[/red]",
            )
        console.print(table)

    @StatusTyper.command("services")
    def services_command(ctx: typer.Context) -> None:
        """Show running/stopped services and boot enablement."""
        run_ctx = open_context(ctx, console)
        table = Table(title="Service status")
        table.add_column("Service", style="cyan")
        table.add_column("State")
        table.add_column("Boot")
        for status in status_services(run_ctx):
            table.add_row(status.service, STATE_STYLE[status.state], status.boot or "-")
        console.print(table)

    root.add_typer(StatusTyper, name="status")
