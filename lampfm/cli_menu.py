"""Interactive main menu."""
from typing import Callable, Dict, List, Tuple

import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from lampfm.cli_support import open_context, print_error, print_info, print_success
from lampfm.core import provision
from lampfm.core.context import RunContext
from lampfm.core.control import service_action
from lampfm.core.errors import LampfmError
from lampfm.core.installer import InstallWorkflow
from lampfm.core.logger import get_logger
from lampfm.core.status import status_services
from lampfm.models.results import ServiceAction, ServiceState

logger = get_logger(__name__)

# Module-level console instance (will be set by register function)
console: Console = Console()

EXIT_CHOICE = "8"


def _split(answer: str) -> List[str]:
    return [item.strip() for item in answer.replace(",", " ").split() if item.strip()]


def _report(ctx: RunContext, message: str) -> None:
    if not ctx.dry_run:
        print_success(console, message)


def install_components(ctx: RunContext) -> None:
    from lampfm.cli_install_commands import render_report

    registry = ctx.registry
    table = Table(title="Components", show_lines=False)
    table.add_column("Name", style="cyan")
    table.add_column("Packages")
    for comp in registry.components:
        table.add_row(comp.name, " ".join(comp.packages))
    console.print(table)

    answer = typer.prompt("Components to install (blank for all)", default="", show_default=False)
    names = _split(answer)
    unknown = [name for name in names if name not in registry]
    if unknown:
        raise ValueError(f"Unknown component(s): {', '.join(unknown)}")

    render_report(InstallWorkflow(ctx).run(names or None))


def manage_services(ctx: RunContext) -> None:
    installed = [s for s in status_services(ctx) if s.state != ServiceState.NOT_INSTALLED]
    if not installed:
        print_info(console, "No managed services are installed")
        return

    for status in installed:
        console.print(f"  [cyan]{status.service}[/cyan] ({status.state.value})")

    names = _split(typer.prompt("Services (space or comma separated)"))
    action = Prompt.ask(
        "Action",
        choices=["start", "stop", "restart"],
        default="restart",
        console=console,
    )
    for name in names:
        service_action(ctx, ServiceAction(action), name)
        _report(ctx, f"{name} {ServiceAction(action).past_tense}")


def database_wizard(ctx: RunContext) -> None:
    user = typer.prompt("New DB username")
    password = typer.prompt(f"Password for {user}", hide_input=True)
    name = typer.prompt("Database name")
    provision.create_database(ctx, name, user, password)
    _report(ctx, f"Database '{name}' ready for {user}")


def ssl_setup(ctx: RunContext) -> None:
    domain = typer.prompt("Enter your domain for SSL (example.com)")
    provision.setup_ssl(ctx, domain)
    _report(ctx, f"Certificate requested for {domain}")


def firewall_setup(ctx: RunContext) -> None:
    provision.configure_firewall(ctx)
    provision.configure_fail2ban(ctx)
    _report(ctx, "Firewall and Fail2Ban configured")


def composer_and_nvm(ctx: RunContext) -> None:
    provision.install_composer(ctx)
    provision.install_nvm(ctx)
    _report(ctx, "Composer and NVM installed")


def docker_setup(ctx: RunContext) -> None:
    from lampfm.cli_install_commands import render_report

    render_report(provision.install_docker(ctx))


MENU: Dict[str, Tuple[str, Callable[[RunContext], None]]] = {
    "1": ("Install Components", install_components),
    "2": ("Manage Services", manage_services),
    "3": ("DB Setup Wizard", database_wizard),
    "4": ("SSL Setup (Certbot)", ssl_setup),
    "5": ("Configure Firewall & Fail2Ban", firewall_setup),
    "6": ("Install Composer & NVM", composer_and_nvm),
    "7": ("Install Docker", docker_setup),
}


def menu(ctx: typer.Context):
    """Interactive menu for installing and managing the stack."""
    run_ctx = open_context(ctx, console)
    choices = list(MENU) + [EXIT_CHOICE]

    while True:
        console.print("\n[bold]lampfm main menu[/bold]")
        for key, (label, _) in MENU.items():
            console.print(f"  [cyan]{key}[/cyan]) {label}")
        console.print(f"  [cyan]{EXIT_CHOICE}[/cyan]) Exit")

        choice = Prompt.ask("Choose an option", choices=choices, show_choices=False, console=console)
        if choice == EXIT_CHOICE:
            break

        label, action = MENU[choice]
        try:
            action(run_ctx)
        except (LampfmError, ValueError) as e:
            # A failed entry returns to the menu instead of ending the session
            logger.error(f"{label}: {e}", extra={"quiet": True})
            print_error(console, str(e))

    console.print("[green]Goodbye![/green]")


def register_menu_commands(app: typer.Typer, shared_console: Console) -> None:
    """Register the interactive menu with the main Typer app."""
    global console
    console = shared_console

    app.command()(menu)
