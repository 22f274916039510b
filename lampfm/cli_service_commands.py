"""Service control CLI commands: start, stop, restart, enable, disable."""
import typer
from rich.console import Console

from lampfm.cli_support import cli_errors, open_context, print_success
from lampfm.core.control import service_action
from lampfm.models.results import ServiceAction

HELP = {
    ServiceAction.START: "Start a service (e.g. apache2, mysql, vsftpd, postfix).",
    ServiceAction.STOP: "Stop a service.",
    ServiceAction.RESTART: "Restart a service.",
    ServiceAction.ENABLE: "Enable a service at boot.",
    ServiceAction.DISABLE: "Disable a service at boot.",
}


def register_service_commands(root: typer.Typer, console: Console) -> None:
    """Attach one command per ServiceAction to the main CLI."""

    def make_command(action: ServiceAction):
        def command(
            ctx: typer.Context,
            service: str = typer.Argument(..., help="systemd unit name, without .service"),
        ) -> None:
            run_ctx = open_context(ctx, console)
            with cli_errors(console):
                service_action(run_ctx, action, service)
            if run_ctx.dry_run:
                return
            print_success(console, f"{service} {action.past_tense}")

        command.__doc__ = HELP[action]
        return command

    for action in ServiceAction:
        root.command(action.value)(make_command(action))
