#!/usr/bin/env python3
"""lampfm CLI - LAMP + FTP + mail stack installer and service manager."""
from typing import Optional

import typer
from rich.console import Console

from lampfm.cli_install_commands import register_install_commands
from lampfm.cli_menu import register_menu_commands
from lampfm.cli_provision_commands import register_provision_commands
from lampfm.cli_service_commands import register_service_commands
from lampfm.cli_site_commands import register_site_commands
from lampfm.cli_status_commands import register_status_commands
from lampfm.cli_support import CliState, LampfmGroup

app = typer.Typer(
    name="lampfm",
    cls=LampfmGroup,
    help="""lampfm - LAMP + FTP + mail stack installer & service manager

Installs Apache, MySQL, PHP, phpMyAdmin, Python, FTP, Postfix, Git and
Node.js, then manages their services, sites and virtual hosts.

Quick start:
  sudo lampfm install              # Install all missing components
  sudo lampfm status services      # What is running?
  sudo lampfm newsite blog         # Scaffold /var/www/html/blog
  sudo lampfm vhost add example.com /var/www/html/blog

Global flags go before the command: lampfm -n -v install
""",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print external commands instead of running them."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Echo log lines to the terminal."
    ),
    config: Optional[str] = typer.Option(
        None, "--config", help="YAML config file (default: /etc/lampfm/lampfm.yml)."
    ),
):
    ctx.obj = CliState(dry_run=dry_run, verbose=verbose, config_path=config)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@app.command("help")
def help_command(ctx: typer.Context):
    """Show this help message."""
    typer.echo(ctx.find_root().get_help())


# Attach modular subcommands
register_install_commands(app, console)
register_status_commands(app, console)
register_service_commands(app, console)
register_site_commands(app, console)
register_provision_commands(app, console)
register_menu_commands(app, console)

if __name__ == "__main__":
    app()
