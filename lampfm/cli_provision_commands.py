"""Provisioning CLI commands: ssl, firewall, db, tools."""
import typer
from rich.console import Console

from lampfm.cli_support import LampfmGroup, cli_errors, open_context, print_success
from lampfm.core import provision

DbTyper = typer.Typer(cls=LampfmGroup, help="Database helpers")
ToolsTyper = typer.Typer(cls=LampfmGroup, help="Install developer tools")


def register_provision_commands(root: typer.Typer, console: Console) -> None:
    """Attach provisioning commands to the main CLI."""

    @root.command("ssl")
    def ssl_command(
        ctx: typer.Context,
        domain: str = typer.Argument(..., help="Domain to obtain a certificate for"),
    ) -> None:
        """Obtain a Let's Encrypt certificate with certbot (Apache plugin)."""
        run_ctx = open_context(ctx, console)
        with cli_errors(console):
            email = provision.setup_ssl(run_ctx, domain)
        if run_ctx.dry_run:
            return
        print_success(console, f"Certificate requested for {domain} (contact {email})")

    @root.command("firewall")
    def firewall_command(ctx: typer.Context) -> None:
        """Configure UFW rules and enable Fail2Ban."""
        run_ctx = open_context(ctx, console)
        with cli_errors(console):
            provision.configure_firewall(run_ctx)
            provision.configure_fail2ban(run_ctx)
        if run_ctx.dry_run:
            return
        print_success(console, "Firewall and Fail2Ban configured")

    @DbTyper.command("create")
    def db_create_command(
        ctx: typer.Context,
        name: str = typer.Argument(..., help="Database name"),
        user: str = typer.Option(..., "--user", "-u", prompt="New DB username"),
        password: str = typer.Option(
            ..., "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True
        ),
    ) -> None:
        """Create a MySQL database and a user with full access to it."""
        run_ctx = open_context(ctx, console)
        with cli_errors(console):
            provision.create_database(run_ctx, name, user, password)
        if run_ctx.dry_run:
            return
        print_success(console, f"Database '{name}' ready for {user}")

    @ToolsTyper.command("composer")
    def composer_command(ctx: typer.Context) -> None:
        """Install Composer to /usr/local/bin."""
        run_ctx = open_context(ctx, console)
        with cli_errors(console):
            installed = provision.install_composer(run_ctx)
        if run_ctx.dry_run:
            return
        print_success(console, "Composer installed" if installed else "Composer already installed")

    @ToolsTyper.command("nvm")
    def nvm_command(ctx: typer.Context) -> None:
        """Install NVM (Node Version Manager)."""
        run_ctx = open_context(ctx, console)
        with cli_errors(console):
            provision.install_nvm(run_ctx)
        if run_ctx.dry_run:
            return
        print_success(console, "NVM installed")

    @ToolsTyper.command("docker")
    def docker_command(ctx: typer.Context) -> None:
        """Install Docker and Docker Compose and start the daemon."""
        from lampfm.cli_install_commands import render_report

        run_ctx = open_context(ctx, console)
        with cli_errors(console):
            report = provision.install_docker(run_ctx)
        render_report(report)

    root.add_typer(DbTyper, name="db")
    root.add_typer(ToolsTyper, name="tools")
