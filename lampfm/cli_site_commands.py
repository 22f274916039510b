"""Scaffolding CLI commands: newsite, vhost add."""
import typer
from rich.console import Console

from lampfm.cli_support import LampfmGroup, cli_errors, open_context, print_success
from lampfm.scaffold.site import new_site
from lampfm.scaffold.vhost import add_virtual_host

VhostTyper = typer.Typer(cls=LampfmGroup, help="Manage Apache virtual hosts")


def register_site_commands(root: typer.Typer, console: Console) -> None:
    """Attach site scaffolding commands to the main CLI."""

    @root.command("newsite")
    def newsite_command(
        ctx: typer.Context,
        name: str = typer.Argument(..., help="Site directory name under the web root"),
    ) -> None:
        """Scaffold <web_root>/<name> with placeholder index files."""
        run_ctx = open_context(ctx, console)
        with cli_errors(console):
            site = new_site(run_ctx, name)
        if run_ctx.dry_run:
            return
        print_success(console, f"Site '{site.name}' created at {site.path}")

    @VhostTyper.command("add")
    def add_command(
        ctx: typer.Context,
        domain: str = typer.Argument(..., help="Server name, e.g. example.com"),
        path: str = typer.Argument(..., help="Document root"),
    ) -> None:
        """Create and enable an Apache virtual host."""
        run_ctx = open_context(ctx, console)
        with cli_errors(console):
            vhost = add_virtual_host(run_ctx, domain, path)
        if run_ctx.dry_run:
            return
        print_success(console, f"vhost '{vhost.domain}' enabled ({vhost.config_path})")

    root.add_typer(VhostTyper, name="vhost")
