"""Shared utilities for lampfm CLI modules."""
from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.markup import escape
from typer.core import TyperGroup

from lampfm.core.config import LampfmConfig, load_config
from lampfm.core.context import RunContext
from lampfm.core.errors import LampfmError
from lampfm.core.logger import get_logger, setup_logging
from lampfm.core.preflight import check_preconditions
from lampfm.core.registry import Registry
from lampfm.core.runner import CommandRunner
from lampfm.services.backends import Backends, local_backends, memory_backends
from lampfm.services.memory import MemorySystem

logger = get_logger(__name__)


class LampfmGroup(TyperGroup):
    """Command group that prints usage and exits 1 on unknown commands."""

    def resolve_command(self, ctx: typer.Context, args):
        name = args[0] if args else None
        if (
            name
            and not name.startswith("-")
            and not ctx.resilient_parsing
            and self.get_command(ctx, name) is None
        ):
            typer.echo(f"Error: No such command '{name}'.\n", err=True)
            typer.echo(ctx.get_help())
            ctx.exit(1)
        return super().resolve_command(ctx, args)


@dataclass
class CliState:
    """Global flags parsed by the root callback."""
    dry_run: bool = False
    verbose: bool = False
    config_path: Optional[str] = None


def is_mock() -> bool:
    """Return True when CLI runs against in-memory backends."""
    return os.environ.get("LAMPFM_MOCK") == "1"


def build_backends(runner: CommandRunner, config: LampfmConfig, registry: Registry) -> Backends:
    """Real backends, or a fresh simulated host in mock mode."""
    if is_mock():
        system = MemorySystem(package_units={b.package: b.service for b in registry.bindings})
        return memory_backends(runner, system)
    return local_backends(runner)


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.find_root().obj
    return state if isinstance(state, CliState) else CliState()


def open_context(
    ctx: typer.Context,
    console: Console,
    preconditions: bool = True,
) -> RunContext:
    """Load config, set up logging, build backends and check preconditions.

    Raises:
        typer.Exit: Configuration invalid or preconditions not met (exit 1)
    """
    state = get_state(ctx)

    try:
        config = load_config(state.config_path)
    except LampfmError as e:
        print_error(console, str(e))
        raise typer.Exit(1)

    setup_logging(
        log_file=config.log_file,
        verbose=state.verbose,
        max_bytes=config.log_max_bytes,
        backups=config.log_backups,
    )

    with cli_errors(console):
        registry = Registry.load()
        runner = CommandRunner(dry_run=state.dry_run, console=console, timeout=config.command_timeout)
        run_ctx = RunContext(
            config=config,
            registry=registry,
            runner=runner,
            backends=build_backends(runner, config, registry),
        )
        if preconditions:
            check_preconditions(run_ctx)

    return run_ctx


def handle_cli_error(
    e: Exception,
    console: Console,
    exit_code: int = 1
) -> None:
    """Log an error to the file, show it once on the terminal and exit.

    Args:
        e: Exception to handle
        console: Rich console for output
        exit_code: Exit code to use
    """
    logger.error(str(e), extra={"quiet": True})
    print_error(console, str(e))
    raise typer.Exit(exit_code)


@contextmanager
def cli_errors(console: Console) -> Iterator[None]:
    """Turn workflow failures into a logged message and exit 1."""
    try:
        yield
    except (LampfmError, ValueError) as e:
        handle_cli_error(e, console)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting."""
    console.print(f"[green]{prefix}[/green] {escape(message)}")


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting."""
    console.print(f"[red]{prefix} Error:[/red] {escape(message)}")


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting."""
    console.print(f"[yellow]{prefix}[/yellow] {escape(message)}")


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    """Print info message with consistent formatting."""
    console.print(f"[cyan]{prefix}[/cyan] {escape(message)}")
