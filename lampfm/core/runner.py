"""Single choke point for external commands.

Every mutating command goes through CommandRunner.announce(), which logs it
and, in dry-run mode, prints it instead of letting it execute. Read-only
queries always execute so dry-run output reflects the real host.
"""
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from rich.console import Console
from rich.markup import escape

from lampfm.core.errors import CommandError
from lampfm.core.logger import get_logger

logger = get_logger(__name__)

Command = Union[str, Sequence[str]]


@dataclass
class CommandResult:
    """Completed external command."""
    argv: List[str]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def render(command: Command) -> str:
    """Shell-quoted form of a command, as logged and printed."""
    if isinstance(command, str):
        return command
    return shlex.join(list(command))


class CommandRunner:
    """Runs external commands, honouring dry-run."""

    def __init__(
        self,
        dry_run: bool = False,
        console: Optional[Console] = None,
        timeout: Optional[int] = None,
    ):
        self.dry_run = dry_run
        self.console = console or Console()
        self.timeout = timeout

    def announce(self, command: Command) -> bool:
        """Record a mutating action.

        Returns:
            True when the action must be skipped (dry-run mode)
        """
        display = render(command)
        if self.dry_run:
            logger.info(f"[DRY-RUN] {display}")
            self.console.print(f"[yellow]\\[DRY-RUN][/yellow] {escape(display)}")
            return True
        logger.info(f"Running: {display}")
        return False

    def run(
        self,
        argv: Sequence[str],
        *,
        mutating: bool = True,
        check: bool = True,
        env: Optional[Dict[str, str]] = None,
        timeout: Optional[int] = None,
    ) -> CommandResult:
        """Run a command.

        Args:
            argv: Program and arguments
            mutating: False for read-only queries, which run even in dry-run
            check: Raise CommandError on non-zero exit
            env: Extra environment variables
            timeout: Seconds before the command is abandoned

        Returns:
            CommandResult (a synthetic success for skipped dry-run commands)

        Raises:
            CommandError: Non-zero exit with check=True, missing program, or timeout
        """
        argv = [str(arg) for arg in argv]

        if mutating:
            if self.announce(argv):
                return CommandResult(argv=argv)
        else:
            logger.debug(f"Query: {render(argv)}")

        full_env = None
        if env:
            full_env = dict(os.environ)
            full_env.update(env)

        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                env=full_env,
                timeout=timeout or self.timeout,
                check=False,
            )
        except FileNotFoundError:
            if check:
                raise CommandError(argv, 127, f"{argv[0]}: command not found") from None
            return CommandResult(argv=argv, returncode=127, stderr=f"{argv[0]}: command not found")
        except subprocess.TimeoutExpired:
            raise CommandError(argv, -1, "timed out") from None

        result = CommandResult(
            argv=argv,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
        if check and not result.ok:
            raise CommandError(argv, result.returncode, result.stderr)
        return result

    def query(self, argv: Sequence[str], **kwargs) -> CommandResult:
        """Run a read-only command without raising on non-zero exit."""
        return self.run(argv, mutating=False, check=False, **kwargs)

    def shell(self, script: str, *, env: Optional[Dict[str, str]] = None) -> CommandResult:
        """Run a shell pipeline (e.g. ``curl ... | bash``) as one mutating action."""
        return self.run(["bash", "-c", script], env=env)
