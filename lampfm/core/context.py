"""Per-invocation run context passed to every workflow."""
from dataclasses import dataclass
from typing import Optional

from lampfm.core.config import LampfmConfig
from lampfm.core.registry import Registry
from lampfm.core.runner import CommandRunner
from lampfm.services.backends import Backends, local_backends


@dataclass
class RunContext:
    """Configuration, static tables and backends for one command."""
    config: LampfmConfig
    registry: Registry
    runner: CommandRunner
    backends: Backends

    @property
    def dry_run(self) -> bool:
        return self.runner.dry_run

    @classmethod
    def create(
        cls,
        config: Optional[LampfmConfig] = None,
        registry: Optional[Registry] = None,
        runner: Optional[CommandRunner] = None,
        backends: Optional[Backends] = None,
    ) -> "RunContext":
        """Build a context, defaulting to real backends on this host."""
        config = config or LampfmConfig()
        runner = runner or CommandRunner(timeout=config.command_timeout)
        return cls(
            config=config,
            registry=registry or Registry.load(),
            runner=runner,
            backends=backends or local_backends(runner),
        )
