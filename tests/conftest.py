"""Shared test fixtures for lampfm tests."""
import io
import re
from pathlib import Path
from typing import List, Tuple

import pytest
from rich.console import Console

from lampfm.core.config import LampfmConfig
from lampfm.core.context import RunContext
from lampfm.core.logger import setup_logging
from lampfm.core.registry import Registry
from lampfm.core.runner import CommandRunner
from lampfm.services.backends import memory_backends
from lampfm.services.memory import MemorySystem

LOG_LINE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} \[(\w+)\] (.*)$")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep host configuration out of tests."""
    for name in ("LAMPFM_CONFIG", "LAMPFM_MOCK", "LAMPFM_LOG_FILE", "LAMPFM_WEB_ROOT",
                 "LAMPFM_SITES_AVAILABLE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def registry():
    """The packaged component registry."""
    return Registry.load()


@pytest.fixture
def system(registry):
    """Simulated host where installing a bound package creates its unit."""
    return MemorySystem(package_units={b.package: b.service for b in registry.bindings})


@pytest.fixture
def make_context(tmp_path, registry):
    """Factory for RunContexts over in-memory backends.

    Each context logs to ``tmp_path/<log_name>``.
    """
    def _make(system: MemorySystem, dry_run: bool = False, log_name: str = "lampfm.log", **overrides):
        config = LampfmConfig(
            log_file=str(tmp_path / log_name),
            web_root=str(tmp_path / "www"),
            sites_available=str(tmp_path / "sites-available"),
            **overrides,
        )
        setup_logging(config.log_file, max_bytes=config.log_max_bytes)
        runner = CommandRunner(dry_run=dry_run, console=Console(file=io.StringIO(), width=200))
        return RunContext(
            config=config,
            registry=registry,
            runner=runner,
            backends=memory_backends(runner, system),
        )

    return _make


@pytest.fixture
def ctx(make_context, system):
    """RunContext over the default simulated host."""
    return make_context(system)


def read_log(path) -> List[Tuple[str, str]]:
    """Parse a lampfm log file into (level, message) pairs."""
    entries = []
    for line in Path(path).read_text().splitlines():
        match = LOG_LINE.match(line)
        assert match, f"Malformed log line: {line!r}"
        entries.append((match.group(1), match.group(2)))
    return entries


@pytest.fixture
def log_reader():
    """Return the log parser."""
    return read_log
