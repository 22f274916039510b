"""apt/dpkg package manager backend."""
from pathlib import Path
from typing import List

from lampfm.core.logger import get_logger
from lampfm.core.runner import CommandRunner
from lampfm.services.base import PackageManager

logger = get_logger(__name__)

NONINTERACTIVE = {"DEBIAN_FRONTEND": "noninteractive"}
SOURCES_DIR = Path("/etc/apt/sources.list.d")


def update_command() -> List[str]:
    return ["apt-get", "update", "-qq"]


def upgrade_commands(full: bool = False) -> List[List[str]]:
    commands = [["apt-get", "upgrade", "-y", "-qq"]]
    if full:
        commands += [
            ["apt-get", "dist-upgrade", "-y", "-qq"],
            ["apt-get", "autoremove", "-y", "-qq"],
            ["apt-get", "autoclean", "-qq"],
        ]
    return commands


def install_command(package: str) -> List[str]:
    return ["apt-get", "install", "-y", "-qq", package]


def source_setup_script(setup_url: str) -> str:
    return f"curl -fsSL {setup_url} | bash -"


class AptPackageManager(PackageManager):
    """Drives apt-get and dpkg through the command runner."""

    def __init__(self, runner: CommandRunner, sources_dir: Path = SOURCES_DIR):
        self.runner = runner
        self.sources_dir = Path(sources_dir)

    def refresh_index(self) -> None:
        self.runner.run(update_command())

    def upgrade(self, full: bool = False) -> None:
        for argv in upgrade_commands(full):
            self.runner.run(argv, env=NONINTERACTIVE)

    def is_installed(self, package: str) -> bool:
        # dpkg -s exits 0 for packages in "install ok installed" and also for
        # config-files leftovers, so check the Status line too.
        result = self.runner.query(["dpkg", "-s", package])
        if not result.ok:
            return False
        for line in result.stdout.splitlines():
            if line.startswith("Status:"):
                return line.split()[-1] == "installed"
        return True

    def install(self, package: str) -> None:
        self.runner.run(install_command(package), env=NONINTERACTIVE)

    def has_source(self, name: str) -> bool:
        source_file = self.sources_dir / f"{name}.list"
        try:
            return name in source_file.read_text()
        except OSError:
            return False

    def add_source(self, name: str, setup_url: str) -> None:
        logger.info(f"Adding {name} repository")
        self.runner.shell(source_setup_script(setup_url))
