"""Local file system and host probe backends."""
import os
import socket
from pathlib import Path
from typing import List

from lampfm.core.errors import CommandError
from lampfm.core.runner import CommandRunner
from lampfm.services.base import FileSystem, HostProbe


def chown_command(path: Path, user: str, group: str) -> List[str]:
    return ["chown", "-R", f"{user}:{group}", str(path)]


class LocalFileSystem(FileSystem):
    """Writes files directly; ownership changes go through chown."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def make_dir(self, path: Path) -> None:
        argv = ["mkdir", "-p", str(path)]
        if self.runner.announce(argv):
            return
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CommandError(argv, 1, str(e)) from e

    def write_text(self, path: Path, content: str, executable: bool = False) -> None:
        if self.runner.announce(f"write {path}"):
            return
        path = Path(path)
        try:
            path.write_text(content)
            if executable:
                path.chmod(path.stat().st_mode | 0o111)
        except OSError as e:
            raise CommandError(["write", str(path)], 1, str(e)) from e

    def chown(self, path: Path, user: str, group: str) -> None:
        self.runner.run(chown_command(path, user, group))


class LocalHostProbe(HostProbe):
    def is_privileged(self) -> bool:
        return os.geteuid() == 0

    def is_online(self, host: str, port: int, timeout: float) -> bool:
        try:
            with socket.create_connection((host, port), timeout=timeout):
                return True
        except OSError:
            return False
