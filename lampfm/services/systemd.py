"""systemd init system backend."""
from typing import List

from lampfm.core.runner import CommandRunner
from lampfm.services.base import InitSystem


def control_command(action: str, service: str) -> List[str]:
    return ["systemctl", action, service]


class SystemdManager(InitSystem):
    """Queries and controls units with systemctl."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def unit_exists(self, service: str) -> bool:
        result = self.runner.query(
            ["systemctl", "list-unit-files", "--no-legend", "--no-pager", f"{service}.service"]
        )
        return result.ok and any(
            line.split()[0] == f"{service}.service"
            for line in result.stdout.splitlines()
            if line.strip()
        )

    def is_active(self, service: str) -> bool:
        return self.runner.query(["systemctl", "is-active", "--quiet", service]).ok

    def boot_state(self, service: str) -> str:
        result = self.runner.query(["systemctl", "is-enabled", service])
        return result.stdout.strip() or "disabled"

    def control(self, action: str, service: str) -> None:
        self.runner.run(control_command(action, service))

    def reload(self, service: str) -> None:
        self.runner.run(control_command("reload", service))
