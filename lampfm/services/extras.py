"""Firewall, database and remote-script backends."""
from typing import List

from lampfm.core.runner import CommandRunner
from lampfm.services.base import Database, Firewall, RemoteInstaller


def ufw_allow_command(rule: str) -> List[str]:
    return ["ufw", "allow", rule]


def ufw_enable_command() -> List[str]:
    # --force skips ufw's "may disrupt existing ssh connections" prompt
    return ["ufw", "--force", "enable"]


def mysql_command(sql: str) -> List[str]:
    return ["mysql", "-e", sql]


def remote_script(url: str, interpreter: str = "bash", args: str = "") -> str:
    script = f"curl -fsSL {url} | {interpreter}"
    if args:
        script += f" -- {args}"
    return script


class UfwFirewall(Firewall):
    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def allow(self, rule: str) -> None:
        self.runner.run(ufw_allow_command(rule))

    def enable(self) -> None:
        self.runner.run(ufw_enable_command())


class MysqlDatabase(Database):
    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def execute(self, sql: str) -> None:
        self.runner.run(mysql_command(sql))


class CurlInstaller(RemoteInstaller):
    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def run_script(self, url: str, interpreter: str = "bash", args: str = "") -> None:
        self.runner.shell(remote_script(url, interpreter, args))
