"""Apache helpers (a2enmod / a2ensite)."""
from lampfm.core.runner import CommandRunner
from lampfm.services.base import WebServer


class ApacheServer(WebServer):
    """Enables Apache modules and sites via the Debian helper scripts."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def enable_module(self, module: str) -> None:
        self.runner.run(["a2enmod", "-q", module])

    def enable_site(self, config_name: str) -> None:
        self.runner.run(["a2ensite", "-q", config_name])
