"""certbot certificate backend."""
from typing import List

from lampfm.core.runner import CommandRunner
from lampfm.services.base import CertificateTool


def certbot_command(domain: str, email: str) -> List[str]:
    return [
        "certbot", "--apache",
        "-d", domain,
        "--non-interactive", "--agree-tos",
        "-m", email,
    ]


class Certbot(CertificateTool):
    """Issues certificates with certbot's Apache plugin.

    Renewal is left to certbot's own systemd timer.
    """

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def obtain(self, domain: str, email: str) -> None:
        self.runner.run(certbot_command(domain, email))
