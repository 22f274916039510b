"""Backend contracts between lampfm workflows and the host.

Workflows only talk to these interfaces. Each has a real implementation that
shells out (apt, systemctl, a2ensite, certbot, ufw, mysql, curl) and an
in-memory one in lampfm.services.memory used by tests and mock mode.
Mutating methods raise CommandError on failure; queries never raise.
"""
from abc import ABC, abstractmethod
from pathlib import Path


class PackageManager(ABC):
    """System package manager (apt/dpkg)."""

    @abstractmethod
    def refresh_index(self) -> None:
        """Refresh the package index."""

    @abstractmethod
    def upgrade(self, full: bool = False) -> None:
        """Apply pending upgrades; ``full`` adds dist-upgrade and cleanup."""

    @abstractmethod
    def is_installed(self, package: str) -> bool:
        """Return True if ``package`` is installed."""

    @abstractmethod
    def install(self, package: str) -> None:
        """Install one package non-interactively."""

    @abstractmethod
    def has_source(self, name: str) -> bool:
        """Return True if an apt source list named ``name`` is configured."""

    @abstractmethod
    def add_source(self, name: str, setup_url: str) -> None:
        """Run a vendor setup script that registers an apt source."""


class InitSystem(ABC):
    """Service manager (systemd)."""

    @abstractmethod
    def unit_exists(self, service: str) -> bool:
        """Return True if the init system knows ``<service>.service``."""

    @abstractmethod
    def is_active(self, service: str) -> bool:
        """Return True if the unit is running."""

    @abstractmethod
    def boot_state(self, service: str) -> str:
        """Return the enablement state (enabled, disabled, static, ...)."""

    @abstractmethod
    def control(self, action: str, service: str) -> None:
        """Run start/stop/restart/enable/disable on a unit."""

    @abstractmethod
    def reload(self, service: str) -> None:
        """Reload a unit's configuration."""


class WebServer(ABC):
    """Apache module and site activation helpers."""

    @abstractmethod
    def enable_module(self, module: str) -> None:
        """Enable an Apache module (idempotent)."""

    @abstractmethod
    def enable_site(self, config_name: str) -> None:
        """Enable a site from sites-available (idempotent)."""


class CertificateTool(ABC):
    """TLS certificate issuance (certbot)."""

    @abstractmethod
    def obtain(self, domain: str, email: str) -> None:
        """Obtain and install a certificate for ``domain``."""


class Firewall(ABC):
    """Host firewall (ufw)."""

    @abstractmethod
    def allow(self, rule: str) -> None:
        """Allow an application profile or service."""

    @abstractmethod
    def enable(self) -> None:
        """Activate the firewall."""


class Database(ABC):
    """SQL client for the local database server."""

    @abstractmethod
    def execute(self, sql: str) -> None:
        """Run a statement as the administrative user."""


class RemoteInstaller(ABC):
    """Fetches an install script and pipes it to an interpreter."""

    @abstractmethod
    def run_script(self, url: str, interpreter: str = "bash", args: str = "") -> None:
        """Download ``url`` and execute it with ``interpreter``."""


class FileSystem(ABC):
    """File writes for scaffolded sites and virtual hosts."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Return True if ``path`` exists."""

    @abstractmethod
    def make_dir(self, path: Path) -> None:
        """Create a directory and its parents."""

    @abstractmethod
    def write_text(self, path: Path, content: str, executable: bool = False) -> None:
        """Write a file, optionally marking it executable."""

    @abstractmethod
    def chown(self, path: Path, user: str, group: str) -> None:
        """Recursively change ownership."""


class HostProbe(ABC):
    """Startup precondition checks."""

    @abstractmethod
    def is_privileged(self) -> bool:
        """Return True when running with root privilege."""

    @abstractmethod
    def is_online(self, host: str, port: int, timeout: float) -> bool:
        """Return True if ``host:port`` answers within ``timeout`` seconds."""
