"""In-memory backends.

Used for tests and for ``LAMPFM_MOCK=1``. Each backend announces the same
command its real counterpart would run, so logs and dry-run output match,
then mutates a shared MemorySystem instead of the host. ``calls`` records
only mutations that actually happened (nothing in dry-run).
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Set, Tuple

from lampfm.core.errors import CommandError
from lampfm.core.runner import CommandRunner
from lampfm.services import apt, certbot, extras, host, systemd
from lampfm.services.base import (
    CertificateTool,
    Database,
    FileSystem,
    Firewall,
    HostProbe,
    InitSystem,
    PackageManager,
    RemoteInstaller,
    WebServer,
)


@dataclass
class Unit:
    """A simulated systemd unit."""
    active: bool = False
    boot: str = "disabled"


@dataclass
class MemorySystem:
    """Simulated host state shared by all in-memory backends."""
    installed: Set[str] = field(default_factory=set)
    broken_packages: Set[str] = field(default_factory=set)
    # package -> unit name created when the package gets installed
    package_units: Dict[str, str] = field(default_factory=dict)
    units: Dict[str, Unit] = field(default_factory=dict)
    sources: Set[str] = field(default_factory=set)
    files: Dict[str, str] = field(default_factory=dict)
    executables: Set[str] = field(default_factory=set)
    dirs: Set[str] = field(default_factory=set)
    owners: Dict[str, str] = field(default_factory=dict)
    modules: Set[str] = field(default_factory=set)
    sites: Set[str] = field(default_factory=set)
    certificates: Dict[str, str] = field(default_factory=dict)
    firewall_rules: List[str] = field(default_factory=list)
    firewall_enabled: bool = False
    statements: List[str] = field(default_factory=list)
    scripts: List[str] = field(default_factory=list)
    privileged: bool = True
    online: bool = True
    calls: List[Tuple[str, ...]] = field(default_factory=list)

    def record(self, *call: str) -> None:
        self.calls.append(tuple(call))

    def calls_named(self, name: str) -> List[Tuple[str, ...]]:
        return [call for call in self.calls if call[0] == name]


def _fail(argv: List[str], message: str) -> None:
    raise CommandError(argv, 1, message)


class _MemoryBackend:
    def __init__(self, runner: CommandRunner, system: MemorySystem):
        self.runner = runner
        self.system = system


class MemoryPackageManager(_MemoryBackend, PackageManager):
    def refresh_index(self) -> None:
        if self.runner.announce(apt.update_command()):
            return
        self.system.record("refresh_index")

    def upgrade(self, full: bool = False) -> None:
        for argv in apt.upgrade_commands(full):
            if self.runner.announce(argv):
                continue
            self.system.record("upgrade", argv[1])

    def is_installed(self, package: str) -> bool:
        return package in self.system.installed

    def install(self, package: str) -> None:
        argv = apt.install_command(package)
        if self.runner.announce(argv):
            return
        self.system.record("install", package)
        if package in self.system.broken_packages:
            _fail(argv, f"E: Unable to locate package {package}")
        self.system.installed.add(package)
        unit = self.system.package_units.get(package)
        if unit and unit not in self.system.units:
            self.system.units[unit] = Unit(active=True, boot="enabled")

    def has_source(self, name: str) -> bool:
        return name in self.system.sources

    def add_source(self, name: str, setup_url: str) -> None:
        if self.runner.announce(apt.source_setup_script(setup_url)):
            return
        self.system.record("add_source", name)
        self.system.sources.add(name)


class MemoryInitSystem(_MemoryBackend, InitSystem):
    def unit_exists(self, service: str) -> bool:
        return service in self.system.units

    def is_active(self, service: str) -> bool:
        unit = self.system.units.get(service)
        return bool(unit and unit.active)

    def boot_state(self, service: str) -> str:
        unit = self.system.units.get(service)
        return unit.boot if unit else "disabled"

    def control(self, action: str, service: str) -> None:
        argv = systemd.control_command(action, service)
        if self.runner.announce(argv):
            return
        self.system.record("control", action, service)
        unit = self.system.units.get(service)
        if unit is None:
            _fail(argv, f"Unit {service}.service not found.")
        if action in ("start", "restart"):
            unit.active = True
        elif action == "stop":
            unit.active = False
        elif action == "enable":
            unit.boot = "enabled"
        elif action == "disable":
            unit.boot = "disabled"

    def reload(self, service: str) -> None:
        argv = systemd.control_command("reload", service)
        if self.runner.announce(argv):
            return
        self.system.record("reload", service)
        if service not in self.system.units:
            _fail(argv, f"Unit {service}.service not found.")


class MemoryWebServer(_MemoryBackend, WebServer):
    def enable_module(self, module: str) -> None:
        if self.runner.announce(["a2enmod", "-q", module]):
            return
        self.system.record("enable_module", module)
        self.system.modules.add(module)

    def enable_site(self, config_name: str) -> None:
        if self.runner.announce(["a2ensite", "-q", config_name]):
            return
        self.system.record("enable_site", config_name)
        self.system.sites.add(config_name)


class MemoryCertificateTool(_MemoryBackend, CertificateTool):
    def obtain(self, domain: str, email: str) -> None:
        if self.runner.announce(certbot.certbot_command(domain, email)):
            return
        self.system.record("obtain", domain, email)
        self.system.certificates[domain] = email


class MemoryFirewall(_MemoryBackend, Firewall):
    def allow(self, rule: str) -> None:
        if self.runner.announce(extras.ufw_allow_command(rule)):
            return
        self.system.record("allow", rule)
        self.system.firewall_rules.append(rule)

    def enable(self) -> None:
        if self.runner.announce(extras.ufw_enable_command()):
            return
        self.system.record("firewall_enable")
        self.system.firewall_enabled = True


class MemoryDatabase(_MemoryBackend, Database):
    def execute(self, sql: str) -> None:
        if self.runner.announce(extras.mysql_command(sql)):
            return
        self.system.record("sql", sql)
        self.system.statements.append(sql)


class MemoryInstaller(_MemoryBackend, RemoteInstaller):
    def run_script(self, url: str, interpreter: str = "bash", args: str = "") -> None:
        if self.runner.announce(["bash", "-c", extras.remote_script(url, interpreter, args)]):
            return
        self.system.record("script", url)
        self.system.scripts.append(url)


class MemoryFileSystem(_MemoryBackend, FileSystem):
    def exists(self, path: Path) -> bool:
        key = str(path)
        return key in self.system.files or key in self.system.dirs

    def make_dir(self, path: Path) -> None:
        if self.runner.announce(["mkdir", "-p", str(path)]):
            return
        self.system.record("make_dir", str(path))
        self.system.dirs.add(str(path))

    def write_text(self, path: Path, content: str, executable: bool = False) -> None:
        if self.runner.announce(f"write {path}"):
            return
        self.system.record("write", str(path))
        self.system.files[str(path)] = content
        if executable:
            self.system.executables.add(str(path))

    def chown(self, path: Path, user: str, group: str) -> None:
        if self.runner.announce(host.chown_command(path, user, group)):
            return
        self.system.record("chown", str(path))
        prefix = str(path)
        for key in list(self.system.files) + list(self.system.dirs):
            if key == prefix or key.startswith(prefix + "/"):
                self.system.owners[key] = f"{user}:{group}"


class MemoryHostProbe(HostProbe):
    def __init__(self, system: MemorySystem):
        self.system = system

    def is_privileged(self) -> bool:
        return self.system.privileged

    def is_online(self, host: str, port: int, timeout: float) -> bool:
        return self.system.online
