"""Backend bundles handed to workflows."""
from dataclasses import dataclass
from typing import Optional

from lampfm.core.runner import CommandRunner
from lampfm.services.apache import ApacheServer
from lampfm.services.apt import AptPackageManager
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
from lampfm.services.certbot import Certbot
from lampfm.services.extras import CurlInstaller, MysqlDatabase, UfwFirewall
from lampfm.services.host import LocalFileSystem, LocalHostProbe
from lampfm.services.memory import (
    MemoryCertificateTool,
    MemoryDatabase,
    MemoryFileSystem,
    MemoryFirewall,
    MemoryHostProbe,
    MemoryInitSystem,
    MemoryInstaller,
    MemoryPackageManager,
    MemorySystem,
    MemoryWebServer,
)
from lampfm.services.systemd import SystemdManager


@dataclass
class Backends:
    """Every external collaborator a workflow may touch."""
    packages: PackageManager
    init: InitSystem
    web: WebServer
    certs: CertificateTool
    firewall: Firewall
    database: Database
    installer: RemoteInstaller
    files: FileSystem
    probe: HostProbe


def local_backends(runner: CommandRunner) -> Backends:
    """Backends that act on the real host."""
    return Backends(
        packages=AptPackageManager(runner),
        init=SystemdManager(runner),
        web=ApacheServer(runner),
        certs=Certbot(runner),
        firewall=UfwFirewall(runner),
        database=MysqlDatabase(runner),
        installer=CurlInstaller(runner),
        files=LocalFileSystem(runner),
        probe=LocalHostProbe(),
    )


def memory_backends(runner: CommandRunner, system: Optional[MemorySystem] = None) -> Backends:
    """Backends that simulate the host in ``system``."""
    system = system if system is not None else MemorySystem()
    return Backends(
        packages=MemoryPackageManager(runner, system),
        init=MemoryInitSystem(runner, system),
        web=MemoryWebServer(runner, system),
        certs=MemoryCertificateTool(runner, system),
        firewall=MemoryFirewall(runner, system),
        database=MemoryDatabase(runner, system),
        installer=MemoryInstaller(runner, system),
        files=MemoryFileSystem(runner, system),
        probe=MemoryHostProbe(system),
    )
