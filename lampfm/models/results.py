"""Structured results returned by lampfm workflows."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class InstallOutcome(Enum):
    """Per-package result of an install run."""
    ALREADY_PRESENT = "already-present"
    INSTALLED = "installed"
    FAILED = "failed"


@dataclass
class PackageResult:
    """Outcome of a single package during an install run."""
    component: str
    package: str
    outcome: InstallOutcome
    error: Optional[str] = None


@dataclass
class ActionResult:
    """Outcome of a fixed post-install action."""
    description: str
    ok: bool
    error: Optional[str] = None


@dataclass
class InstallReport:
    """Everything an install run did (or would have done in dry-run)."""
    dry_run: bool = False
    packages: List[PackageResult] = field(default_factory=list)
    actions: List[ActionResult] = field(default_factory=list)

    def add(self, result: PackageResult) -> None:
        self.packages.append(result)

    def with_outcome(self, outcome: InstallOutcome) -> List[PackageResult]:
        return [r for r in self.packages if r.outcome == outcome]

    @property
    def installed(self) -> List[PackageResult]:
        return self.with_outcome(InstallOutcome.INSTALLED)

    @property
    def failed(self) -> List[PackageResult]:
        return self.with_outcome(InstallOutcome.FAILED)

    @property
    def already_present(self) -> List[PackageResult]:
        return self.with_outcome(InstallOutcome.ALREADY_PRESENT)

    @property
    def targeted(self) -> List[str]:
        """Package names in the order they were processed."""
        return [r.package for r in self.packages]


@dataclass
class PackageStatus:
    """Presence of one registry package."""
    component: str
    package: str
    present: bool


class ServiceState(Enum):
    """Observed state of a bound service."""
    NOT_INSTALLED = "not installed"
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass
class ServiceStatus:
    """State of one bound service."""
    service: str
    package: str
    state: ServiceState
    boot: Optional[str] = None  # systemctl is-enabled output, None if no unit

    @property
    def enabled(self) -> bool:
        return self.boot == "enabled"


class ServiceAction(Enum):
    """Actions delegated verbatim to the init system."""
    START = "start"
    STOP = "stop"
    RESTART = "restart"
    ENABLE = "enable"
    DISABLE = "disable"

    @property
    def past_tense(self) -> str:
        return {
            ServiceAction.START: "started",
            ServiceAction.STOP: "stopped",
            ServiceAction.RESTART: "restarted",
            ServiceAction.ENABLE: "enabled",
            ServiceAction.DISABLE: "disabled",
        }[self]
