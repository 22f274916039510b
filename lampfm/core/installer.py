"""Install workflow: bring every registry component onto the host."""
from typing import Iterable, List, Optional

from lampfm.core.context import RunContext
from lampfm.core.errors import CommandError, PreconditionError
from lampfm.core.logger import get_logger
from lampfm.models.registry import Component
from lampfm.models.results import (
    ActionResult,
    InstallOutcome,
    InstallReport,
    PackageResult,
)

logger = get_logger(__name__)

NODESOURCE = "nodesource"


class InstallWorkflow:
    """Best-effort batch install of registry components.

    A failing package is logged and recorded; the batch continues. Only
    refreshing the index or applying upgrades can abort the run.
    """

    def __init__(self, ctx: RunContext):
        self.ctx = ctx
        self.packages = ctx.backends.packages
        self.init = ctx.backends.init

    def select(self, names: Optional[Iterable[str]] = None) -> List[Component]:
        """Resolve component names to registry order.

        Raises:
            KeyError: A name is not in the registry
        """
        registry = self.ctx.registry
        if not names:
            return list(registry.components)
        wanted = set(names)
        for name in wanted:
            registry.component(name)
        return [c for c in registry.components if c.name in wanted]

    def run(self, names: Optional[Iterable[str]] = None, upgrade: bool = True) -> InstallReport:
        """Install all (or the named) components.

        Args:
            names: Component names to restrict the run to
            upgrade: Apply pending upgrades per the configured policy

        Returns:
            InstallReport with one PackageResult per targeted package
        """
        components = self.select(names)
        report = InstallReport(dry_run=self.ctx.dry_run)

        self.prepare_system(upgrade)

        logger.info("Installing missing components")
        for component in components:
            self._before_component(component)
            for package in component.packages:
                report.add(self.install_package(component, package))

        self._after_install(components, report)

        logger.info(
            f"Install finished: {len(report.installed)} installed, "
            f"{len(report.already_present)} already present, {len(report.failed)} failed"
        )
        return report

    def prepare_system(self, upgrade: bool = True) -> None:
        """Refresh the index and apply upgrades; failures abort the run."""
        policy = self.ctx.config.upgrade_policy
        try:
            logger.info("Updating package index")
            self.packages.refresh_index()
            if upgrade and policy != "none":
                logger.info("Upgrading installed packages")
                self.packages.upgrade(full=policy == "full")
        except CommandError as e:
            raise PreconditionError(f"Package index maintenance failed: {e}") from e

    def install_package(self, component: Component, package: str) -> PackageResult:
        if self.packages.is_installed(package):
            logger.info(f"{package} already installed")
            return PackageResult(component.name, package, InstallOutcome.ALREADY_PRESENT)

        logger.info(f"Installing {package}")
        try:
            self.packages.install(package)
        except CommandError as e:
            logger.error(f"Failed to install {package}: {e}")
            return PackageResult(component.name, package, InstallOutcome.FAILED, str(e))

        return PackageResult(component.name, package, InstallOutcome.INSTALLED)

    def _before_component(self, component: Component) -> None:
        logger.info(f"Component: {component.title}")
        if component.name == "nodejs" and not self.packages.has_source(NODESOURCE):
            try:
                self.packages.add_source(NODESOURCE, self.ctx.config.nodesource_url)
            except CommandError as e:
                logger.error(f"Failed to add NodeSource repository: {e}")

    def _after_install(self, components: List[Component], report: InstallReport) -> None:
        names = {c.name for c in components}

        if "apache2" in names:
            self._action(report, "Enable Apache rewrite module",
                         self.ctx.backends.web.enable_module, "rewrite")
            self._action(report, "Reload Apache", self.init.reload, "apache2")

        if "docker" in names:
            self._action(report, "Enable Docker at boot", self.init.control, "enable", "docker")
            self._action(report, "Start Docker", self.init.control, "start", "docker")

    def _action(self, report: InstallReport, description: str, func, *args) -> None:
        logger.info(description)
        try:
            func(*args)
        except CommandError as e:
            logger.error(f"{description} failed: {e}")
            report.actions.append(ActionResult(description, False, str(e)))
            return
        report.actions.append(ActionResult(description, True))


def install_all(ctx: RunContext, names: Optional[Iterable[str]] = None, upgrade: bool = True) -> InstallReport:
    """Run the install workflow on ``ctx``."""
    return InstallWorkflow(ctx).run(names, upgrade=upgrade)
