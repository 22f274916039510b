"""Read-only package and service status."""
from typing import List

from lampfm.core.context import RunContext
from lampfm.models.results import PackageStatus, ServiceState, ServiceStatus


def status_packages(ctx: RunContext) -> List[PackageStatus]:
    """Presence of every registry package, in install order."""
    packages = ctx.backends.packages
    return [
        PackageStatus(component.name, package, packages.is_installed(package))
        for component in ctx.registry.components
        for package in component.packages
    ]


def status_services(ctx: RunContext) -> List[ServiceStatus]:
    """State and boot enablement of every bound service."""
    init = ctx.backends.init
    statuses = []
    for binding in ctx.registry.bindings:
        service = binding.service
        if not init.unit_exists(service):
            statuses.append(ServiceStatus(service, binding.package, ServiceState.NOT_INSTALLED))
            continue
        state = ServiceState.RUNNING if init.is_active(service) else ServiceState.STOPPED
        statuses.append(ServiceStatus(service, binding.package, state, init.boot_state(service)))
    return statuses
