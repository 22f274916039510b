"""Data models for lampfm."""
from lampfm.models.registry import Component, ServiceBinding
from lampfm.models.results import (
    ActionResult,
    InstallOutcome,
    InstallReport,
    PackageResult,
    PackageStatus,
    ServiceAction,
    ServiceState,
    ServiceStatus,
)
from lampfm.models.site import Site, VirtualHost

__all__ = [
    'ActionResult',
    'Component',
    'InstallOutcome',
    'InstallReport',
    'PackageResult',
    'PackageStatus',
    'ServiceAction',
    'ServiceBinding',
    'ServiceState',
    'ServiceStatus',
    'Site',
    'VirtualHost',
]
