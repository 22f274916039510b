"""Static component and service tables.

Loaded once per invocation from ``lampfm/data/registry.yml`` and never
mutated afterwards.
"""
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import yaml

from lampfm.core.errors import RegistryError
from lampfm.core.logger import get_logger
from lampfm.models.registry import Component, ServiceBinding

logger = get_logger(__name__)

DEFAULT_REGISTRY = Path(__file__).parent.parent / "data" / "registry.yml"


class Registry:
    """Component -> packages and package -> service lookups."""

    def __init__(self, components: Sequence[Component], bindings: Sequence[ServiceBinding] = ()):
        self._components: Dict[str, Component] = {}
        for component in components:
            if component.name in self._components:
                raise RegistryError(f"Duplicate component: {component.name}")
            self._components[component.name] = component

        packages = {p for c in self._components.values() for p in c.packages}
        self._services: Dict[str, ServiceBinding] = {}
        for binding in bindings:
            if not binding.package or not binding.service:
                raise RegistryError(f"Incomplete service binding: {binding}")
            if binding.package not in packages:
                raise RegistryError(f"Service binding for unregistered package: {binding.package}")
            if binding.package in self._services:
                raise RegistryError(f"Duplicate service binding for package: {binding.package}")
            self._services[binding.package] = binding

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "Registry":
        """Load and validate a registry YAML file.

        Args:
            path: Registry file, defaults to the packaged registry.yml

        Raises:
            RegistryError: File missing or any record invalid
        """
        registry_file = Path(path) if path else DEFAULT_REGISTRY
        if not registry_file.exists():
            raise RegistryError(f"Registry file not found: {registry_file}")

        try:
            with open(registry_file) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise RegistryError(f"Invalid YAML in {registry_file}: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Registry":
        if not isinstance(data, dict) or not isinstance(data.get("components"), list):
            raise RegistryError("Registry must define a 'components' list")

        components = [_parse_component(entry) for entry in data["components"]]
        bindings = [_parse_binding(entry) for entry in data.get("services") or []]

        registry = cls(components, bindings)
        logger.debug(
            f"Loaded registry: {len(components)} components, {len(bindings)} services"
        )
        return registry

    @property
    def components(self) -> Tuple[Component, ...]:
        return tuple(self._components.values())

    @property
    def bindings(self) -> Tuple[ServiceBinding, ...]:
        return tuple(self._services.values())

    def component(self, name: str) -> Component:
        """Exact-match lookup; unknown names raise KeyError."""
        return self._components[name]

    def packages_for(self, name: str) -> Tuple[str, ...]:
        return self._components[name].packages

    def service_for(self, package: str) -> Optional[str]:
        binding = self._services.get(package)
        return binding.service if binding else None

    def all_packages(self) -> List[str]:
        """Every package in install order."""
        return [pkg for component in self._components.values() for pkg in component.packages]

    def __contains__(self, name: str) -> bool:
        return name in self._components


def _parse_component(entry) -> Component:
    if not isinstance(entry, dict) or not entry.get("name"):
        raise RegistryError(f"Component entry must have a name: {entry!r}")

    name = str(entry["name"])
    packages = entry.get("packages")
    if not isinstance(packages, list) or not packages:
        raise RegistryError(f"Component '{name}' must list at least one package")
    if not all(isinstance(pkg, str) and pkg for pkg in packages):
        raise RegistryError(f"Component '{name}' has an invalid package name")
    if len(set(packages)) != len(packages):
        raise RegistryError(f"Component '{name}' lists a package twice")

    return Component(name=name, title=str(entry.get("title") or name), packages=tuple(packages))


def _parse_binding(entry) -> ServiceBinding:
    if not isinstance(entry, dict):
        raise RegistryError(f"Service entry must be a mapping: {entry!r}")
    return ServiceBinding(package=str(entry.get("package") or ""), service=str(entry.get("service") or ""))
