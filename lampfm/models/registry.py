"""Registry record models."""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Component:
    """A named feature bundle mapped to one or more apt packages."""
    name: str                  # stable identifier, e.g. "apache2"
    title: str                 # human label, e.g. "Apache2"
    packages: Tuple[str, ...]  # install order matters

    def __post_init__(self):
        if not self.name:
            raise ValueError("Component must have a name")
        if not self.packages:
            raise ValueError(f"Component '{self.name}' has no packages")


@dataclass(frozen=True)
class ServiceBinding:
    """Maps an installed package to the systemd unit it provides."""
    package: str
    service: str
