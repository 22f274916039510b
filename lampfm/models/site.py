"""Scaffolded site and virtual host models."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass
class Site:
    """A site directory created under the web root."""
    name: str
    path: Path
    files: List[Path] = field(default_factory=list)


@dataclass
class VirtualHost:
    """An Apache virtual host written to sites-available."""
    domain: str
    document_root: str
    config_path: Path
    enabled: bool = False
