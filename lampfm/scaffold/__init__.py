"""Site and virtual host scaffolding."""

from .site import SiteScaffolder, new_site
from .templates import TemplateEngine
from .vhost import VirtualHostManager, add_virtual_host

__all__ = [
    "SiteScaffolder",
    "TemplateEngine",
    "VirtualHostManager",
    "add_virtual_host",
    "new_site",
]
