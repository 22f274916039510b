"""Apache virtual host creation."""
from pathlib import Path
from typing import Optional

from lampfm.core.context import RunContext
from lampfm.core.errors import ConflictError
from lampfm.core.logger import get_logger
from lampfm.models.site import VirtualHost
from lampfm.scaffold.templates import TemplateEngine

logger = get_logger(__name__)

WEB_SERVICE = "apache2"


class VirtualHostManager:
    """Writes, enables and activates Apache virtual hosts."""

    def __init__(self, ctx: RunContext, engine: Optional[TemplateEngine] = None):
        self.ctx = ctx
        self.files = ctx.backends.files
        self.engine = engine or TemplateEngine()

    def config_path(self, domain: str) -> Path:
        return Path(self.ctx.config.sites_available) / f"{domain}.conf"

    def render(self, domain: str, document_root: str) -> str:
        return self.engine.render_template("vhost.conf", {
            "domain": domain,
            "document_root": document_root,
            "log_dir": self.ctx.config.apache_log_dir,
        })

    def add(self, domain: str, document_root: str) -> VirtualHost:
        """Create ``<sites_available>/<domain>.conf``, enable it, reload Apache.

        No rollback: a failed a2ensite or reload leaves the file in place.

        Raises:
            ValueError: Domain or document root missing
            ConflictError: A config file for the domain already exists
            CommandError: a2ensite or reload failed
        """
        if not domain or not document_root:
            raise ValueError("Both domain and document root are required")

        conf = self.config_path(domain)
        if self.files.exists(conf):
            raise ConflictError(f"vhost '{domain}' already exists at {conf}")

        logger.info(f"Writing virtual host {domain} -> {document_root}")
        self.files.write_text(conf, self.render(domain, document_root))

        vhost = VirtualHost(domain=domain, document_root=document_root, config_path=conf)
        self.enable(vhost)
        return vhost

    def enable(self, vhost: VirtualHost) -> None:
        """Activate a written virtual host; safe to repeat."""
        logger.info(f"Enabling virtual host {vhost.domain}")
        self.ctx.backends.web.enable_site(vhost.config_path.name)
        self.ctx.backends.init.reload(WEB_SERVICE)
        vhost.enabled = True


def add_virtual_host(ctx: RunContext, domain: str, document_root: str) -> VirtualHost:
    return VirtualHostManager(ctx).add(domain, document_root)
