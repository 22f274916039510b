"""Site directory scaffolding under the web root."""
from pathlib import Path
from typing import Optional

from lampfm.core.context import RunContext
from lampfm.core.errors import ConflictError
from lampfm.core.logger import get_logger
from lampfm.models.site import Site
from lampfm.scaffold.templates import TemplateEngine

logger = get_logger(__name__)

# file name -> executable
SITE_FILES = {
    "index.php": False,
    "index.py": True,
}


def validate_site_name(name: str) -> None:
    """Reject names that would escape the web root."""
    if not name or not name.strip():
        raise ValueError("Site name is required")
    if "/" in name or "\\" in name or name in (".", ".."):
        raise ValueError(f"Invalid site name: '{name}'")


class SiteScaffolder:
    """Creates placeholder sites owned by the web server user."""

    def __init__(self, ctx: RunContext, engine: Optional[TemplateEngine] = None):
        self.ctx = ctx
        self.files = ctx.backends.files
        self.engine = engine or TemplateEngine()

    def site_path(self, name: str) -> Path:
        return Path(self.ctx.config.web_root) / name

    def create(self, name: str) -> Site:
        """Scaffold ``<web_root>/<name>``.

        Not transactional: if a later step fails, earlier files stay.

        Raises:
            ValueError: Name is empty or contains a path separator
            ConflictError: The directory already exists
            CommandError: chown failed
        """
        validate_site_name(name)
        site_dir = self.site_path(name)

        if self.files.exists(site_dir):
            raise ConflictError(f"Site '{name}' already exists at {site_dir}")

        logger.info(f"Creating site {name} at {site_dir}")
        self.files.make_dir(site_dir)

        site = Site(name=name, path=site_dir)
        for filename, executable in SITE_FILES.items():
            path = site_dir / filename
            content = self.engine.render_template(filename, {"name": name})
            self.files.write_text(path, content, executable=executable)
            site.files.append(path)

        config = self.ctx.config
        self.files.chown(site_dir, config.web_user, config.web_group)
        return site


def new_site(ctx: RunContext, name: str) -> Site:
    return SiteScaffolder(ctx).create(name)
