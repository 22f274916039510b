"""One-shot provisioning tasks: SSL, firewall, database, developer tools."""
import re

from lampfm.core.context import RunContext
from lampfm.core.errors import NotFoundError
from lampfm.core.installer import InstallWorkflow
from lampfm.core.logger import get_logger
from lampfm.models.results import InstallReport

logger = get_logger(__name__)

IDENTIFIER = re.compile(r"^[A-Za-z0-9_]+$")
COMPOSER_BIN = "/usr/local/bin/composer"


def setup_ssl(ctx: RunContext, domain: str) -> str:
    """Obtain a certificate for ``domain`` through certbot.

    Returns:
        The contact address passed to certbot
    """
    if not domain:
        raise ValueError("Domain is required")
    email = ctx.config.admin_email_for(domain)
    logger.info(f"Obtaining SSL certificate for {domain}")
    ctx.backends.certs.obtain(domain, email)
    return email


def configure_firewall(ctx: RunContext) -> None:
    """Allow the configured ufw rules and enable the firewall."""
    firewall = ctx.backends.firewall
    logger.info("Configuring UFW")
    for rule in ctx.config.firewall_rules:
        firewall.allow(rule)
    firewall.enable()


def configure_fail2ban(ctx: RunContext) -> None:
    """Enable and start fail2ban.

    Raises:
        NotFoundError: fail2ban is not installed
    """
    init = ctx.backends.init
    if not init.unit_exists("fail2ban"):
        raise NotFoundError("Service 'fail2ban' not found, install the fail2ban component first")
    logger.info("Enabling Fail2Ban")
    init.control("enable", "fail2ban")
    init.control("start", "fail2ban")


def create_database(ctx: RunContext, name: str, user: str, password: str) -> None:
    """Create a database and a local user with full privileges on it.

    Raises:
        ValueError: Name or user is not a plain identifier, or password empty
    """
    for label, value in (("database name", name), ("user name", user)):
        if not IDENTIFIER.match(value or ""):
            raise ValueError(f"Invalid {label}: '{value}' (letters, digits and _ only)")
    if not password:
        raise ValueError("Password is required")

    secret = password.replace("\\", "\\\\").replace("'", "\\'")
    sql = (
        f"CREATE DATABASE `{name}`; "
        f"CREATE USER '{user}'@'localhost' IDENTIFIED BY '{secret}'; "
        f"GRANT ALL ON `{name}`.* TO '{user}'@'localhost'; "
        "FLUSH PRIVILEGES;"
    )
    logger.info(f"Creating database {name} for user {user}")
    ctx.backends.database.execute(sql)


def install_composer(ctx: RunContext) -> bool:
    """Install Composer globally unless it is already there.

    Returns:
        False if Composer was already installed
    """
    if ctx.backends.files.exists(COMPOSER_BIN):
        logger.info("Composer already installed")
        return False
    logger.info("Installing Composer")
    ctx.backends.installer.run_script(
        ctx.config.composer_url,
        interpreter="php",
        args="--install-dir=/usr/local/bin --filename=composer",
    )
    return True


def install_nvm(ctx: RunContext) -> None:
    logger.info("Installing NVM")
    ctx.backends.installer.run_script(ctx.config.nvm_url)


def install_docker(ctx: RunContext) -> InstallReport:
    """Install the docker component and start the daemon."""
    logger.info("Installing Docker & Compose")
    return InstallWorkflow(ctx).run(["docker"], upgrade=False)
