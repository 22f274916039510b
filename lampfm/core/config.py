"""lampfm runtime configuration and settings."""
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from lampfm.core.errors import ConfigError

DEFAULT_CONFIG_FILE = Path("/etc/lampfm/lampfm.yml")

UPGRADE_POLICIES = ("none", "upgrade", "full")


@dataclass
class LampfmConfig:
    """Runtime configuration for lampfm operations.

    Attributes:
        log_file: Append-only log (default: /var/log/lampfm.log)
        log_max_bytes: Rotation threshold for the log (default: 5 MiB)
        log_backups: Rotated log files kept (default: 1)
        web_root: Parent directory of scaffolded sites
        web_user: Owner of scaffolded site files
        web_group: Group of scaffolded site files
        sites_available: Directory holding Apache virtual host files
        apache_log_dir: Log directory written into virtual hosts
        probe_host: Address used for the reachability probe
        probe_port: TCP port used for the reachability probe
        probe_timeout: Seconds before the reachability probe gives up
        upgrade_policy: none, upgrade, or full (dist-upgrade + cleanup)
        admin_email: Certbot contact, ``{domain}`` is substituted
        firewall_rules: ufw rules allowed by ``lampfm firewall``
        nodesource_url: NodeSource setup script for the nodejs component
        composer_url: Composer installer
        nvm_url: NVM install script
        command_timeout: Optional timeout for external commands (seconds)
    """

    log_file: str = "/var/log/lampfm.log"
    log_max_bytes: int = 5 * 1024 * 1024
    log_backups: int = 1

    web_root: str = "/var/www/html"
    web_user: str = "www-data"
    web_group: str = "www-data"
    sites_available: str = "/etc/apache2/sites-available"
    apache_log_dir: str = "${APACHE_LOG_DIR}"

    probe_host: str = "1.1.1.1"
    probe_port: int = 53
    probe_timeout: int = 3

    upgrade_policy: str = "full"
    admin_email: str = "admin@{domain}"
    firewall_rules: List[str] = field(default_factory=lambda: ["OpenSSH", "WWW Full", "ftp"])

    nodesource_url: str = "https://deb.nodesource.com/setup_lts.x"
    composer_url: str = "https://getcomposer.org/installer"
    nvm_url: str = "https://raw.githubusercontent.com/nvm-sh/nvm/v0.39.3/install.sh"

    command_timeout: Optional[int] = None

    def __post_init__(self):
        if self.upgrade_policy not in UPGRADE_POLICIES:
            raise ConfigError(
                f"upgrade_policy must be one of {', '.join(UPGRADE_POLICIES)}, "
                f"got '{self.upgrade_policy}'"
            )
        if self.log_max_bytes <= 0:
            raise ConfigError("log_max_bytes must be positive")
        if "{domain}" not in self.admin_email:
            raise ConfigError("admin_email must contain '{domain}'")

    def admin_email_for(self, domain: str) -> str:
        return self.admin_email.replace("{domain}", domain)

    def with_overrides(self, values: Dict[str, Any]) -> "LampfmConfig":
        """Return a copy with ``values`` applied, converting types as needed."""
        known = {f.name: f for f in fields(self)}
        converted = {}
        for key, value in values.items():
            if key not in known:
                raise ConfigError(f"Unknown configuration key: {key}")
            converted[key] = _convert(key, value, getattr(self, key))
        return replace(self, **converted)

    @classmethod
    def from_env(cls, base: Optional["LampfmConfig"] = None) -> "LampfmConfig":
        """Apply ``LAMPFM_<FIELD>`` environment variables.

        Environment variables:
            LAMPFM_LOG_FILE, LAMPFM_WEB_ROOT, LAMPFM_SITES_AVAILABLE,
            LAMPFM_UPGRADE_POLICY, LAMPFM_PROBE_TIMEOUT, ... (one per field)

        Returns:
            LampfmConfig instance with values from environment or ``base``
        """
        base = base or cls()
        values = {}
        for f in fields(cls):
            env_value = os.getenv(f"LAMPFM_{f.name.upper()}")
            if env_value is not None:
                values[f.name] = env_value
        return base.with_overrides(values)


def _convert(key: str, value: Any, current: Any) -> Any:
    if key == "command_timeout":
        if value in (None, "", "none"):
            return None
        return _as_int(key, value)
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        return str(value).lower() in ("1", "true", "yes", "y")
    if isinstance(current, int):
        return _as_int(key, value)
    if isinstance(current, list):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, list):
            return [str(item) for item in value]
        raise ConfigError(f"{key} must be a list")
    return str(value)


def _as_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got '{value}'") from None


def load_config(config_path: Optional[str] = None) -> LampfmConfig:
    """Build the configuration for one invocation.

    Precedence (lowest first): defaults, YAML file, environment.

    Args:
        config_path: Explicit YAML file; falls back to ``LAMPFM_CONFIG`` and
            then /etc/lampfm/lampfm.yml when it exists

    Raises:
        ConfigError: File missing/unreadable, not a mapping, or bad values
    """
    path = config_path or os.environ.get("LAMPFM_CONFIG")
    config = LampfmConfig()

    if path or DEFAULT_CONFIG_FILE.exists():
        config_file = Path(path) if path else DEFAULT_CONFIG_FILE
        if not config_file.exists():
            raise ConfigError(f"Config file not found: {config_file}")
        try:
            with open(config_file) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{config_file} must contain a mapping")
        config = config.with_overrides(data)

    return LampfmConfig.from_env(config)
