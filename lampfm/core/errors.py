"""Exception types raised by lampfm workflows.

The CLI catches LampfmError, logs it and exits non-zero. Per-package install
failures are not raised; they are recorded in the InstallReport instead.
"""
from typing import List, Optional


class LampfmError(Exception):
    """Base class for all lampfm failures."""
    pass


class PreconditionError(LampfmError):
    """Raised when the host is not fit to run a command (root, network)."""
    pass


class ConflictError(LampfmError):
    """Raised when a site or virtual host already exists."""
    pass


class NotFoundError(LampfmError):
    """Raised when the init system does not know a unit."""
    pass


class RegistryError(LampfmError):
    """Raised when the component/service tables fail validation."""
    pass


class ConfigError(LampfmError):
    """Raised for unknown or malformed configuration values."""
    pass


class CommandError(LampfmError):
    """Raised when an external command exits non-zero or cannot be run."""

    def __init__(self, argv: List[str], returncode: int, stderr: Optional[str] = None):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        message = f"'{' '.join(self.argv)}' exited with status {returncode}"
        if self.stderr:
            message += f": {self.stderr.splitlines()[-1]}"
        super().__init__(message)
