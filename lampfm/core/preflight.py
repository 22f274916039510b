"""Precondition checks run before any mutating work."""
from lampfm.core.context import RunContext
from lampfm.core.errors import PreconditionError
from lampfm.core.logger import get_logger

logger = get_logger(__name__)


def check_preconditions(ctx: RunContext) -> None:
    """Fail fast unless running as root with network access.

    Raises:
        PreconditionError: Not privileged, or the probe address is unreachable
    """
    probe = ctx.backends.probe
    config = ctx.config

    if not probe.is_privileged():
        raise PreconditionError("This command must be run as root")

    if not probe.is_online(config.probe_host, config.probe_port, config.probe_timeout):
        raise PreconditionError(
            f"No network connection ({config.probe_host}:{config.probe_port} unreachable)"
        )

    logger.debug("Preconditions satisfied")
