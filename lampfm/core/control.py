"""Service control workflow."""
from typing import Union

from lampfm.core.context import RunContext
from lampfm.core.errors import NotFoundError
from lampfm.core.logger import get_logger
from lampfm.models.results import ServiceAction

logger = get_logger(__name__)


def service_action(ctx: RunContext, action: Union[ServiceAction, str], service: str) -> ServiceAction:
    """Delegate ``action`` on ``service`` to the init system.

    No retry and no wait for the unit to settle; the init system's exit
    status is the only post-condition checked.

    Raises:
        ValueError: Unknown action
        NotFoundError: The init system does not know the unit
        CommandError: systemctl failed
    """
    action = ServiceAction(action)
    init = ctx.backends.init

    if not init.unit_exists(service):
        raise NotFoundError(f"Service '{service}' not found")

    logger.info(f"{action.value.capitalize()} {service}")
    init.control(action.value, service)
    return action
