"""Tests for service control."""
import pytest

from lampfm.core.control import service_action
from lampfm.core.errors import NotFoundError
from lampfm.models.results import ServiceAction
from lampfm.services.memory import MemorySystem, Unit


@pytest.fixture
def apache_system():
    return MemorySystem(units={"apache2": Unit(active=False, boot="disabled")})


class TestServiceAction:

    @pytest.mark.parametrize("action", ["start", "stop", "restart", "enable", "disable"])
    def test_delegates_to_init_system(self, make_context, apache_system, action):
        ctx = make_context(apache_system)

        result = service_action(ctx, action, "apache2")

        assert result is ServiceAction(action)
        assert apache_system.calls == [("control", action, "apache2")]

    def test_start_and_enable(self, make_context, apache_system):
        ctx = make_context(apache_system)

        service_action(ctx, ServiceAction.START, "apache2")
        service_action(ctx, ServiceAction.ENABLE, "apache2")

        unit = apache_system.units["apache2"]
        assert unit.active and unit.boot == "enabled"

    def test_unknown_service(self, make_context, apache_system):
        ctx = make_context(apache_system)

        with pytest.raises(NotFoundError, match="Service 'nginx' not found"):
            service_action(ctx, "start", "nginx")
        assert apache_system.calls == []

    def test_unknown_action(self, make_context, apache_system):
        with pytest.raises(ValueError):
            service_action(make_context(apache_system), "reboot", "apache2")

    def test_logged(self, make_context, apache_system, log_reader):
        ctx = make_context(apache_system)

        service_action(ctx, "restart", "apache2")

        messages = [m for _, m in log_reader(ctx.config.log_file)]
        assert messages == ["Restart apache2", "Running: systemctl restart apache2"]

    def test_dry_run(self, make_context, apache_system):
        ctx = make_context(apache_system, dry_run=True)

        service_action(ctx, "stop", "apache2")

        assert apache_system.calls == []
        assert "[DRY-RUN] systemctl stop apache2" in ctx.runner.console.file.getvalue()

    def test_past_tense(self):
        assert ServiceAction.STOP.past_tense == "stopped"
        assert ServiceAction.ENABLE.past_tense == "enabled"
