"""Tests for the install workflow."""
import pytest

from lampfm.core.errors import CommandError, PreconditionError
from lampfm.core.installer import InstallWorkflow, install_all
from lampfm.models.results import InstallOutcome
from lampfm.services.memory import MemorySystem

PREFIXES = ("Running: ", "[DRY-RUN] ")


def strip_prefix(message):
    for prefix in PREFIXES:
        if message.startswith(prefix):
            return message[len(prefix):]
    return message


class TestTargets:
    """Install targets exactly the registry packages, in registry order."""

    def test_targets_every_registry_package(self, ctx, registry):
        report = install_all(ctx)
        assert report.targeted == list(registry.all_packages())

    def test_fresh_host_installs_everything(self, ctx, system, registry):
        report = install_all(ctx)

        assert [c[1] for c in system.calls_named("install")] == list(registry.all_packages())
        assert len(report.installed) == len(registry.all_packages())
        assert report.failed == []

    def test_component_packages(self, ctx, system):
        install_all(ctx, ["php"])
        assert [c[1] for c in system.calls_named("install")] == [
            "php", "libapache2-mod-php", "php-mysql", "php-cli",
        ]

    def test_subset_keeps_registry_order(self, ctx, system):
        report = install_all(ctx, ["git", "apache2"])
        assert report.targeted == ["apache2", "git"]

    def test_unknown_component(self, ctx, system):
        with pytest.raises(KeyError):
            install_all(ctx, ["nginx"])
        assert system.calls == []


class TestIdempotence:

    def test_second_run_installs_nothing(self, ctx, system):
        install_all(ctx)
        system.calls.clear()

        report = install_all(ctx)

        assert system.calls_named("install") == []
        assert report.installed == []
        assert all(r.outcome is InstallOutcome.ALREADY_PRESENT for r in report.packages)

    def test_present_packages_are_skipped(self, make_context):
        system = MemorySystem(installed={"git", "curl"})
        ctx = make_context(system)

        report = install_all(ctx, ["dev_tools", "git"])

        assert [c[1] for c in system.calls_named("install")] == ["build-essential"]
        assert {r.package for r in report.already_present} == {"git", "curl"}

    def test_already_installed_is_logged(self, ctx, log_reader):
        install_all(ctx, ["git"])
        install_all(ctx, ["git"])

        messages = [m for _, m in log_reader(ctx.config.log_file)]
        assert "git already installed" in messages


class TestBestEffort:

    def test_failure_does_not_stop_batch(self, make_context, registry):
        system = MemorySystem(broken_packages={"vsftpd"})
        ctx = make_context(system)

        report = install_all(ctx)

        assert [r.package for r in report.failed] == ["vsftpd"]
        assert "E: Unable to locate package vsftpd" in report.failed[0].error
        assert report.targeted == list(registry.all_packages())
        assert "vsftpd" not in system.installed
        assert "postfix" in system.installed

    def test_failure_is_logged(self, make_context, log_reader):
        ctx = make_context(MemorySystem(broken_packages={"git"}))

        install_all(ctx, ["git"])

        errors = [m for level, m in log_reader(ctx.config.log_file) if level == "ERROR"]
        assert len(errors) == 1
        assert errors[0].startswith("Failed to install git:")

    def test_refresh_failure_aborts(self, ctx, system, monkeypatch):
        def broken_refresh():
            raise CommandError(["apt-get", "update", "-qq"], 100, "Could not resolve host")

        monkeypatch.setattr(ctx.backends.packages, "refresh_index", broken_refresh)

        with pytest.raises(PreconditionError, match="Could not resolve host"):
            install_all(ctx)
        assert system.calls_named("install") == []


class TestUpgradePolicy:

    def test_full_policy(self, ctx, system):
        install_all(ctx, ["git"])
        assert [c[1] for c in system.calls_named("upgrade")] == [
            "upgrade", "dist-upgrade", "autoremove", "autoclean",
        ]

    def test_upgrade_policy(self, make_context, system):
        ctx = make_context(system, upgrade_policy="upgrade")
        install_all(ctx, ["git"])
        assert system.calls_named("upgrade") == [("upgrade", "upgrade")]

    def test_none_policy(self, make_context, system):
        ctx = make_context(system, upgrade_policy="none")
        install_all(ctx, ["git"])
        assert system.calls_named("upgrade") == []
        assert system.calls_named("refresh_index") == [("refresh_index",)]

    def test_skip_upgrade(self, ctx, system):
        install_all(ctx, ["git"], upgrade=False)
        assert system.calls_named("upgrade") == []

    def test_refresh_happens_first(self, ctx, system):
        install_all(ctx, ["git"])
        assert system.calls[0] == ("refresh_index",)


class TestPostInstall:

    def test_apache_rewrite_and_reload(self, ctx, system):
        report = install_all(ctx, ["apache2"])

        assert "rewrite" in system.modules
        assert system.calls_named("reload") == [("reload", "apache2")]
        assert [a.ok for a in report.actions] == [True, True]

    def test_docker_enabled_and_started(self, ctx, system):
        system.units.clear()
        install_all(ctx, ["docker"])

        assert ("control", "enable", "docker") in system.calls
        assert ("control", "start", "docker") in system.calls
        assert system.units["docker"].active

    def test_failed_action_is_reported(self, make_context):
        # apache2 fails to install, so there is no unit to reload
        ctx = make_context(MemorySystem(broken_packages={"apache2"}))

        report = install_all(ctx, ["apache2"])

        reload_action = report.actions[-1]
        assert reload_action.description == "Reload Apache"
        assert reload_action.ok is False

    def test_no_actions_for_unrelated_components(self, ctx):
        report = install_all(ctx, ["git"])
        assert report.actions == []


class TestNodeSource:

    def test_source_added_before_nodejs(self, ctx, system):
        install_all(ctx, ["nodejs"])

        names = [c[0] for c in system.calls]
        assert names.index("add_source") < names.index("install")
        assert "nodesource" in system.sources

    def test_existing_source_is_reused(self, make_context):
        system = MemorySystem(sources={"nodesource"})
        install_all(make_context(system), ["nodejs"])
        assert system.calls_named("add_source") == []


class TestDryRun:

    def test_no_mutations(self, make_context, system, registry):
        ctx = make_context(system, dry_run=True)

        report = install_all(ctx)

        assert system.calls == []
        assert system.installed == set()
        assert report.dry_run is True
        assert report.targeted == list(registry.all_packages())

    def test_dry_run_lines_printed(self, make_context, system):
        ctx = make_context(system, dry_run=True)
        install_all(ctx, ["git"])

        output = ctx.runner.console.file.getvalue()
        assert "[DRY-RUN] apt-get update -qq" in output
        assert "[DRY-RUN] apt-get install -y -qq git" in output

    def test_same_log_order_as_real_run(self, make_context, log_reader, registry):
        dry_ctx = make_context(MemorySystem(), dry_run=True, log_name="dry.log")
        install_all(dry_ctx)
        dry = [strip_prefix(m) for _, m in log_reader(dry_ctx.config.log_file)]

        real_system = MemorySystem(
            package_units={b.package: b.service for b in registry.bindings}
        )
        real_ctx = make_context(real_system, log_name="real.log")
        install_all(real_ctx)
        real = [strip_prefix(m) for _, m in log_reader(real_ctx.config.log_file)]

        assert dry == real


class TestSelect:

    def test_default_is_all(self, ctx, registry):
        assert InstallWorkflow(ctx).select() == list(registry.components)

    def test_duplicates_collapse(self, ctx):
        selected = InstallWorkflow(ctx).select(["git", "git"])
        assert [c.name for c in selected] == ["git"]
