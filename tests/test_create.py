"""Tests for the create command and provisioning dispatch."""

import pytest
import yaml
from rich.console import Console

from sitebox.create import (
    ProvisioningError,
    SystemNotRunningError,
    create_command,
    dispatch,
)
from sitebox.models import PHPSiteSpec, ProvisionAction, ProxySiteSpec, WizardResult
from sitebox.sites import SITE_CONFIG_NAME
from sitebox.stack import StackError
from sitebox.wizard import SiteExistsError


@pytest.fixture
def console():
    return Console(record=True, width=120)


class TestCreateCommand:
    def test_proxy_site_is_created_and_stack_reloaded(self, config, registry, stack, scripted, console):
        prompter = scripted({
            "Type of site:": ["proxy"],
            "Name of local site directory:": ["myproxy"],
            "Local domain name to use:": ["myproxy.dev"],
            "Proxy port:": ["8080"],
        })
        result = create_command(
            config, console=console, prompter=prompter,
            registry=registry, stack=stack, git_available=False,
        )

        assert result.spec == ProxySiteSpec(domain="myproxy.dev", proxy_port=8080)
        assert [c[0] for c in registry.calls] == ["create_site"]
        assert stack.reloads == 1
        site_config = yaml.safe_load((config.sites_directory / "myproxy" / SITE_CONFIG_NAME).read_text())
        assert site_config == {"domain": "myproxy.dev", "type": "proxy", "proxy_port": 8080}
        assert "Created" in console.export_text()

    def test_php_site_only_updates_nginx_config(self, config, registry, stack, scripted, console):
        prompter = scripted({
            "Type of site:": ["php"],
            "Name of local site directory:": ["legacy"],
            "Local domain name to use:": [None],
            "PHP version:": [None],
            "Create a MySQL database?": [True],
        })
        result = create_command(
            config, console=console, prompter=prompter,
            registry=registry, stack=stack, git_available=False,
        )

        assert result.action is ProvisionAction.UPDATE_CONFIG
        assert [c[0] for c in registry.calls] == ["update_sites_nginx_config"]
        assert stack.reloads == 1
        assert not (config.sites_directory / "legacy" / "public").exists()

    def test_stack_down_fails_before_prompting(self, config, registry, scripted, console, make_stack):
        prompter = scripted({})
        with pytest.raises(SystemNotRunningError):
            create_command(
                config, console=console, prompter=prompter,
                registry=registry, stack=make_stack(running=False), git_available=False,
            )
        assert prompter.asked == []

    def test_supplied_name_collision_fails_before_prompting(self, config, registry, stack, scripted, console):
        (config.sites_directory / "taken").mkdir()
        prompter = scripted({})
        with pytest.raises(SiteExistsError):
            create_command(
                config, site="taken", console=console, prompter=prompter,
                registry=registry, stack=stack, git_available=False,
            )
        assert prompter.asked == []
        assert registry.calls == []
        assert stack.reloads == 0

    def test_cancellation_dispatches_nothing(self, config, registry, stack, scripted, console):
        prompter = scripted({
            "Type of site:": ["laravel"],
            "Name of local site directory:": [KeyboardInterrupt()],
        })
        result = create_command(
            config, console=console, prompter=prompter,
            registry=registry, stack=stack, git_available=True,
        )

        assert result is None
        assert registry.calls == []
        assert stack.reloads == 0


class TestDispatch:
    def test_reload_failure_is_reported_as_provisioning_error(self, registry, make_stack):
        stack = make_stack(fail_reload=StackError("restart failed"))
        result = WizardResult(name="api", spec=ProxySiteSpec(domain="api.dev", proxy_port=3000))
        with pytest.raises(ProvisioningError) as exc_info:
            dispatch(result, registry, stack)

        assert isinstance(exc_info.value.__cause__, StackError)
        assert "restart failed" in str(exc_info.value)

    def test_create_failure_skips_reload(self, registry, stack):
        (registry.sites_directory / "api").mkdir()
        result = WizardResult(name="api", spec=ProxySiteSpec(domain="api.dev", proxy_port=3000))
        with pytest.raises(ProvisioningError):
            dispatch(result, registry, stack)
        assert stack.reloads == 0

    def test_update_path_does_not_create(self, registry, stack):
        result = WizardResult(
            name="legacy",
            spec=PHPSiteSpec(domain="legacy.dev", php_version="8.2"),
            action=ProvisionAction.UPDATE_CONFIG,
        )
        dispatch(result, registry, stack)
        assert [c[0] for c in registry.calls] == ["update_sites_nginx_config"]
