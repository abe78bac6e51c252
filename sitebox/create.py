"""The ``create`` command: run the site wizard and provision the result."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console

from sitebox.config import Config
from sitebox.environment import git_command_exists
from sitebox.models import ProvisionAction, WizardResult
from sitebox.prompts import RichPrompter
from sitebox.sites import SiteError, SiteRegistry
from sitebox.stack import StackError, StackManager
from sitebox.wizard import Prompter, SiteWizard, WizardCancelled

logger = logging.getLogger(__name__)


class SystemNotRunningError(Exception):
    """The serving stack is not up."""
    pass


class ProvisioningError(Exception):
    """Creating, updating or reloading a site failed."""
    pass


def require_system_up(stack: StackManager) -> None:
    if not stack.is_running():
        raise SystemNotRunningError(
            "The sitebox stack is not running. Start it before creating sites."
        )


def dispatch(result: WizardResult, registry: SiteRegistry, stack: StackManager) -> None:
    """Hand a finished site spec to the provisioner, then reload the stack.

    Plain PHP sites only get their serving config regenerated; every other
    type is fully created.
    """
    try:
        if result.action is ProvisionAction.UPDATE_CONFIG:
            logger.info("Updating nginx config for %s", result.name)
            registry.update_sites_nginx_config(result.name, result.spec)
        else:
            logger.info("Creating site %s", result.name)
            registry.create_site(result.name, result.spec)
        stack.reload()
    except (SiteError, StackError, OSError) as e:
        raise ProvisioningError(f"Provisioning {result.name} failed: {e}") from e


def create_command(
    config: Config,
    site: Optional[str] = None,
    console: Optional[Console] = None,
    prompter: Optional[Prompter] = None,
    registry: Optional[SiteRegistry] = None,
    stack: Optional[StackManager] = None,
    git_available: Optional[bool] = None,
) -> Optional[WizardResult]:
    """Create a new local site interactively.

    Returns the wizard result, or None if the operator cancelled. Raises
    SystemNotRunningError, SiteExistsError or ProvisioningError.
    """
    console = console or Console()
    registry = registry or SiteRegistry(config.sites_directory)
    stack = stack or StackManager(config)
    if git_available is None:
        git_available = git_command_exists()

    require_system_up(stack)

    wizard = SiteWizard(
        prompter=prompter or RichPrompter(console),
        site_exists=registry.site_exists,
        git_available=git_available,
        php_versions=config.php.available_versions,
        default_php_version=config.php.default_version,
        tld=config.tld,
    )

    try:
        result = wizard.run(site)
    except WizardCancelled:
        logger.debug("Wizard cancelled")
        console.print()
        return None

    dispatch(result, registry, stack)

    verb = "Updated" if result.action is ProvisionAction.UPDATE_CONFIG else "Created"
    console.print(
        f"\n[green]✓[/green] {verb} [bold]{result.name}[/bold] "
        f"({result.spec.site_type.label}) at [bold]http://{result.spec.domain}[/bold]"
    )
    return result
