"""Site creation wizard.

The wizard asks question groups in a fixed order. Which groups run after
the domain depends only on the chosen site type, so the routing lives in
``next_group`` and can be inspected without any prompting. Within a
group, later questions may derive their defaults from earlier answers.

Input questions are re-asked until their validator accepts the answer.
Ctrl-C or EOF at any prompt raises ``WizardCancelled`` and nothing is
assembled.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from sitebox import validators
from sitebox.models import (
    LaravelSiteSpec,
    PHPSiteSpec,
    ProvisionAction,
    ProxySiteSpec,
    SiteSpec,
    SiteType,
    WizardResult,
    WordPressSiteSpec,
)


class WizardCancelled(Exception):
    """The operator aborted the wizard."""
    pass


class SiteExistsError(Exception):
    """A site name supplied up front is already taken."""
    pass


class Group(Enum):
    BASIC = "basic"
    DOMAIN = "domain"
    PROXY = "proxy"
    PHP_VERSION = "php-version"
    WORDPRESS = "wordpress"
    LARAVEL = "laravel"
    PHP = "php"
    DONE = "done"


class QuestionKind(Enum):
    INPUT = "input"
    LIST = "list"
    CONFIRM = "confirm"


@dataclass
class Question:
    name: str
    kind: QuestionKind
    message: str
    default: Any = None
    choices: list = field(default_factory=list)  # (value, label) pairs
    validate: Optional[Callable[[str], Optional[str]]] = None
    when: Optional[Callable[[dict, dict], bool]] = None  # (answers, capabilities)

    def resolve_default(self, answers: dict) -> Any:
        if callable(self.default):
            return self.default(answers)
        return self.default

    def applies(self, answers: dict, capabilities: dict) -> bool:
        return self.when is None or self.when(answers, capabilities)


class Prompter(ABC):
    """Interface the wizard uses to talk to the operator."""

    @abstractmethod
    def ask_input(self, message: str, default: Optional[str] = None) -> str:
        ...

    @abstractmethod
    def ask_list(self, message: str, choices: list, default: Optional[str] = None) -> str:
        ...

    @abstractmethod
    def ask_confirm(self, message: str, default: bool = False) -> bool:
        ...

    @abstractmethod
    def show_error(self, message: str) -> None:
        ...


_TYPE_BRANCHES = {
    SiteType.WORDPRESS: Group.WORDPRESS,
    SiteType.LARAVEL: Group.LARAVEL,
    SiteType.PHP: Group.PHP,
}


def next_group(current: Group, site_type: SiteType) -> Group:
    """Return the group that follows *current* for a site of *site_type*."""
    if current is Group.BASIC:
        return Group.DOMAIN
    if current is Group.DOMAIN:
        return Group.PROXY if site_type is SiteType.PROXY else Group.PHP_VERSION
    if current is Group.PHP_VERSION:
        return _TYPE_BRANCHES.get(site_type, Group.DONE)
    return Group.DONE


def group_plan(site_type: SiteType) -> list[Group]:
    """The ordered groups a wizard run visits for *site_type*."""
    plan = []
    group = Group.BASIC
    while group is not Group.DONE:
        plan.append(group)
        group = next_group(group, site_type)
    return plan


def default_domain(name: str, tld: str) -> str:
    # Only the first underscore is replaced.
    return f"{name}.{tld}".replace("_", "-", 1).lower()


def provision_action(site_type: SiteType) -> ProvisionAction:
    """Plain PHP sites only get their serving config regenerated."""
    if site_type is SiteType.PHP:
        return ProvisionAction.UPDATE_CONFIG
    return ProvisionAction.CREATE


def assemble_spec(site_type: SiteType, answers: dict) -> SiteSpec:
    """Build the typed site spec from the answers of a finished run."""
    domain = answers["domain"]

    if site_type is SiteType.PROXY:
        return ProxySiteSpec(domain=domain, proxy_port=int(answers["proxy_port"]))

    php_version = str(answers["php_version"])

    if site_type is SiteType.WORDPRESS:
        return WordPressSiteSpec(
            domain=domain,
            php_version=php_version,
            uploads_proxy_url=answers.get("uploads_proxy_url", "").rstrip("/"),
            enable_object_cache=bool(answers.get("enable_object_cache", False)),
            content_repository_url=answers.get("wp_content_repo_url") or None,
        )
    if site_type is SiteType.LARAVEL:
        return LaravelSiteSpec(
            domain=domain,
            php_version=php_version,
            storage_proxy_url=answers.get("storage_proxy_url", "").rstrip("/"),
            repository_url=answers.get("repo_url") or None,
        )
    return PHPSiteSpec(
        domain=domain,
        php_version=php_version,
        create_database=bool(answers.get("create_database", False)),
    )


class SiteWizard:
    """Drives the question groups and assembles the resulting site spec."""

    def __init__(
        self,
        prompter: Prompter,
        site_exists: Callable[[str], bool],
        git_available: bool,
        php_versions: list[str],
        default_php_version: str,
        tld: str = "dev",
    ):
        self.prompter = prompter
        self.site_exists = site_exists
        self.capabilities = {"git": git_available}
        self.php_versions = list(php_versions)
        self.default_php_version = default_php_version
        self.tld = tld
        self.visited: list[Group] = []

    # ── Entry points ─────────────────────────────────────────────────

    def check_supplied_name(self, site: str) -> str:
        """Accept a name given on the command line.

        Only the registry collision is checked here; the character rules
        applied to prompted names are not.
        """
        if self.site_exists(site):
            raise SiteExistsError(f'The site directory "{site}" already exists.')
        return site

    def run(self, site: Optional[str] = None) -> WizardResult:
        """Run every group for the chosen site type and return the result."""
        supplied = self.check_supplied_name(site) if site else None
        self.visited = []
        answers: dict = {}

        group = Group.BASIC
        site_type = SiteType.PHP
        while group is not Group.DONE:
            self.visited.append(group)
            for question in self.questions(group, supplied):
                if question.applies(answers, self.capabilities):
                    answers[question.name] = self._ask(question, answers)
            if group is Group.BASIC:
                site_type = SiteType(answers["type"])
                answers["name"] = supplied or answers["name"]
            group = next_group(group, site_type)

        return WizardResult(
            name=answers["name"],
            spec=assemble_spec(site_type, answers),
            action=provision_action(site_type),
        )

    # ── Question groups ──────────────────────────────────────────────

    def questions(self, group: Group, supplied: Optional[str] = None) -> list[Question]:
        builders = {
            Group.BASIC: lambda: self._basic_questions(supplied),
            Group.DOMAIN: self._domain_questions,
            Group.PROXY: self._proxy_questions,
            Group.PHP_VERSION: self._php_version_questions,
            Group.WORDPRESS: self._wordpress_questions,
            Group.LARAVEL: self._laravel_questions,
            Group.PHP: self._php_questions,
        }
        return builders[group]()

    def _basic_questions(self, supplied: Optional[str]) -> list[Question]:
        return [
            Question(
                name="type",
                kind=QuestionKind.LIST,
                message="Type of site:",
                choices=[(t.value, t.label) for t in SiteType],
                default=SiteType.PHP.value,
            ),
            Question(
                name="name",
                kind=QuestionKind.INPUT,
                message="Name of local site directory:",
                validate=lambda a: validators.safe_name(a, self.site_exists),
                when=lambda _answers, _caps: supplied is None,
            ),
        ]

    def _domain_questions(self) -> list[Question]:
        return [
            Question(
                name="domain",
                kind=QuestionKind.INPUT,
                message="Local domain name to use:",
                default=lambda a: default_domain(a["name"], self.tld),
                validate=validators.fqdn,
            ),
        ]

    def _proxy_questions(self) -> list[Question]:
        return [
            Question(
                name="proxy_port",
                kind=QuestionKind.INPUT,
                message="Proxy port:",
                validate=validators.positive_int,
            ),
        ]

    def _php_version_questions(self) -> list[Question]:
        return [
            Question(
                name="php_version",
                kind=QuestionKind.LIST,
                message="PHP version:",
                choices=[(v, v) for v in self.php_versions],
                default=self.default_php_version,
            ),
        ]

    def _wordpress_questions(self) -> list[Question]:
        return [
            Question(
                name="uploads_proxy_url",
                kind=QuestionKind.INPUT,
                message="URL to proxy uploads from:",
                default="",
                validate=validators.optional_url,
            ),
            Question(
                name="enable_object_cache",
                kind=QuestionKind.CONFIRM,
                message="Enable Object Cache?",
                default=False,
            ),
            Question(
                name="wp_content_repo_url",
                kind=QuestionKind.INPUT,
                message="Git repository to clone for the wp-content directory:",
                default="",
                when=lambda _answers, caps: caps["git"],
            ),
        ]

    def _laravel_questions(self) -> list[Question]:
        return [
            Question(
                name="storage_proxy_url",
                kind=QuestionKind.INPUT,
                message="URL to proxy storage from:",
                default="",
                validate=validators.optional_url,
            ),
            Question(
                name="repo_url",
                kind=QuestionKind.INPUT,
                message="Git repository to clone:",
                default="",
                when=lambda _answers, caps: caps["git"],
            ),
        ]

    def _php_questions(self) -> list[Question]:
        return [
            Question(
                name="create_database",
                kind=QuestionKind.CONFIRM,
                message="Create a MySQL database?",
                default=False,
            ),
        ]

    # ── Asking ───────────────────────────────────────────────────────

    def _ask(self, question: Question, answers: dict) -> Any:
        default = question.resolve_default(answers)
        try:
            if question.kind is QuestionKind.CONFIRM:
                return self.prompter.ask_confirm(question.message, default=bool(default))
            if question.kind is QuestionKind.LIST:
                return self.prompter.ask_list(question.message, question.choices, default=default)
            while True:
                answer = self.prompter.ask_input(question.message, default=default)
                reason = question.validate(answer) if question.validate else None
                if reason is None:
                    return answer
                self.prompter.show_error(reason)
        except (KeyboardInterrupt, EOFError) as e:
            raise WizardCancelled() from e
