"""Data models for sitebox."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class SiteType(Enum):
    LARAVEL = "laravel"
    PHP = "php"
    PROXY = "proxy"
    WORDPRESS = "wordpress"

    @property
    def label(self) -> str:
        return {
            SiteType.LARAVEL: "Laravel",
            SiteType.PHP: "PHP",
            SiteType.PROXY: "Proxy",
            SiteType.WORDPRESS: "WordPress",
        }[self]


class ProvisionAction(Enum):
    CREATE = "create"                # full provisioning
    UPDATE_CONFIG = "update-config"  # serving config only


@dataclass(frozen=True)
class ProxySiteSpec:
    """A site that reverse-proxies to a local port."""
    domain: str
    proxy_port: int
    site_type: SiteType = field(default=SiteType.PROXY, init=False)

    def to_config(self) -> dict:
        return {
            "domain": self.domain,
            "type": self.site_type.value,
            "proxy_port": self.proxy_port,
        }


@dataclass(frozen=True)
class PHPSiteSpec:
    domain: str
    php_version: str
    create_database: bool = False
    site_type: SiteType = field(default=SiteType.PHP, init=False)

    def to_config(self) -> dict:
        return {
            "domain": self.domain,
            "type": self.site_type.value,
            "default_php_version": self.php_version,
            "create_database": self.create_database,
        }


@dataclass(frozen=True)
class WordPressSiteSpec:
    domain: str
    php_version: str
    uploads_proxy_url: str = ""
    enable_object_cache: bool = False
    content_repository_url: Optional[str] = None
    site_type: SiteType = field(default=SiteType.WORDPRESS, init=False)

    def to_config(self) -> dict:
        return {
            "domain": self.domain,
            "type": self.site_type.value,
            "default_php_version": self.php_version,
            "uploads_proxy_url": self.uploads_proxy_url,
            "enable_object_cache": self.enable_object_cache,
            "wp_content_repo_url": self.content_repository_url,
        }


@dataclass(frozen=True)
class LaravelSiteSpec:
    domain: str
    php_version: str
    storage_proxy_url: str = ""
    repository_url: Optional[str] = None
    site_type: SiteType = field(default=SiteType.LARAVEL, init=False)

    def to_config(self) -> dict:
        return {
            "domain": self.domain,
            "type": self.site_type.value,
            "default_php_version": self.php_version,
            "laravel_storage_proxy_url": self.storage_proxy_url,
            "repo_url": self.repository_url,
        }


SiteSpec = Union[ProxySiteSpec, PHPSiteSpec, WordPressSiteSpec, LaravelSiteSpec]


@dataclass(frozen=True)
class WizardResult:
    """Outcome of one wizard run: which site, what it is, how to provision it."""
    name: str
    spec: SiteSpec
    action: ProvisionAction = ProvisionAction.CREATE
